# analysis service - langchain + gemini journal analysis
# asks the model for sentiment, user feedback, confidential therapist notes
# and 1-3 suggested goals, then normalizes whatever comes back
#
# the provider is free-form and may ignore the requested shape:
#   - missing sentiment or feedback -> fixed neutral fallback, nothing else kept
#   - missing/partial therapist notes -> notes omitted, the rest kept
#   - missing goals -> empty list
# a raised provider error becomes AnalysisUnavailable (no retry)

import json
import logging
import re
from typing import Any, Optional

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import StrOutputParser

from neuromate.config import settings
from neuromate.errors import AnalysisUnavailable
from neuromate.models.journal import AnalysisResult, TherapistNotes

logger = logging.getLogger(__name__)

DEFAULT_SENTIMENT = "Neutral"
DEFAULT_FEEDBACK = "Thank you for sharing your thoughts. Remember to be kind to yourself today."


def fallback_result() -> AnalysisResult:
    """the gentle default used when the model's user-facing output is unusable"""
    return AnalysisResult(sentiment=DEFAULT_SENTIMENT, feedback=DEFAULT_FEEDBACK)


def get_llm() -> ChatGoogleGenerativeAI:
    """create a gemini llm instance for journal analysis"""
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=settings.ANALYSIS_TEMPERATURE,
        max_output_tokens=2048,
    )


# analysis prompt - user feedback, confidential therapist notes, goal suggestions

ANALYSIS_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are NeuroMate, an assistant trained in analyzing journal entries with psychological insight.
Your task is threefold:
1. Provide a deeply empathetic and supportive response directly to the user who wrote the entry.
2. Generate separate, analytical notes intended ONLY for a qualified therapist. These MUST stay out of the user feedback.
3. Suggest 1-3 positive, actionable goals for the user that counteract negative patterns or promote well-being.

FOR THE USER (field "feedback"):
- Warm, validating, and supportive. Use "I" statements ("I hear how challenging this is for you").
- Acknowledge and normalize feelings without judgment.
- No clinical jargon, diagnosis, or strong advice. A gentle reflection question is fine.

SENTIMENT (field "sentiment"):
- The primary emotional tone, specific and nuanced (e.g. "cautiously optimistic", "frustrated but resilient").

FOR THE THERAPIST ONLY (object "therapistNotes") - CONFIDENTIAL:
- "coreIssues": underlying psychological themes or patterns (cognitive distortions, self-worth, attachment).
- "potentialDiagnosis": cautious diagnostic considerations ("suggests features of...", "consistent with...").
  State explicitly that this is not a diagnosis.
- "therapeuticSuggestions": specific evidence-based approaches (CBT, DBT, ACT, MBSR...) linked to the core issues.

GOALS (list "suggestedGoals"):
- 1-3 short, gentle, user-friendly invitations ("Maybe try noticing one thing you appreciate about yourself today?").
- Focus on self-compassion, mindfulness, positive reframing, or small behavioral changes."""),
    ("human", """Journal Entry:
'''
{entry_text}
'''

RESPOND WITH ONLY A VALID JSON OBJECT IN THIS EXACT FORMAT:
{{"sentiment": "...", "feedback": "...", "therapistNotes": {{"coreIssues": "...", "potentialDiagnosis": "...", "therapeuticSuggestions": "..."}}, "suggestedGoals": ["..."]}}"""),
])

_chain = None


def get_analysis_chain():
    """get or create the journal analysis chain"""
    global _chain
    if _chain is None:
        llm = get_llm()
        _chain = ANALYSIS_PROMPT | llm | StrOutputParser()
    return _chain


# tries json.loads first, then the outermost {...} block
def parse_json_response(response_text: Any) -> dict:
    if not isinstance(response_text, str):
        return {}
    text = response_text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        data = json.loads(text)
        return data if isinstance(data, dict) else {}
    except json.JSONDecodeError:
        pass

    match = re.search(r"\{.*\}", text, re.DOTALL)
    if match:
        try:
            data = json.loads(match.group(0))
            return data if isinstance(data, dict) else {}
        except json.JSONDecodeError:
            pass

    logger.warning("Could not parse analysis response as json")
    return {}


def _clean_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _parse_notes(raw: Any) -> Optional[TherapistNotes]:
    if not isinstance(raw, dict):
        return None
    core = _clean_str(raw.get("coreIssues", raw.get("core_issues")))
    diagnosis = _clean_str(raw.get("potentialDiagnosis", raw.get("potential_diagnosis")))
    suggestions = _clean_str(raw.get("therapeuticSuggestions", raw.get("therapeutic_suggestions")))
    if not (core and diagnosis and suggestions):
        return None
    return TherapistNotes(
        core_issues=core,
        potential_diagnosis=diagnosis,
        therapeutic_suggestions=suggestions,
    )


def _parse_goals(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    goals = [g.strip() for g in raw if isinstance(g, str) and g.strip()]
    return goals[:settings.MAX_SUGGESTED_GOALS]


def normalize_analysis(data: dict) -> AnalysisResult:
    """apply fallbacks to a raw provider structure"""
    sentiment = _clean_str(data.get("sentiment"))
    feedback = _clean_str(data.get("feedback"))
    if not sentiment or not feedback:
        logger.error("Analysis failed to produce valid user output structure, using fallback")
        return fallback_result()

    notes = _parse_notes(data.get("therapistNotes", data.get("therapist_notes")))
    if notes is None:
        logger.warning("Analysis did not generate therapist notes for this entry")

    return AnalysisResult(
        sentiment=sentiment,
        feedback=feedback,
        therapist_notes=notes,
        suggested_goals=_parse_goals(data.get("suggestedGoals", data.get("suggested_goals"))),
    )


class AnalysisService:
    """analysis requester. the chain can be injected (tests use a fake)."""

    def __init__(self, chain=None):
        self._chain = chain

    @property
    def chain(self):
        if self._chain is None:
            self._chain = get_analysis_chain()
        return self._chain

    async def analyze(self, entry_text: str) -> AnalysisResult:
        try:
            raw = await self.chain.ainvoke({"entry_text": entry_text})
        except Exception as e:
            logger.error(f"Journal analysis request failed: {e}")
            raise AnalysisUnavailable(str(e)) from e

        result = normalize_analysis(parse_json_response(raw))
        logger.info(f"Journal analyzed: sentiment={result.sentiment}, goals={len(result.suggested_goals)}")
        return result
