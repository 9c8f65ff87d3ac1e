# journal models - stored entries, analysis results and access-scoped views
# the user-facing view has no notes field; clinicians get a separate projection

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from neuromate.config import settings


class TherapistNotes(BaseModel):
    """confidential notes for a qualified therapist - never shown to the user"""
    core_issues: str = Field(..., alias="coreIssues")
    potential_diagnosis: str = Field(..., alias="potentialDiagnosis")
    therapeutic_suggestions: str = Field(..., alias="therapeuticSuggestions")

    model_config = {"populate_by_name": True, "frozen": True}


class AnalysisResult(BaseModel):
    """normalized provider output after fallbacks were applied"""
    sentiment: str
    feedback: str
    therapist_notes: Optional[TherapistNotes] = Field(None, alias="therapistNotes")
    suggested_goals: list[str] = Field(default_factory=list, alias="suggestedGoals")

    model_config = {"populate_by_name": True}


class JournalEntry(BaseModel):
    """stored journal entry - immutable once created"""
    id: str
    timestamp: datetime
    text: str
    sentiment: Optional[str] = None
    feedback: Optional[str] = None
    therapist_notes: Optional[TherapistNotes] = Field(None, alias="therapistNotes")
    suggested_goals: Optional[list[str]] = Field(None, alias="suggestedGoals")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # stored values without an offset are utc
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    @classmethod
    def from_analysis(cls, entry_id: str, timestamp: datetime, text: str,
                      analysis: Optional[AnalysisResult] = None) -> "JournalEntry":
        """build an entry, with analysis fields only when analysis succeeded"""
        if analysis is None:
            return cls(id=entry_id, timestamp=timestamp, text=text)
        return cls(
            id=entry_id,
            timestamp=timestamp,
            text=text,
            sentiment=analysis.sentiment,
            feedback=analysis.feedback,
            therapist_notes=analysis.therapist_notes,
            suggested_goals=list(analysis.suggested_goals),
        )


class JournalCreate(BaseModel):
    """payload for a new journal entry"""
    entry_text: str = Field(..., alias="entryText", min_length=settings.JOURNAL_MIN_LENGTH,
                            max_length=settings.JOURNAL_MAX_LENGTH,
                            description="journal entry text")

    model_config = {"populate_by_name": True}


class JournalEntryView(BaseModel):
    """user-facing entry. extra fields are rejected so notes can't leak in."""
    id: str
    timestamp: datetime
    text: str
    sentiment: Optional[str] = None
    feedback: Optional[str] = None
    suggested_goals: Optional[list[str]] = Field(None, alias="suggestedGoals")

    model_config = {"populate_by_name": True, "extra": "forbid"}

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "JournalEntryView":
        # an empty suggestion list renders the same as no list
        return cls(
            id=entry.id,
            timestamp=entry.timestamp,
            text=entry.text,
            sentiment=entry.sentiment,
            feedback=entry.feedback,
            suggested_goals=list(entry.suggested_goals) if entry.suggested_goals else None,
        )


class ClinicalView(BaseModel):
    """clinician projection of an entry, including the confidential notes"""
    id: str
    timestamp: datetime
    text: str
    sentiment: Optional[str] = None
    therapist_notes: Optional[TherapistNotes] = Field(None, alias="therapistNotes")

    model_config = {"populate_by_name": True, "extra": "forbid"}

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "ClinicalView":
        return cls(
            id=entry.id,
            timestamp=entry.timestamp,
            text=entry.text,
            sentiment=entry.sentiment,
            therapist_notes=entry.therapist_notes,
        )
