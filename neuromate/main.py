# neuromate backend api
# fastapi app with gemini journal analysis and local-storage synced stores

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from neuromate.config import settings
from neuromate.dependencies import goal_store, journal_store
from neuromate.routers import clinical, goals, journal, notifications

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: reload entries and goals from local storage."""
    logger.info("Starting NeuroMate backend...")
    journal_store.load()
    goal_store.load()
    logger.info(f"NeuroMate backend ready ({len(journal_store)} entries, {len(goal_store)} goals)")
    yield
    logger.info("Shutting down NeuroMate backend...")


app = FastAPI(
    title="NeuroMate API",
    description="Backend API for NeuroMate - journal analysis and goal tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# cors - allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
app.include_router(journal.router)
app.include_router(goals.router)
app.include_router(notifications.router)
app.include_router(clinical.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "neuromate-api"}
