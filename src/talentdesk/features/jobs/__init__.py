"""Jobs route group."""

from src.talentdesk.features.jobs.handlers import router

__all__ = ["router"]
