"""Resumes route group."""

from src.talentdesk.features.resumes.handlers import router

__all__ = ["router"]
