"""Auth route group."""

from src.talentdesk.features.auth.handlers import router

__all__ = ["router"]
