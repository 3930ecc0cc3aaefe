"""Vendors route group."""

from src.talentdesk.features.vendors.handlers import router

__all__ = ["router"]
