"""Shared services module for external integrations."""

from src.talentdesk.services.analytics.posthog import PostHogService

__all__ = [
    "PostHogService",
]
