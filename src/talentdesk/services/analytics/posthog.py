"""Authentication analytics sent to PostHog."""

import posthog

from src.talentdesk.config import settings


class PostHogService:
    """
    Records authentication and user provisioning events.

    Events emitted by the auth layer: ``user_authenticated``,
    ``authentication_failed``, ``user_provisioned`` and ``user_relinked``.
    Without ``POSTHOG_API_KEY`` every call is a no-op, so tests and local
    runs send nothing.
    """

    def __init__(self) -> None:
        if settings.posthog_api_key:
            posthog.api_key = settings.posthog_api_key
            posthog.host = settings.posthog_host

    def capture(self, distinct_id: str, event: str, properties: dict | None = None) -> None:
        """
        Send one event for a Supabase user id ("anonymous" before verification).

        Example:
            >>> PostHogService().capture(
            ...     "123e4567-e89b-12d3-a456-426614174000",
            ...     "user_relinked",
            ...     {"email": "jane@example.com"},
            ... )
        """
        if not settings.posthog_api_key:
            return

        posthog.capture(distinct_id=distinct_id, event=event, properties=properties or {})
