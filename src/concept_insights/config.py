"""Configuration models for the Concept Insights client."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_URL = "https://gateway-s.watsonplatform.net/concept-insights-beta/api"


class ClientConfig(BaseModel):
    """Service endpoint, credentials and transport settings.

    ``timeout_seconds=None`` leaves the transport without a timeout; callers
    that need bounded latency set one here or impose their own deadline.
    """

    base_url: str = Field(default=DEFAULT_URL, min_length=1)
    username: str | None = None
    password: str | None = None
    timeout_seconds: float | None = Field(default=None, gt=0.0)
    user_agent: str = Field(default="concept-insights-python", min_length=1)

    @property
    def credentials(self) -> tuple[str, str] | None:
        if self.username and self.password:
            return self.username, self.password
        return None

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``CONCEPT_INSIGHTS_*`` environment variables."""
        return cls(
            base_url=os.getenv("CONCEPT_INSIGHTS_URL", DEFAULT_URL),
            username=os.getenv("CONCEPT_INSIGHTS_USERNAME"),
            password=os.getenv("CONCEPT_INSIGHTS_PASSWORD"),
            timeout_seconds=os.getenv("CONCEPT_INSIGHTS_TIMEOUT") or None,
        )
