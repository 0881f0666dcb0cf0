"""
Client settings and configuration constants.

This module centralizes all configurable parameters for the ISSP client,
making it easy to adjust behavior without modifying core logic.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_session_dir() -> Path:
    return Path.home() / ".issp"


@dataclass
class ClientSettings:
    """Configuration settings for the ISSP request client."""

    # API Configuration
    api_base: str = "http://localhost:5000"
    auth_header: str = "x-auth-token"

    # Concurrency settings
    max_concurrent: int = 10

    # Timeout and retry settings
    request_timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 1.0  # Base delay for exponential backoff

    # Quiet period before an item-insight lookup is dispatched
    insight_debounce: float = 0.6

    # Session token and cached user live here
    session_dir: Path = field(default_factory=_default_session_dir)

    def __post_init__(self):
        self.api_base = self.api_base.rstrip("/")
        self.session_dir = Path(self.session_dir).expanduser()

    @classmethod
    def from_env(cls, **overrides) -> "ClientSettings":
        """
        Build settings from ISSP_* environment variables.

        Args:
            **overrides: Explicit values that win over the environment

        Returns:
            ClientSettings instance
        """
        values = {}
        if os.environ.get("ISSP_API_URL"):
            values["api_base"] = os.environ["ISSP_API_URL"]
        if os.environ.get("ISSP_SESSION_DIR"):
            values["session_dir"] = Path(os.environ["ISSP_SESSION_DIR"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# Default settings instance
DEFAULT_SETTINGS = ClientSettings()
