"""
Base parser utilities for JSON records.

Provides the field helpers every parser uses to read duck-typed
backend payloads with explicit defaults.
"""

from typing import Any, Iterable, Optional

from issp_client.utils.logging import get_logger

logger = get_logger()


class BaseParser:
    """Base class with common payload-reading utilities."""

    @staticmethod
    def get_first(payload: dict, keys: Iterable[str], default: Any = None) -> Any:
        """Return the first present, non-None value among several key aliases."""
        for key in keys:
            value = payload.get(key)
            if value is not None:
                return value
        return default

    @staticmethod
    def get_str(payload: dict, *keys: str, default: str = "", strip: bool = True) -> str:
        """Safely read a string field, trying each alias in turn."""
        value = BaseParser.get_first(payload, keys)
        if value is None:
            return default
        if isinstance(value, dict):
            # Populated references ({"_id": ..., "username": ...})
            value = value.get("_id") or value.get("id") or default
        value = str(value)
        return value.strip() if strip else value

    @staticmethod
    def get_float(payload: dict, *keys: str, default: float = 0.0) -> float:
        """Safely read a numeric field as float."""
        value = BaseParser.get_first(payload, keys)
        if value is None or isinstance(value, bool):
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def get_list(payload: dict, *keys: str) -> list:
        """Safely read a list field; a lone string becomes a one-item list."""
        value = BaseParser.get_first(payload, keys)
        if isinstance(value, list):
            return [v for v in value if v]
        if isinstance(value, str) and value.strip():
            return [value.strip()]
        return []

    @staticmethod
    def get_choice(
        payload: dict,
        key: str,
        choices: Iterable[str],
        default: Optional[str],
    ) -> Optional[str]:
        """Read an enum field, falling back to the default for unknown values."""
        value = payload.get(key)
        if value is None or value == "":
            return default
        if value in choices:
            return value
        logger.warning(f"Unknown {key} value {value!r}, using {default!r}")
        return default
