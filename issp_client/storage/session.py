"""
Session storage for the ISSP client.

Keeps the session token and the cached user profile in a small JSON
file, the way the browser client keeps them in local storage.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from issp_client.utils.logging import get_logger

logger = get_logger()


class SessionStore:
    """File-backed token and user store."""

    def __init__(self, session_dir: Path):
        """
        Initialize session store.

        Args:
            session_dir: Directory holding session.json
        """
        self.session_dir = Path(session_dir)
        self.session_file = self.session_dir / "session.json"

    def get_token(self) -> Optional[str]:
        """Return the stored token, or None when logged out."""
        return self._load().get("token") or None

    def save_token(self, token: str) -> None:
        """Store a session token."""
        data = self._load()
        data["token"] = token
        data["saved_at"] = datetime.now().isoformat()
        self._write_json(data)
        logger.debug(f"Session token saved to {self.session_file}")

    def save_user(self, user: Dict[str, Any]) -> None:
        """Cache the user profile (email, unit, campus...)."""
        data = self._load()
        data["user"] = user
        self._write_json(data)

    def load_user(self) -> Dict[str, Any]:
        """Return the cached user profile, or an empty dict."""
        user = self._load().get("user")
        return user if isinstance(user, dict) else {}

    def clear(self) -> None:
        """Forget the token and cached user."""
        if self.session_file.exists():
            self.session_file.unlink()
            logger.debug("Session cleared")

    def _load(self) -> Dict[str, Any]:
        if not self.session_file.exists():
            return {}
        try:
            data = self._read_json()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read session file: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_json(self, data: Dict) -> None:
        """Write data to the session file."""
        self.session_dir.mkdir(parents=True, exist_ok=True)
        with open(self.session_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def _read_json(self) -> Dict:
        """Read data from the session file."""
        with open(self.session_file, 'r', encoding='utf-8') as f:
            return json.load(f)
