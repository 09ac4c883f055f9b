"""
Process-wide login state as an explicit object.

The token and cached profile are passed by reference to whatever needs them
instead of being read from ambient storage.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import STORAGE_KEYS

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    access_token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def headers(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def clear(self):
        self.access_token = None
        self.user = None

    def to_dict(self):
        return {
            STORAGE_KEYS.access_token: self.access_token,
            STORAGE_KEYS.user_data: self.user,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            access_token=data.get(STORAGE_KEYS.access_token),
            user=data.get(STORAGE_KEYS.user_data),
        )


class CredentialStore:
    """JSON file holding the token and the cached user profile."""

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def load(self) -> AuthSession:
        if not self.path.exists():
            return AuthSession()
        try:
            data = json.loads(self.path.read_text())
        except ValueError:
            logger.warning("Ignoring unreadable credentials file %s", self.path)
            return AuthSession()
        return AuthSession.from_dict(data)

    def save(self, session: AuthSession):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(session.to_dict()))
        self.path.chmod(0o600)
        logger.debug("Saved credentials to %s", self.path)

    def clear(self):
        if self.path.exists():
            self.path.unlink()
