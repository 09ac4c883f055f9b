"""
Login, registration, profile and API-key calls.
"""

import logging
from typing import Any, Dict, List, Optional

from .auth_session import CredentialStore
from .client import ApiClient

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, client: ApiClient, store: Optional[CredentialStore] = None):
        self.client = client
        self.store = store

    @property
    def session(self):
        return self.client.auth

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Exchange credentials for a bearer token and remember it."""
        data = self.client.post(
            self.client.endpoints.login(),
            form={"username": username, "password": password},
            authenticated=False,
        )
        self.session.access_token = data["access_token"]
        self._persist()
        logger.info("Logged in as %s", username)
        return data

    def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        return self.client.post(
            self.client.endpoints.register(),
            form={"email": email, "password": password, "name": name or None},
            authenticated=False,
        )

    def current_user(self) -> Dict[str, Any]:
        user = self.client.get(self.client.endpoints.user_me())
        self.session.user = user
        self._persist()
        return user

    def logout(self):
        self.session.clear()
        if self.store is not None:
            self.store.clear()
        logger.info("Logged out")

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def stored_user(self) -> Optional[Dict[str, Any]]:
        return self.session.user

    def list_api_keys(self) -> List[Dict[str, Any]]:
        data = self.client.get(self.client.endpoints.api_keys())
        return (data or {}).get("api_keys") or []

    def create_api_key(self, name: str) -> Dict[str, Any]:
        return self.client.post(self.client.endpoints.api_keys(), form={"name": name})

    def delete_api_key(self, key_id) -> Any:
        return self.client.delete(self.client.endpoints.api_key(key_id))

    def _persist(self):
        if self.store is not None:
            self.store.save(self.session)
