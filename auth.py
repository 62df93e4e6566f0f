"""
Credential module for backend requests.

Holds the bearer token used to authenticate calls to the clinic backend.
Acquiring or refreshing the token is outside this application: staff paste a
token (or it is seeded from configuration) and every gateway call reads it
again at call time.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================

class TokenRequest(BaseModel):
    """Request body for storing a bearer token."""
    token: str


class CredentialStatus(BaseModel):
    """Whether a token is currently available."""
    authenticated: bool
    key: str
    updated_at: Optional[str] = None


# =============================================================================
# CREDENTIAL STORE (In-Memory)
# =============================================================================

class CredentialStore:
    """
    Process-wide key/value store for credential strings.

    Plays the part of the browser's local storage: values are looked up by
    key whenever a request is built, so a token set later is picked up by
    the next call without reconstructing any client.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}
        self._updated: Dict[str, datetime] = {}

    def set(self, key: str, value: str):
        """Store a credential under a key."""
        self._values[key] = value
        self._updated[key] = datetime.now(timezone.utc)
        logger.info(f"Stored credential '{key}'")

    def get(self, key: str) -> Optional[str]:
        """Get a credential, or None if it is missing or blank."""
        value = self._values.get(key)
        return value or None

    def delete(self, key: str) -> bool:
        """Remove a credential. Returns False if none was stored."""
        self._updated.pop(key, None)
        if key in self._values:
            del self._values[key]
            logger.info(f"Removed credential '{key}'")
            return True
        return False

    def updated_at(self, key: str) -> Optional[datetime]:
        return self._updated.get(key)


class CredentialAccessor:
    """
    Read-only view of one credential in a CredentialStore.

    This is what the gateway depends on: `get_token()` returns the current
    bearer token or None.
    """

    def __init__(self, store: CredentialStore, key: str = "accessToken"):
        self._store = store
        self.key = key

    def get_token(self) -> Optional[str]:
        return self._store.get(self.key)

    def status(self) -> CredentialStatus:
        updated = self._store.updated_at(self.key)
        return CredentialStatus(
            authenticated=self.get_token() is not None,
            key=self.key,
            updated_at=updated.isoformat() if updated else None,
        )
