from __future__ import annotations

import json
import logging
from typing import Optional

from ..common.validators import is_usable_token
from ..core.constants import IDENTITY_STORAGE_KEY, TOKEN_LOG_PREFIX, TOKEN_STORAGE_KEY
from ..core.exceptions import StorageError
from .model import Identity, StoredSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def mask_token(token: Optional[str]) -> str:
    if not token:
        return "NO TOKEN"
    return token[:TOKEN_LOG_PREFIX] + "..."


class SessionStore:
    """Use case: keep the authenticated identity and its credential across restarts.

    Storage problems never escape: an unreadable store behaves like an empty
    one, so the user lands on the login screen instead of a crash.
    """

    def __init__(self, repository: SessionRepository):
        self._repository = repository

    def load(self) -> Optional[StoredSession]:
        try:
            token = self._repository.get(TOKEN_STORAGE_KEY)
            raw_identity = self._repository.get(IDENTITY_STORAGE_KEY)
        except StorageError as e:
            logger.warning("Session storage unavailable, starting logged out: %s", e)
            return None

        logger.debug("Stored token: %s, identity present: %s", mask_token(token), bool(raw_identity))

        identity = self._decode_identity(raw_identity)
        if not is_usable_token(token) or identity is None:
            # Leftovers such as "undefined" tokens are cleared so the next load is clean.
            if token is not None or raw_identity is not None:
                self.clear()
            return None

        return StoredSession(identity=identity, token=token.strip())

    def save(self, identity: Identity, token: str) -> None:
        try:
            self._repository.set_many(
                {
                    TOKEN_STORAGE_KEY: token,
                    IDENTITY_STORAGE_KEY: json.dumps(identity.to_payload()),
                }
            )
        except StorageError as e:
            logger.warning("Could not persist session, it will last until exit: %s", e)

    def clear(self) -> None:
        try:
            self._repository.delete_many([TOKEN_STORAGE_KEY, IDENTITY_STORAGE_KEY])
        except StorageError as e:
            logger.warning("Could not clear stored session: %s", e)

    @staticmethod
    def _decode_identity(raw: Optional[str]) -> Optional[Identity]:
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored identity is not valid JSON, ignoring it")
            return None
        if not isinstance(data, dict):
            return None
        return Identity.from_payload(data)
