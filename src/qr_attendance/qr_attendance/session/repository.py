from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol


class SessionRepository(Protocol):
    """Durable key-value storage for the session.

    Note (DIP): SessionStore depends on this interface, not on a concrete file
    format. Implementations raise StorageError when the medium is unavailable.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_many(self, entries: Mapping[str, str]) -> None:
        """Write all entries in one atomic step."""

        raise NotImplementedError

    def delete_many(self, keys: Iterable[str]) -> None:
        raise NotImplementedError
