from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


_ID_KEYS = ("employeeId", "employee_id", "id")
_NAME_KEYS = ("displayName", "display_name", "full_name", "name")


def _first(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(frozen=True)
class Identity:
    """Authenticated employee profile.

    `profile` keeps the record exactly as the server sent it, so it can be
    persisted and restored without losing fields this client does not read.
    """

    employee_id: Optional[Any]
    display_name: str
    profile: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Identity":
        name = _first(data, _NAME_KEYS)
        return cls(
            employee_id=_first(data, _ID_KEYS),
            display_name=str(name) if name is not None else "",
            profile=dict(data),
        )

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.profile)
        if self.employee_id is not None and _first(payload, _ID_KEYS) is None:
            payload["employeeId"] = self.employee_id
        if self.display_name and _first(payload, _NAME_KEYS) is None:
            payload["displayName"] = self.display_name
        return payload


@dataclass(frozen=True)
class StoredSession:
    """Identity paired 1:1 with its bearer token (the Credential)."""

    identity: Identity
    token: str
