from __future__ import annotations

from typing import Optional

from ..core.constants import PLACEHOLDER_TOKENS
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_usable_token(token: Optional[str]) -> bool:
    """A token is usable when present, non-blank and not a textual placeholder."""
    if not token or not token.strip():
        return False
    return token.strip() not in PLACEHOLDER_TOKENS
