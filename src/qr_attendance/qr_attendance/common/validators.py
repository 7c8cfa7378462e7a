from __future__ import annotations

from typing import Mapping, Sequence

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_fields(data: Mapping[str, object], fields: Sequence[str]) -> None:
    """Reject a form when any of ``fields`` is missing or blank, naming all of them."""
    missing = [f for f in fields if not str(data.get(f) or "").strip()]
    if missing:
        raise ValidationError(f"Please fill in all required fields: {', '.join(missing)}")
