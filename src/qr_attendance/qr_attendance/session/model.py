from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_DISPLAY_NAME
from ..core.enums import LoadStatus, Role
from ..core.exceptions import SessionParseError


@dataclass(frozen=True)
class Identity:
    """The authenticated user as handed over by the login form.

    ``fields`` is kept verbatim: whatever profile attributes the
    authentication step produced are persisted and restored unchanged.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, **fields: Any) -> "Identity":
        return cls(dict(fields))

    @property
    def role_value(self) -> Any:
        return self.fields.get("role")

    @property
    def role(self) -> Optional[Role]:
        return Role.parse(self.role_value)

    @property
    def display_name(self) -> str:
        return self.fields.get("full_name") or self.fields.get("first_name") or DEFAULT_DISPLAY_NAME

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def to_dict(self) -> dict:
        return dict(self.fields)


def serialize_identity(identity: Identity) -> str:
    return json.dumps(identity.to_dict(), ensure_ascii=False)


def deserialize_identity(text: str) -> Identity:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise SessionParseError(f"Stored identity is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SessionParseError(f"Stored identity must be an object, got {type(data).__name__}")
    return Identity(data)


@dataclass(frozen=True)
class LoadResult:
    """What a session restore produced; ``identity`` is set only when RESTORED."""

    status: LoadStatus
    identity: Optional[Identity] = None
    error: Optional[str] = None

    @classmethod
    def restored(cls, identity: Identity) -> "LoadResult":
        return cls(LoadStatus.RESTORED, identity=identity)

    @classmethod
    def absent(cls) -> "LoadResult":
        return cls(LoadStatus.ABSENT)

    @classmethod
    def malformed(cls, error: str) -> "LoadResult":
        return cls(LoadStatus.MALFORMED, error=error)
