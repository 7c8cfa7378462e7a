from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Protocol

from flask import session

from ..core.constants import SESSION_KEY
from ..core.exceptions import SessionParseError
from .model import Identity, deserialize_identity, serialize_identity


class SessionStore(Protocol):
    """Holds the current identity under one fixed key.

    Note (DIP): loader/router depend on this interface, never on flask.session directly.
    """

    def save(self, identity: Identity) -> None:
        raise NotImplementedError

    def load(self) -> Optional[Identity]:
        """Return the stored identity, None when absent.

        Raises SessionParseError when the stored text is unreadable.
        """
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class _TextSessionStore(ABC):
    """save/load/clear on top of three raw text primitives."""

    def __init__(self, key: str = SESSION_KEY):
        self.key = key

    @abstractmethod
    def _read(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _delete(self) -> None:
        raise NotImplementedError

    def save(self, identity: Identity) -> None:
        self._write(serialize_identity(identity))

    def load(self) -> Optional[Identity]:
        text = self._read()
        if text is None:
            return None
        if not isinstance(text, str):
            raise SessionParseError(f"Stored identity must be text, got {type(text).__name__}")
        return deserialize_identity(text)

    def clear(self) -> None:
        self._delete()


class InMemorySessionStore(_TextSessionStore):
    """Dict-backed store for scripts and tests. Pass ``data`` to share state between instances."""

    def __init__(self, key: str = SESSION_KEY, data: Optional[Dict[str, str]] = None):
        super().__init__(key)
        self.data: Dict[str, str] = {} if data is None else data

    def _read(self) -> Optional[str]:
        return self.data.get(self.key)

    def _write(self, text: str) -> None:
        self.data[self.key] = text

    def _delete(self) -> None:
        self.data.pop(self.key, None)


class FlaskSessionStore(_TextSessionStore):
    """Store living in the signed Flask session cookie (one per browser)."""

    def _read(self) -> Optional[str]:
        return session.get(self.key)

    def _write(self, text: str) -> None:
        session[self.key] = text
        session.permanent = True

    def _delete(self) -> None:
        session.pop(self.key, None)
