from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import AUTH_ENTRY_ROUTE
from ..core.exceptions import SessionParseError
from .model import Identity, LoadResult
from .notify import Navigator, Notifier
from .store import SessionStore

logger = logging.getLogger(__name__)


class IdentityLoader:
    """Restores the current identity from the session store for one page load.

    The stored identity is trusted as-is: it is not re-checked against the
    database, so role/profile changes apply from the next login only.
    """

    def __init__(self, store: SessionStore, notifier: Notifier, navigator: Navigator):
        self._store = store
        self._notifier = notifier
        self._navigator = navigator
        self._identity: Optional[Identity] = None
        self._loading = True
        self._result: Optional[LoadResult] = None

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def bootstrap(self) -> LoadResult:
        """Load once; later calls return the first outcome without side effects."""
        if self._result is None:
            self._result = self.reload()
        return self._result

    def reload(self) -> LoadResult:
        self._loading = True
        self._identity = None
        try:
            try:
                identity = self._store.load()
            except SessionParseError as e:
                logger.error("Discarding unreadable session record: %s", e)
                self._store.clear()
                return LoadResult.malformed(str(e))

            if identity is None:
                return LoadResult.absent()

            self._identity = identity
            self._notifier.notify("Welcome Back!", f"Hello {identity.display_name}! 👋")
            return LoadResult.restored(identity)
        finally:
            self._loading = False

    def logout(self) -> None:
        self._store.clear()
        self._identity = None
        self._notifier.notify("Logged Out", "You have been successfully logged out.")
        self._navigator.push(AUTH_ENTRY_ROUTE)
