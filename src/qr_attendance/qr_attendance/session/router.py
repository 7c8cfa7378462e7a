from __future__ import annotations

import logging
from typing import Any

from ..core.constants import (
    ADMIN_HOME_ROUTE,
    FACULTY_HOME_ROUTE,
    ROOT_ROUTE,
    SBO_HOME_ROUTE,
    STUDENT_HOME_ROUTE,
)
from ..core.enums import Role
from .model import Identity
from .notify import Navigator
from .store import SessionStore

logger = logging.getLogger(__name__)

ROLE_HOME_ROUTES = {
    Role.ADMIN: ADMIN_HOME_ROUTE,
    Role.FACULTY: FACULTY_HOME_ROUTE,
    Role.SBO: SBO_HOME_ROUTE,
    Role.STUDENT: STUDENT_HOME_ROUTE,
}


def home_route_for(role_value: Any) -> str:
    """Home route of a role; unknown or missing roles land on the root route."""
    role = Role.parse(role_value)
    return ROLE_HOME_ROUTES[role] if role else ROOT_ROUTE


class RoleRouter:
    """Persist a freshly authenticated identity and send it to its home."""

    def __init__(self, store: SessionStore, navigator: Navigator):
        self._store = store
        self._navigator = navigator

    def dispatch(self, identity: Identity) -> None:
        self._store.save(identity)
        route = home_route_for(identity.role_value)
        if route == ROOT_ROUTE:
            logger.warning("Unrecognized role %r, sending identity to %s", identity.role_value, route)
        self._navigator.push(route)
