from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, flash, g, redirect, render_template, url_for

from ..core.enums import Role
from .loader import IdentityLoader
from .model import Identity
from .notify import FlashNotifier, RedirectNavigator
from .router import RoleRouter
from .store import FlaskSessionStore


def session_store() -> FlaskSessionStore:
    return FlaskSessionStore(current_app.config["SESSION_KEY"])


def current_navigator() -> RedirectNavigator:
    if "navigator" not in g:
        g.navigator = RedirectNavigator()
    return g.navigator


def current_loader() -> IdentityLoader:
    """The request's identity loader, created on first use."""
    if "identity_loader" not in g:
        g.identity_loader = IdentityLoader(session_store(), FlashNotifier(), current_navigator())
    return g.identity_loader


def current_identity() -> Optional[Identity]:
    loader = current_loader()
    loader.bootstrap()
    return loader.identity


def role_router() -> RoleRouter:
    return RoleRouter(session_store(), current_navigator())


def role_required(*roles: Role):
    """Require a restored identity; with ``roles`` given, also require one of them."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("auth"))

            if roles and identity.role not in roles:
                return render_template("403.html", current_user=identity), 403

            return view(*args, **kwargs)

        return wrapper

    return decorator

