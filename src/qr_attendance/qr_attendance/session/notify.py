from __future__ import annotations

from typing import Optional, Protocol

from flask import flash, redirect, session


class Notifier(Protocol):
    """Fire-and-forget user notification (title + description)."""

    def notify(self, title: str, description: str, *, category: str = "info") -> None:
        raise NotImplementedError


class Navigator(Protocol):
    """Client-side transition to ``route``; callers never inspect the outcome."""

    def push(self, route: str) -> None:
        raise NotImplementedError


class FlashNotifier:
    """Flashes ``"<title>: <description>"``; a message already waiting to be shown is not queued again."""

    def notify(self, title: str, description: str, *, category: str = "info") -> None:
        # titles that end in punctuation ("Welcome Back!") need no colon
        sep = " " if title.endswith(("!", "?", ".")) else ": "
        message = f"{title}{sep}{description}"
        if any(tuple(queued) == (category, message) for queued in session.get("_flashes", ())):
            return
        flash(message, category)


class RedirectNavigator:
    """Remembers the last pushed route so the view can answer with a redirect."""

    def __init__(self):
        self.location: Optional[str] = None

    def push(self, route: str) -> None:
        self.location = route

    def response(self, fallback: str = "/"):
        return redirect(self.location or fallback)
