from __future__ import annotations

from src.qr_attendance.qr_attendance.core.constants import AUTH_ENTRY_ROUTE, SESSION_KEY
from src.qr_attendance.qr_attendance.core.enums import LoadStatus
from src.qr_attendance.qr_attendance.session.loader import IdentityLoader
from src.qr_attendance.qr_attendance.session.model import Identity
from src.qr_attendance.qr_attendance.session.store import InMemorySessionStore


def _loader(store, notifier, navigator) -> IdentityLoader:
    return IdentityLoader(store, notifier, navigator)


def test_starts_in_loading_state(notifier, navigator):
    loader = _loader(InMemorySessionStore(), notifier, navigator)

    assert loader.loading is True
    assert loader.identity is None


def test_absent_session_leaves_identity_unset(notifier, navigator):
    loader = _loader(InMemorySessionStore(), notifier, navigator)

    result = loader.bootstrap()

    assert result.status == LoadStatus.ABSENT
    assert loader.identity is None
    assert loader.loading is False
    assert notifier.messages == []
    assert navigator.routes == []


def test_restores_identity_and_welcomes_by_full_name(notifier, navigator):
    store = InMemorySessionStore()
    store.save(Identity.of(role="student", full_name="Jane Doe"))
    loader = _loader(store, notifier, navigator)

    result = loader.bootstrap()

    assert result.status == LoadStatus.RESTORED
    assert loader.identity == Identity.of(role="student", full_name="Jane Doe")
    assert loader.is_authenticated
    assert loader.loading is False
    assert len(notifier.messages) == 1
    title, description, _ = notifier.messages[0]
    assert title == "Welcome Back!"
    assert "Jane Doe" in description


def test_welcome_falls_back_to_first_name_then_generic_label(notifier, navigator):
    store = InMemorySessionStore()
    store.save(Identity.of(role="student", first_name="Jane"))
    _loader(store, notifier, navigator).bootstrap()

    store.save(Identity.of(role="student"))
    _loader(store, notifier, navigator).bootstrap()

    assert "Jane" in notifier.messages[0][1]
    assert "User" in notifier.messages[1][1]


def test_malformed_record_is_cleared(notifier, navigator, caplog):
    store = InMemorySessionStore(data={SESSION_KEY: "{role: student"})
    loader = _loader(store, notifier, navigator)

    result = loader.bootstrap()

    assert result.status == LoadStatus.MALFORMED
    assert result.identity is None
    assert loader.identity is None
    assert loader.loading is False
    assert store.data.get(store.key) is None
    assert notifier.messages == []
    assert "Discarding unreadable session record" in caplog.text


def test_bootstrap_runs_once(notifier, navigator):
    store = InMemorySessionStore()
    store.save(Identity.of(role="admin", full_name="Portal Admin"))
    loader = _loader(store, notifier, navigator)

    first = loader.bootstrap()
    second = loader.bootstrap()

    assert first is second
    assert len(notifier.messages) == 1


def test_reload_picks_up_new_session(notifier, navigator):
    store = InMemorySessionStore()
    loader = _loader(store, notifier, navigator)
    loader.bootstrap()

    store.save(Identity.of(role="faculty", full_name="Maria Reyes"))
    result = loader.reload()

    assert result.status == LoadStatus.RESTORED
    assert loader.identity.role_value == "faculty"


def test_logout_clears_store_and_navigates_to_auth(notifier, navigator):
    store = InMemorySessionStore()
    store.save(Identity.of(role="sbo", full_name="Sam Officer"))
    loader = _loader(store, notifier, navigator)
    loader.bootstrap()

    loader.logout()

    assert store.data.get(store.key) is None
    assert loader.identity is None
    assert navigator.routes == [AUTH_ENTRY_ROUTE]
    assert notifier.messages[-1][:2] == ("Logged Out", "You have been successfully logged out.")


def test_logout_without_identity_still_navigates_once(notifier, navigator):
    store = InMemorySessionStore()
    loader = _loader(store, notifier, navigator)
    assert store.data.get(store.key) is None

    loader.logout()

    assert store.data.get(store.key) is None
    assert loader.identity is None
    assert navigator.routes == [AUTH_ENTRY_ROUTE]


def test_reload_after_store_cleared_unsets_identity(notifier, navigator):
    store = InMemorySessionStore()
    store.save(Identity.of(role="admin", full_name="A"))
    loader = _loader(store, notifier, navigator)
    assert loader.bootstrap().status == LoadStatus.RESTORED

    store.clear()
    result = loader.reload()

    assert result.status == LoadStatus.ABSENT
    assert result.identity is None
    assert loader.identity is None
    assert not loader.is_authenticated
