"""
UsageMonitor – the state holder a UI or CLI drives.

Turns the intents ``login``, ``refresh`` and ``logout`` into portal calls and
publishes an immutable :class:`MonitorState` after every change.  Only one
action runs at a time: the HTTP handshakes share one cookie session and must
never interleave.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable

from .client import PortalClient
from .config import (
    MSG_AUTO_LOGIN_FAILED,
    MSG_CONNECTION_FAILED,
    MSG_FETCH_FAILED,
    MSG_LOGIN_FAILED,
)
from .credentials import CredentialStore, stored_credentials
from .errors import AuthRejected, MonitorError, SessionBusy
from .logging_setup import log
from .models import Credentials, UsageSnapshot


@dataclass(frozen=True)
class MonitorState:
    is_loading: bool = False
    error: str | None = None
    data: UsageSnapshot | None = None
    is_logged_in: bool = False
    auto_login_attempted: bool = False


class UsageMonitor:
    """
    Parameters
    ----------
    client   : PortalClient the actions run against.
    store    : Credential store consulted for auto-login and relogin.
    blocking : When False, an action that overlaps a running one raises
               SessionBusy instead of waiting for it.
    """

    def __init__(
        self,
        client: PortalClient,
        store: CredentialStore,
        blocking: bool = True,
    ) -> None:
        self.client = client
        self.store = store
        self.blocking = blocking
        self._state = MonitorState()
        self._listeners: list[Callable[[MonitorState], None]] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # State publication
    # ------------------------------------------------------------------
    @property
    def state(self) -> MonitorState:
        return self._state

    def subscribe(self, listener: Callable[[MonitorState], None]) -> None:
        """Register *listener*; it is called with the current state at once."""
        self._listeners.append(listener)
        listener(self._state)

    def _update(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    @contextmanager
    def _exclusive(self, action: str):
        if not self._lock.acquire(blocking=self.blocking):
            raise SessionBusy(f"Cannot {action}: another action is in progress")
        try:
            yield
        finally:
            self._lock.release()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Log in with stored credentials, if there are any."""
        credentials = stored_credentials(self.store)
        if credentials is None:
            self._update(auto_login_attempted=True)
            return
        log.info("Stored credentials found – attempting automatic login")
        self.login(credentials.identifier, credentials.secret, auto=True)

    def login(
        self,
        identifier: str,
        secret: str,
        remember: bool = False,
        auto: bool = False,
    ) -> bool:
        """
        Log in and, on success, fetch usage straight away.

        A rejected explicit login is reported as wrong credentials; a failed
        automatic login gets its own message so the two can be told apart.
        """
        with self._exclusive("log in"):
            self._update(is_loading=True, error=None)
            try:
                self.client.login(Credentials(identifier, secret))
            except MonitorError as exc:
                if auto:
                    message = MSG_AUTO_LOGIN_FAILED
                elif isinstance(exc, AuthRejected):
                    message = MSG_LOGIN_FAILED
                else:
                    message = MSG_CONNECTION_FAILED
                log.error("Login failed: %s", exc)
                self._update(is_loading=False, error=message, auto_login_attempted=True)
                return False

            if remember:
                self.store.save(identifier, secret)
            self._update(is_loading=False, is_logged_in=True, auto_login_attempted=True)
            self._fetch()
            return True

    def refresh(self) -> UsageSnapshot | None:
        """Fetch usage again, re-logging in once from the store if needed."""
        with self._exclusive("refresh"):
            return self._fetch()

    def logout(self) -> None:
        with self._exclusive("log out"):
            self.store.clear()
            self.client.logout()
            self._update(**vars(MonitorState()))
            log.info("Logged out")

    def _fetch(self) -> UsageSnapshot | None:
        self._update(is_loading=True, error=None)
        try:
            snapshot = self.client.fetch_with_recovery(stored_credentials(self.store))
        except MonitorError as exc:
            log.error("Usage fetch failed: %s", exc)
            self._update(is_loading=False, error=MSG_FETCH_FAILED)
            return None
        self._update(is_loading=False, data=snapshot)
        return snapshot
