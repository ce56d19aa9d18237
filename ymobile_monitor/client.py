"""
PortalClient – one explicit portal session.

Owns the HTTP session and its host-scoped cookies; every flow (login, usage
retrieval, relogin) goes through an instance the caller holds, so separate
clients never share state.
"""

from datetime import datetime

from .auth import login
from .config import REQUEST_TIMEOUT
from .logging_setup import log
from .models import Credentials, UsageSnapshot
from .network import PortalEndpoints, build_session
from .usage import fetch_usage, fetch_with_recovery


class PortalClient:
    """
    Parameters
    ----------
    endpoints  : Portal URLs; defaults to the production portal.
    timeout    : ``(connect, read)`` seconds for every request.
    verify_ssl : Verify TLS certificates.
    session    : Pre-built session (tests); built with :func:`build_session`
                 when omitted.
    """

    def __init__(
        self,
        endpoints: PortalEndpoints | None = None,
        timeout=REQUEST_TIMEOUT,
        verify_ssl: bool = True,
        session=None,
    ) -> None:
        self.endpoints = endpoints or PortalEndpoints.for_domain()
        self.timeout = timeout
        self.session = session if session is not None else build_session(verify_ssl)
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def login(self, credentials: Credentials) -> str:
        """Run the login handshake; returns the post-login URL."""
        self._authenticated = False
        landing = login(self.session, credentials, self.endpoints, timeout=self.timeout)
        self._authenticated = True
        return landing

    def fetch_usage(self, now: datetime | None = None) -> UsageSnapshot:
        return fetch_usage(self.session, self.endpoints, timeout=self.timeout, now=now)

    def fetch_with_recovery(self, credentials: Credentials | None = None) -> UsageSnapshot:
        return fetch_with_recovery(self, credentials)

    def logout(self) -> None:
        """Forget the portal session locally (cookies and logged-in flag)."""
        self.session.cookies.clear()
        self._authenticated = False
        log.debug("Session cookies cleared")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
