"""
HTTP client configuration for portal communication.

Provides the cookie-scoped session, the portal endpoint table and thin
request helpers that translate ``requests`` failures into ``MonitorError``.
"""

from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    LOGIN_HOST,
    LOGIN_PATH,
    PORTAL_DOMAIN,
    REQUEST_TIMEOUT,
    TICKET_HOST,
    TICKET_PATH,
    TOKEN_HOST,
    TOKEN_PATH,
    USAGE_HOST,
    USAGE_PATH,
    USER_AGENT,
)
from ..errors import HttpStatusError, TransportError
from ..logging_setup import log
from .cookies import HostCookieJar


def portal_url(host: str, path: str, domain: str = PORTAL_DOMAIN) -> str:
    """
    Build an absolute portal URL.

    Args:
        host: Host prefix below the portal domain (e.g. 'id.my')
        path: Absolute path on that host
        domain: Portal domain

    Returns:
        URL string (e.g., 'https://id.my.ymobile.jp/sbid_auth/...')
    """
    return f"https://{host}.{domain}{path}"


@dataclass(frozen=True)
class PortalEndpoints:
    ticket_url: str
    login_url: str
    token_url: str
    usage_url: str

    @classmethod
    def for_domain(cls, domain: str = PORTAL_DOMAIN) -> "PortalEndpoints":
        return cls(
            ticket_url=portal_url(TICKET_HOST, TICKET_PATH, domain),
            login_url=portal_url(LOGIN_HOST, LOGIN_PATH, domain),
            token_url=portal_url(TOKEN_HOST, TOKEN_PATH, domain),
            usage_url=portal_url(USAGE_HOST, USAGE_PATH, domain),
        )


class PortalSession(requests.Session):
    """
    ``requests.Session`` that sends each host only the cookies it set.

    ``send`` runs for the initial request and for every redirect hop, so the
    ``Cookie`` header is rebuilt from the :class:`HostCookieJar` right before
    anything goes on the wire.
    """

    def __init__(self) -> None:
        super().__init__()
        self.cookies = HostCookieJar()

    def send(self, request, **kwargs):
        request.headers.pop("Cookie", None)
        header = self.cookies.cookie_header(request.url)
        if header:
            request.headers["Cookie"] = header
        return super().send(request, **kwargs)


def build_session(verify_ssl: bool = True) -> PortalSession:
    """Return a PortalSession with browser headers and no transport retries."""
    session = PortalSession()
    # Exactly one relogin pass happens above this layer; never retry here.
    adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
        ),
        "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
        "Connection": "keep-alive",
    })
    return session


def is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


def http_get(session: requests.Session, url: str, timeout=REQUEST_TIMEOUT) -> requests.Response:
    """GET *url*, raising TransportError on any transport-level failure."""
    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        log.error("GET %s failed: %s", url, exc)
        raise TransportError(url, str(exc)) from exc
    log.debug("GET %s → HTTP %s (%s)", url, resp.status_code, resp.url)
    return resp


def http_post(
    session: requests.Session, url: str, data: dict, timeout=REQUEST_TIMEOUT
) -> requests.Response:
    """POST form-encoded *data* to *url*, raising TransportError on failure."""
    try:
        resp = session.post(url, data=data, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        log.error("POST %s failed: %s", url, exc)
        raise TransportError(url, str(exc)) from exc
    log.debug("POST %s → HTTP %s (%s)", url, resp.status_code, resp.url)
    return resp


def require_body(resp: requests.Response, url: str) -> str:
    """
    Return the body of a 2xx response.

    Raises:
        HttpStatusError: on a non-2xx status or an empty body
    """
    if not is_success(resp):
        raise HttpStatusError(url, resp.status_code)
    body = resp.text
    if not body or not body.strip():
        raise HttpStatusError(url, resp.status_code, empty_body=True)
    return body
