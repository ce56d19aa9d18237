"""Login handshake and login-page detection."""

import urllib.parse

import requests

from ..config import (
    FIELD_IDENTIFIER,
    FIELD_SECRET,
    FIELD_TICKET,
    LOGIN_PAGE_NAME,
    REQUEST_TIMEOUT,
)
from ..errors import AuthRejected, ExtractError
from ..extract import extract_first_hidden_value
from ..logging_setup import log
from ..models import Credentials
from ..network import PortalEndpoints, http_get, http_post, is_success


def is_login_page(url: str) -> bool:
    """
    Return True when *url* is the portal's login form.

    Only the last path segment is compared, so unrelated paths that merely
    contain 'login' (stylesheets, scripts) do not match.  Path parameters
    (``login.php;sid=…``) are ignored.
    """
    path = urllib.parse.urlsplit(url or "").path.lower()
    segment = path.rsplit("/", 1)[-1].split(";", 1)[0]
    return segment == LOGIN_PAGE_NAME


def fetch_ticket(
    session: requests.Session,
    endpoints: PortalEndpoints,
    timeout=REQUEST_TIMEOUT,
) -> str:
    """
    GET the login entry page and return its one-time ticket.

    Raises:
        AuthRejected: non-2xx status or no ticket on the page
        TransportError: the request itself failed
    """
    url = endpoints.ticket_url
    resp = http_get(session, url, timeout=timeout)
    if not is_success(resp):
        raise AuthRejected(url, f"login entry returned HTTP {resp.status_code}")
    try:
        ticket = extract_first_hidden_value(resp.text)
    except ExtractError as exc:
        raise AuthRejected(url, "no ticket on login entry page") from exc
    log.debug("Ticket issued (%d chars). Cookies after GET: %s",
              len(ticket), list(session.cookies.keys()))
    return ticket


def login(
    session: requests.Session,
    credentials: Credentials,
    endpoints: PortalEndpoints | None = None,
    timeout=REQUEST_TIMEOUT,
) -> str:
    """
    Authenticate against the customer portal.

      GET  MWBWL0130          → first hidden input is the ticket
      POST login.php          telnum / password / ticket, following redirects

    Success is decided by where the redirects end up, not by the status
    code: a rejected login lands back on login.php, typically with HTTP 200.

    Returns the final URL after redirects on success.

    Raises:
        AuthRejected: the portal did not accept the credentials
        TransportError: a request failed at the transport level
    """
    endpoints = endpoints or PortalEndpoints.for_domain()

    # Step 1 – ticket
    ticket = fetch_ticket(session, endpoints, timeout=timeout)

    # Step 2 – submit credentials
    payload = {
        FIELD_IDENTIFIER: credentials.identifier,
        FIELD_SECRET: credentials.secret,
        FIELD_TICKET: ticket,
    }
    resp = http_post(session, endpoints.login_url, payload, timeout=timeout)

    # Step 3 – judge the outcome by the final URL
    final_url = resp.url or endpoints.login_url
    if is_login_page(final_url):
        log.error("Login failed – portal returned the login form (HTTP %s).",
                  resp.status_code)
        raise AuthRejected(final_url)
    if not is_success(resp):
        log.error("Login failed – HTTP %s at %s", resp.status_code, final_url)
        raise AuthRejected(final_url, f"HTTP {resp.status_code}")

    log.info("Login successful (HTTP %s). Landed on %s. Active cookies: %s",
             resp.status_code, final_url, list(session.cookies.keys()))
    return final_url
