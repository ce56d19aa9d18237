"""Usage page retrieval: token pair → usage summary → UsageSnapshot."""

from datetime import datetime

import requests

from ..config import FIELD_TOKENS, REQUEST_TIMEOUT
from ..extract import extract_hidden_token_pair, extract_usage_snapshot
from ..errors import InsufficientTokens
from ..logging_setup import log
from ..models import UsageSnapshot
from ..network import PortalEndpoints, http_get, http_post, require_body


def fetch_token_pair(
    session: requests.Session,
    endpoints: PortalEndpoints,
    timeout=REQUEST_TIMEOUT,
) -> tuple[str, str]:
    """
    GET the token-issuing page and return the first two hidden values.

    Raises:
        HttpStatusError: non-2xx status or empty body
        InsufficientTokens: fewer than two hidden inputs on the page
        TransportError: the request itself failed
    """
    url = endpoints.token_url
    body = require_body(http_get(session, url, timeout=timeout), url)
    try:
        pair = extract_hidden_token_pair(body)
    except InsufficientTokens as exc:
        log.error("Token page had %d hidden input(s): %s", exc.found, exc.names)
        raise
    log.debug("Token pair issued by %s", url)
    return pair


def fetch_usage(
    session: requests.Session,
    endpoints: PortalEndpoints | None = None,
    timeout=REQUEST_TIMEOUT,
    now: datetime | None = None,
) -> UsageSnapshot:
    """
    Retrieve the usage summary with an already authenticated session.

      GET  MRERE0000          → first two hidden inputs are mfiv / mfym
      POST /resfe/top/        mfiv / mfym → usage summary HTML

    The session is trusted to be logged in; an expired session shows up as
    one of the errors below and is handled by the relogin policy.

    Raises:
        HttpStatusError, TransportError, ExtractError
    """
    endpoints = endpoints or PortalEndpoints.for_domain()

    token1, token2 = fetch_token_pair(session, endpoints, timeout=timeout)

    url = endpoints.usage_url
    payload = dict(zip(FIELD_TOKENS, (token1, token2)))
    body = require_body(http_post(session, url, payload, timeout=timeout), url)

    snapshot = extract_usage_snapshot(body, now=now)
    log.info(
        "Usage: %.2f GB remaining of %.2f GB (%.1f%% used)",
        snapshot.remaining_gb, snapshot.total_gb, snapshot.used_percentage,
    )
    return snapshot
