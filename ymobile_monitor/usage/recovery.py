"""Single relogin-and-retry pass around usage retrieval."""

from ..errors import MonitorError
from ..logging_setup import log
from ..models import Credentials, UsageSnapshot


def fetch_with_recovery(client, credentials: Credentials | None = None) -> UsageSnapshot:
    """
    Fetch usage through *client*, logging in again once if that fails.

    The portal session can expire between a login and a later refresh.
    On any MonitorError from the first fetch, and only when *credentials*
    are available, this logs in once and fetches once more; whatever that
    second fetch produces is final.  When the relogin fails, or there is
    nothing to log in with, the first fetch's error is raised unchanged.
    """
    try:
        return client.fetch_usage()
    except MonitorError as first_error:
        if not credentials:
            log.warning("Usage fetch failed and no credentials to re-login: %s",
                        first_error)
            raise

        log.warning("Usage fetch failed (%s) – logging in again", first_error)
        try:
            client.login(credentials)
        except MonitorError as relogin_error:
            log.error("Re-login failed: %s", relogin_error)
            raise first_error from None

    return client.fetch_usage()
