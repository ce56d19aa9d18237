"""
Network operations module for the portal HTTP session and cookie handling.
"""

from ymobile_monitor.network.client import (
    PortalEndpoints,
    PortalSession,
    build_session,
    http_get,
    http_post,
    is_success,
    portal_url,
    require_body,
)
from ymobile_monitor.network.cookies import HostCookieJar

__all__ = [
    "HostCookieJar",
    "PortalEndpoints",
    "PortalSession",
    "build_session",
    "http_get",
    "http_post",
    "is_success",
    "portal_url",
    "require_body",
]
