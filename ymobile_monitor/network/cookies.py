"""
Host-scoped cookie jar for the portal session.

The portal spreads one login over several hosts (``my.``, ``id.my.``,
``re61.my.``).  Cookies are kept per request host and only ever sent back to
that same host.  A response that sets cookies replaces the host's whole cookie
list; there is no merge by name.
"""

import time
import urllib.parse
from http.cookiejar import Cookie

from requests.cookies import RequestsCookieJar


def _path_matches(cookie_path: str, request_path: str) -> bool:
    """RFC 6265 §5.1.4 path-match."""
    if request_path == cookie_path:
        return True
    if request_path.startswith(cookie_path):
        return cookie_path.endswith("/") or request_path[len(cookie_path)] == "/"
    return False


def _host_of(url: str) -> str:
    return (urllib.parse.urlsplit(url).hostname or "").lower()


class HostCookieJar(RequestsCookieJar):
    """
    A ``RequestsCookieJar`` whose authoritative state is a host → cookies map.

    ``requests`` calls :meth:`extract_cookies` for every response, including
    each redirect hop, so the map always reflects the latest response per
    host.  The inherited jar storage is kept as a mirror of the map so the
    usual dict-style accessors (``keys()``, ``get()``, ``dict(jar)``) keep
    working for logging.
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._by_host: dict[str, list[Cookie]] = {}

    def store(self, host: str, cookies) -> None:
        """Replace every cookie held for *host* with *cookies*."""
        self._by_host[host.lower()] = list(cookies)
        self._rebuild_mirror()

    def load(self, host: str, url: str) -> list[Cookie]:
        """Return the cookies stored for *host* that apply to *url*."""
        parts = urllib.parse.urlsplit(url)
        path = parts.path or "/"
        secure = parts.scheme == "https"
        now = int(time.time())
        return [
            c for c in self._by_host.get(host.lower(), [])
            if not c.is_expired(now)
            and (secure or not c.secure)
            and _path_matches(c.path or "/", path)
        ]

    def hosts(self) -> list[str]:
        return [h for h, cookies in self._by_host.items() if cookies]

    def cookie_header(self, url: str) -> str:
        """Render the ``Cookie`` header value for a request to *url*."""
        pairs = []
        for c in self.load(_host_of(url), url):
            pairs.append(c.name if c.value is None else f"{c.name}={c.value}")
        return "; ".join(pairs)

    def extract_cookies(self, response, request) -> None:
        host = _host_of(request.get_full_url())
        accepted = [
            c for c in self.make_cookies(response, request)
            if self._policy.set_ok(c, request)
        ]
        # Responses without Set-Cookie leave the host's cookies alone.
        if accepted:
            self.store(host, accepted)

    def clear(self, domain=None, path=None, name=None) -> None:
        if domain is None:
            self._by_host.clear()
        else:
            for host, cookies in self._by_host.items():
                self._by_host[host] = [
                    c for c in cookies
                    if not (
                        c.domain == domain
                        and (path is None or c.path == path)
                        and (name is None or c.name == name)
                    )
                ]
        super().clear(domain, path, name)

    def _rebuild_mirror(self) -> None:
        super().clear()
        for cookies in self._by_host.values():
            for cookie in cookies:
                self.set_cookie(cookie)
