"""
Exception hierarchy for the usage monitor.

Every failure the portal client can produce is a ``MonitorError`` subclass so
callers can tell a transient session problem apart from a structural or
credential failure::

    MonitorError
    ├── TransportError        DNS / TLS / connect / read failures, timeouts
    ├── HttpStatusError       non-2xx status or empty body on a step
    ├── AuthRejected          the portal sent us back to the login page
    ├── SessionBusy           another action is already running
    └── ExtractError          expected markup is missing
        ├── NotFound
        ├── InsufficientTokens
        ├── ContainerNotFound
        └── InsufficientTables
"""


class MonitorError(Exception):
    """Base class for all usage-monitor failures."""


class TransportError(MonitorError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        msg = f"Request to {url} failed"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class HttpStatusError(MonitorError):
    def __init__(self, url: str, status_code: int, empty_body: bool = False) -> None:
        self.url = url
        self.status_code = status_code
        self.empty_body = empty_body
        if empty_body:
            msg = f"Empty body from {url} (HTTP {status_code})"
        else:
            msg = f"HTTP {status_code} from {url}"
        super().__init__(msg)


class AuthRejected(MonitorError):
    def __init__(self, url: str, reason: str = "credentials rejected") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Login rejected ({reason}) at {url}")


class SessionBusy(MonitorError):
    """Raised when an action overlaps one that is still in flight."""


class ExtractError(MonitorError):
    """The HTML did not have the structure extraction relies on."""


class NotFound(ExtractError):
    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__(f"{what} not found")


class InsufficientTokens(ExtractError):
    def __init__(self, found: int, names: list[str], required: int = 2) -> None:
        self.found = found
        self.names = list(names)
        self.required = required
        super().__init__(
            f"Missing hidden inputs (found: {found}, names: [{', '.join(self.names)}])"
        )


class ContainerNotFound(ExtractError):
    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"Usage container {selector!r} not found")


class InsufficientTables(ExtractError):
    def __init__(self, found: int, required: int = 4) -> None:
        self.found = found
        self.required = required
        super().__init__(
            f"Insufficient usage tables (found: {found}, required: {required})"
        )
