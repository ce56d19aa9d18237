"""
ymobile_monitor
===============
Python package that logs into the My Y!mobile customer portal and reports
the line's data usage (carry-over, base allowance, purchased extra, used).

Package structure
-----------------
ymobile_monitor/
├── __init__.py       – package init and public API
├── config.py         – portal endpoints, form fields, timeouts, messages
├── errors.py         – MonitorError hierarchy
├── models.py         – UsageSnapshot, Credentials
├── client.py         – PortalClient: one explicit portal session
├── monitor.py        – UsageMonitor: state + login/refresh/logout intents
├── credentials.py    – in-memory and JSON-file credential stores
├── cli.py            – argparse CLI (``python -m ymobile_monitor``)
├── logging_setup.py  – colorlog-aware logger
├── network/          – PortalSession, HostCookieJar, request helpers
├── auth/             – ticket + credential handshake
├── usage/            – token pair + usage page, relogin policy
└── extract/          – BeautifulSoup extraction of hidden inputs / usage

Quick start
-----------
    from ymobile_monitor import Credentials, PortalClient

    with PortalClient() as client:
        creds = Credentials("09012345678", "your_password")
        client.login(creds)
        snapshot = client.fetch_with_recovery(creds)
        print(snapshot.remaining_gb, "GB left")
"""

from .client import PortalClient
from .credentials import FileCredentialStore, MemoryCredentialStore
from .errors import (
    AuthRejected,
    ContainerNotFound,
    ExtractError,
    HttpStatusError,
    InsufficientTables,
    InsufficientTokens,
    MonitorError,
    NotFound,
    SessionBusy,
    TransportError,
)
from .extract import (
    extract_first_hidden_value,
    extract_hidden_token_pair,
    extract_usage_snapshot,
)
from .models import Credentials, UsageSnapshot
from .monitor import MonitorState, UsageMonitor
from .usage import fetch_with_recovery

__all__ = [
    "PortalClient",
    "UsageMonitor",
    "MonitorState",
    "Credentials",
    "UsageSnapshot",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "fetch_with_recovery",
    "extract_first_hidden_value",
    "extract_hidden_token_pair",
    "extract_usage_snapshot",
    "MonitorError",
    "TransportError",
    "HttpStatusError",
    "AuthRejected",
    "SessionBusy",
    "ExtractError",
    "NotFound",
    "InsufficientTokens",
    "ContainerNotFound",
    "InsufficientTables",
]
