"""
Credential stores – where a remembered phone number / password lives.

Any object with ``get_identifier()``, ``get_secret()``, ``save()`` and
``clear()`` can be handed to :class:`~ymobile_monitor.monitor.UsageMonitor`.
"""

import json
import os
from pathlib import Path
from typing import Protocol

from .config import DEFAULT_CREDENTIALS_FILE
from .logging_setup import log
from .models import Credentials


class CredentialStore(Protocol):
    def get_identifier(self) -> str | None: ...
    def get_secret(self) -> str | None: ...
    def save(self, identifier: str, secret: str) -> None: ...
    def clear(self) -> None: ...


def stored_credentials(store: CredentialStore) -> Credentials | None:
    """Return the stored pair, or None unless both halves are present."""
    identifier = store.get_identifier()
    secret = store.get_secret()
    if identifier and secret:
        return Credentials(identifier, secret)
    return None


class MemoryCredentialStore:
    """Keeps credentials for the lifetime of the process only."""

    def __init__(self, identifier: str | None = None, secret: str | None = None) -> None:
        self._identifier = identifier
        self._secret = secret

    def get_identifier(self) -> str | None:
        return self._identifier

    def get_secret(self) -> str | None:
        return self._secret

    def save(self, identifier: str, secret: str) -> None:
        self._identifier = identifier
        self._secret = secret

    def clear(self) -> None:
        self._identifier = None
        self._secret = None


class FileCredentialStore:
    """
    Stores credentials as JSON in a file only the current user can read.

    A missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Path | str = DEFAULT_CREDENTIALS_FILE) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable credentials file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def get_identifier(self) -> str | None:
        return self._read().get("identifier")

    def get_secret(self) -> str | None:
        return self._read().get("secret")

    def save(self, identifier: str, secret: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump({"identifier": identifier, "secret": secret}, fh)
        log.debug("Credentials saved to %s", self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        log.debug("Credentials removed from %s", self.path)
