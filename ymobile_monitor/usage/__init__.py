"""Usage retrieval submodule – data-page handshake and relogin policy."""

from ymobile_monitor.usage.fetch import fetch_token_pair, fetch_usage
from ymobile_monitor.usage.recovery import fetch_with_recovery

__all__ = [
    "fetch_token_pair",
    "fetch_usage",
    "fetch_with_recovery",
]
