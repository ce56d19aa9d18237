"""Authentication submodule – login handshake and login-page detection."""

from ymobile_monitor.auth.login import fetch_ticket, is_login_page, login

__all__ = [
    "fetch_ticket",
    "is_login_page",
    "login",
]
