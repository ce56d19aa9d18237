"""Configuration constants for the Y!mobile usage monitor."""

import os
from pathlib import Path

PORTAL_DOMAIN = "ymobile.jp"

# Credentials can also be supplied via YMOBILE_ID / YMOBILE_PASSWORD env vars
DEFAULT_USER = os.environ.get("YMOBILE_ID", "")
DEFAULT_PASSWORD = os.environ.get("YMOBILE_PASSWORD", "")
DEFAULT_CREDENTIALS_FILE = Path(
    os.environ.get(
        "YMOBILE_CREDENTIALS_FILE",
        Path.home() / ".config" / "ymobile-monitor" / "credentials.json",
    )
)

# Wire contract with the portal – host prefix + path for each handshake step
TICKET_HOST = "my"
TICKET_PATH = "/muc/d/webLink/doSend/MWBWL0130"      # login entry, issues the ticket
LOGIN_HOST  = "id.my"
LOGIN_PATH  = "/sbid_auth/type1/2.0/login.php"       # credential submit
TOKEN_HOST  = "my"
TOKEN_PATH  = "/muc/d/webLink/doSend/MRERE0000"      # issues the mfiv/mfym pair
USAGE_HOST  = "re61.my"
USAGE_PATH  = "/resfe/top/"                          # usage summary page

# Form field names expected by the portal
FIELD_IDENTIFIER = "telnum"
FIELD_SECRET     = "password"
FIELD_TICKET     = "ticket"
FIELD_TOKENS     = ("mfiv", "mfym")

# The portal bounces rejected logins back to this page
LOGIN_PAGE_NAME = "login.php"

# Usage summary markup: one container holding the four usage tables
USAGE_CONTAINER_SELECTOR = ".list-toggle-content.js-toggle-content.m-top-20"
USAGE_TABLE_COUNT = 4

CONNECT_TIMEOUT = float(os.environ.get("YMOBILE_TIMEOUT", "30"))   # seconds
READ_TIMEOUT    = float(os.environ.get("YMOBILE_TIMEOUT", "30"))   # seconds
REQUEST_TIMEOUT = (CONNECT_TIMEOUT, READ_TIMEOUT)

USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Mobile Safari/537.36"
)

# Display format of UsageSnapshot.observed_at
OBSERVED_AT_FORMAT = "%Y-%m-%d %H:%M"

# Messages handed to the presentation layer
MSG_AUTO_LOGIN_FAILED = "Automatic login failed."
MSG_LOGIN_FAILED      = "Login failed. Check your phone number and password."
MSG_FETCH_FAILED      = "Could not retrieve data usage."
MSG_CONNECTION_FAILED = "Could not reach the portal. Check your connection."
