"""
ymobile_monitor.extract
=======================
Sub-package for pulling structured values out of portal HTML.

Public API
----------
    from ymobile_monitor.extract import (
        extract_first_hidden_value,
        extract_hidden_token_pair,
        extract_usage_snapshot,
    )
"""

from .forms import extract_first_hidden_value, extract_hidden_token_pair, hidden_inputs
from .usage import extract_usage_snapshot, parse_gb

__all__ = [
    "extract_first_hidden_value",
    "extract_hidden_token_pair",
    "extract_usage_snapshot",
    "hidden_inputs",
    "parse_gb",
]
