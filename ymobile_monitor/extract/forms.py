"""
ymobile_monitor.extract.forms
=============================
Hidden form values the portal hands out before each state-changing POST.

The ticket (login) and the mfiv/mfym pair (usage page) are not labelled in a
stable way, so they are picked by position among the page's hidden inputs.
"""

from bs4 import Tag

from ..errors import InsufficientTokens, NotFound
from .html import parse_html

_HIDDEN_INPUT = "input[type=hidden]"


def hidden_inputs(html: str | bytes | None) -> list[Tag]:
    """Return every ``<input type="hidden">`` in document order."""
    return parse_html(html).select(_HIDDEN_INPUT)


def extract_first_hidden_value(html: str | bytes | None) -> str:
    """
    Return the ``value`` of the first hidden input (the login ticket).

    Raises:
        NotFound: when the document has no hidden input
    """
    first = parse_html(html).select_one(_HIDDEN_INPUT)
    if first is None:
        raise NotFound("hidden input")
    return first.get("value", "")


def extract_hidden_token_pair(html: str | bytes | None) -> tuple[str, str]:
    """
    Return the values of the first two hidden inputs, in document order.

    Raises:
        InsufficientTokens: fewer than two hidden inputs; carries the count and
            the ``name`` attributes that were found
    """
    inputs = hidden_inputs(html)
    if len(inputs) < 2:
        raise InsufficientTokens(
            found=len(inputs),
            names=[el.get("name", "") for el in inputs],
        )
    return inputs[0].get("value", ""), inputs[1].get("value", "")
