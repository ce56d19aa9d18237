"""Logging configuration for the Y!mobile usage monitor."""

import logging

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("ymobile-monitor")

_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%H:%M:%S"


def _setup_logging(debug: bool = False) -> None:
    """
    Attach a single console handler to the monitor logger.

    With *debug* the urllib3 connection log is enabled as well, which shows
    every hop of the login redirect chain.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt=_LOG_DATEFMT,
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FMT, datefmt=_LOG_DATEFMT))
    log.addHandler(handler)

    urllib3_log = logging.getLogger("urllib3")
    urllib3_log.setLevel(logging.DEBUG if debug else logging.WARNING)
    if debug:
        urllib3_log.addHandler(handler)
