"""Convergekit core package."""
from .clock import Clock, SystemClock, utc_now_iso
from .config import HarnessConfig, parse_duration
from .logging import log_event, log_verbose

__all__ = [
    "Clock",
    "HarnessConfig",
    "SystemClock",
    "log_event",
    "log_verbose",
    "parse_duration",
    "utc_now_iso",
]
