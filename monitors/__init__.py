"""Source monitors: one fetch-and-compare strategy per kind of source."""

from .api_json import ApiJsonMonitor
from .base import BaseMonitor
from .exceptions import ExtractionError, FetchError, MonitorError, ParseError
from .exchange_account import ExchangeAccountMonitor, position_fingerprint
from .factory import build_monitor
from .web_page import WebPageMonitor

__all__ = [
    "ApiJsonMonitor",
    "BaseMonitor",
    "ExchangeAccountMonitor",
    "ExtractionError",
    "FetchError",
    "MonitorError",
    "ParseError",
    "WebPageMonitor",
    "build_monitor",
    "position_fingerprint",
]
