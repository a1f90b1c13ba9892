"""
qBittorrent WebUI client.

Thin synchronous wrapper over the qBittorrent WebUI HTTP API with
CamelCase records and datetime timestamps.
"""

from .client import QBittorrentClient
from .config import Config
from .exceptions import AuthenticationError, DecodeError, QBittorrentError
from .models import Filter, Sort
from .session import Session

__version__ = "0.1.0"
__all__ = [
    "QBittorrentClient",
    "Session",
    "Config",
    "Filter",
    "Sort",
    "QBittorrentError",
    "AuthenticationError",
    "DecodeError",
]
