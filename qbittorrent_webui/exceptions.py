"""
Exceptions raised by the qBittorrent WebUI client.

Transport problems (connection refused, HTTP error statuses, timeouts) are
not wrapped: they surface as the ``requests`` exceptions that caused them.
"""


class QBittorrentError(Exception):
    """Base class for errors raised by this package."""
    pass


class AuthenticationError(QBittorrentError):
    """The server did not acknowledge the login with ``Ok.``."""

    def __init__(self, body: str):
        self.body = body
        super().__init__(f"Login rejected by qBittorrent: {body!r}")


class DecodeError(QBittorrentError):
    """A response body was not UTF-8 JSON of the expected shape."""
    pass
