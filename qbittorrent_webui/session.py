"""
Authenticated session against a qBittorrent WebUI.

A Session pairs the WebUI base address with a ``requests.Session`` whose
cookie jar holds the ``SID`` cookie issued at login. Sessions are only
handed out after the server acknowledged the login; ``close()`` logs out
and releases the transport.

Usage:
    with Session.open("http://localhost:8080", "admin", "secret") as session:
        response = session.get("version/api")
"""

from typing import Optional

import requests

from .config import Config
from .decoder import decode_text
from .exceptions import AuthenticationError
from .logger import logger


LOGIN_SUCCESS = "Ok."


class Session:
    def __init__(self, endpoint: str, http: requests.Session, timeout: Optional[float] = None):
        self.endpoint = endpoint.rstrip('/')
        self.http = http
        self.timeout = timeout
        self.closed = False

    @classmethod
    def open(
        cls,
        endpoint: str = Config.QBITTORRENT_URL,
        username: str = Config.QBITTORRENT_USERNAME,
        password: str = Config.QBITTORRENT_PASSWORD,
        timeout: Optional[float] = Config.QBITTORRENT_TIMEOUT,
        http: Optional[requests.Session] = None,
    ) -> "Session":
        """
        Log in and return an authenticated session.

        Args:
            endpoint: WebUI base address, e.g. http://localhost:8080
            username: WebUI username
            password: WebUI password
            timeout: Seconds per request; None waits indefinitely
            http: Transport to use; a fresh requests.Session by default

        Raises:
            AuthenticationError: If the server does not answer ``Ok.``
        """
        session = cls(endpoint, http or requests.Session(), timeout)
        logger.debug(f"Logging in to {session.endpoint} as {username}")

        try:
            response = session.post(
                "login",
                data={"username": username, "password": password},
                headers={"Referer": session.endpoint},
                check=False,
            )
            body = decode_text(response)
        except Exception:
            session.http.close()
            raise

        if body != LOGIN_SUCCESS:
            logger.warning(f"Login to {session.endpoint} rejected: {body!r}")
            session.http.close()
            raise AuthenticationError(body)

        logger.info(f"Logged in to {session.endpoint} as {username}")
        return session

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def url(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"

    def request(self, method: str, path: str, check: bool = True, **kwargs) -> requests.Response:
        """
        Send one request relative to the endpoint.

        HTTP error statuses raise ``requests.HTTPError`` unless ``check`` is
        False; connection errors and timeouts propagate from requests.
        """
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"{method} {path}")
        response = self.http.request(method, self.url(path), **kwargs)
        if check:
            response.raise_for_status()
        return response

    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def close(self, logout: bool = True):
        """
        Release the transport, logging out first unless ``logout`` is False.

        The server's answer to the logout is ignored.
        """
        if self.closed:
            return
        try:
            if logout:
                self.post("logout", check=False)
        except requests.RequestException as e:
            logger.debug(f"Logout from {self.endpoint} failed: {e}")
        finally:
            self.http.close()
            self.closed = True
            logger.debug(f"Session to {self.endpoint} closed")
