from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from qbittorrent_webui.client import QBittorrentClient


ENDPOINT = "http://qbt.test:8080"


def build_response(body=b"", status=200, headers=None, request=None):
    """Build a requests.Response the way HTTPAdapter would, without a socket."""
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.headers = CaseInsensitiveDict({"Content-Length": str(len(body))})
    for key, value in (headers or {}).items():
        # None drops a default header
        if value is None:
            response.headers.pop(key, None)
        else:
            response.headers[key] = value
    response.encoding = get_encoding_from_headers(response.headers)
    response._content = body
    if request is not None:
        response.request = request
        response.url = request.url
    return response


class StubAdapter(BaseAdapter):
    """Transport adapter answering from canned routes and recording requests."""

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.requests = []
        self.timeouts = []
        self.closed = False

    def add(self, method, path, body=b"", status=200, headers=None, exc=None):
        self.routes[(method, path)] = (body, status, headers, exc)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)

        path = urlsplit(request.url).path.lstrip('/')
        body, status, headers, exc = self.routes.get((request.method, path), (b"Not Found", 404, None, None))
        if exc is not None:
            raise exc
        return build_response(body, status, headers, request)

    def close(self):
        self.closed = True

    def last(self, path):
        """Most recent request sent to ``path``."""
        for request in reversed(self.requests):
            if urlsplit(request.url).path.lstrip('/') == path:
                return request
        raise AssertionError(f"No request sent to {path}")


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def adapter():
    return StubAdapter()


@pytest.fixture
def http(adapter):
    session = requests.Session()
    session.mount(ENDPOINT, adapter)
    return session


@pytest.fixture
def client(adapter, http):
    adapter.add("POST", "login", b"Ok.")
    return QBittorrentClient.login(ENDPOINT, "admin", "adminadmin", http=http)


@pytest.fixture
def endpoint():
    return ENDPOINT
