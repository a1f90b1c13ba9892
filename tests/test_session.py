from urllib.parse import parse_qs

import pytest
import requests

from qbittorrent_webui.client import QBittorrentClient
from qbittorrent_webui.exceptions import AuthenticationError
from qbittorrent_webui.session import Session


class TestOpen:
    def test_login_request(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.")
        session = Session.open(endpoint, "admin", "adminadmin", http=http)

        request = adapter.last("login")
        assert request.url == f"{endpoint}/login"
        assert request.headers["Referer"] == endpoint
        assert parse_qs(request.body) == {"username": ["admin"], "password": ["adminadmin"]}
        assert session.endpoint == endpoint
        assert not session.closed

    def test_trailing_slash_stripped(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.")
        session = Session.open(endpoint + "/", "admin", "adminadmin", http=http)
        assert session.url("version/api") == f"{endpoint}/version/api"

    def test_wrong_password(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Fails.")

        with pytest.raises(AuthenticationError) as exc_info:
            QBittorrentClient.login(endpoint, "admin", "wrong", http=http)

        assert exc_info.value.body == "Fails."
        assert "Fails." in str(exc_info.value)
        assert adapter.closed

    def test_banned_ip(self, adapter, http, endpoint):
        body = b"Your IP address has been banned after too many failed authentication attempts."
        adapter.add("POST", "login", body, status=403)

        with pytest.raises(AuthenticationError) as exc_info:
            Session.open(endpoint, "admin", "wrong", http=http)
        assert exc_info.value.body == body.decode()

    def test_success_marker_must_match_exactly(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.\n")
        with pytest.raises(AuthenticationError):
            Session.open(endpoint, "admin", "adminadmin", http=http)

    def test_connection_error_propagates(self, adapter, http, endpoint):
        adapter.add("POST", "login", exc=requests.ConnectionError("refused"))
        with pytest.raises(requests.ConnectionError):
            Session.open(endpoint, "admin", "adminadmin", http=http)
        assert adapter.closed

    def test_default_timeout_is_none(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.")
        Session.open(endpoint, "admin", "adminadmin", timeout=None, http=http)
        assert adapter.timeouts == [None]

    def test_configured_timeout(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.")
        adapter.add("GET", "version/api", b"15")
        session = Session.open(endpoint, "admin", "adminadmin", timeout=2.5, http=http)
        session.get("version/api")
        assert adapter.timeouts == [2.5, 2.5]


class TestRequests:
    def test_http_error_propagates(self, adapter, client):
        adapter.add("GET", "query/torrents", b"Forbidden", status=403)
        with pytest.raises(requests.HTTPError):
            client.session.get("query/torrents")

    def test_unchecked_request(self, adapter, client):
        adapter.add("GET", "query/torrents", b"Forbidden", status=403)
        response = client.session.get("query/torrents", check=False)
        assert response.status_code == 403


class TestClose:
    def test_close_logs_out(self, adapter, client):
        adapter.add("POST", "logout", b"")
        client.session.close()

        assert adapter.last("logout").method == "POST"
        assert client.session.closed
        assert adapter.closed

    def test_close_ignores_server_error(self, adapter, client):
        adapter.add("POST", "logout", b"", status=500)
        client.session.close()
        assert client.session.closed

    def test_close_ignores_connection_error(self, adapter, client):
        adapter.add("POST", "logout", exc=requests.ConnectionError("gone"))
        client.session.close()
        assert client.session.closed
        assert adapter.closed

    def test_close_twice(self, adapter, client):
        client.session.close()
        client.session.close()
        assert sum(1 for r in adapter.requests if r.url.endswith("/logout")) == 1

    def test_context_manager(self, adapter, http, endpoint):
        adapter.add("POST", "login", b"Ok.")
        with Session.open(endpoint, "admin", "adminadmin", http=http) as session:
            assert not session.closed
        assert session.closed
        adapter.last("logout")
