"""
Python client for the qBittorrent WebUI API.

Each method maps to one WebUI endpoint: it builds the request, sends it
through the authenticated Session and reshapes the JSON answer into
records keyed by display name (see ``naming``), with epoch timestamps
turned into datetimes.

Usage:
    from qbittorrent_webui import Filter, QBittorrentClient, Sort

    with QBittorrentClient.login("http://localhost:8080", "admin", "secret") as client:
        for torrent in client.torrents(filter=Filter.Completed, sort=Sort.Name):
            print(torrent["Name"], torrent["AddedOn"])
"""

import json
import os
from typing import Any, Dict, List, Optional, Union

from .config import Config
from .decoder import decode_json, decode_text, normalize_record, normalize_records
from .exceptions import DecodeError
from .logger import logger
from .models import (
    Filter,
    NO_TIMESTAMP_FIELDS,
    PROPERTIES_TIMESTAMP_FIELDS,
    Sort,
    TORRENT_TIMESTAMP_FIELDS,
)
from .session import Session


Hashes = Union[str, List[str]]


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _version_number(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise DecodeError(f"Expected a version number, got {text!r}")


def _join_hashes(hashes: Hashes) -> str:
    if isinstance(hashes, str):
        return hashes
    return "|".join(hashes)


class QBittorrentClient:
    def __init__(self, session: Session):
        self.session = session

    @classmethod
    def login(
        cls,
        endpoint: str = Config.QBITTORRENT_URL,
        username: str = Config.QBITTORRENT_USERNAME,
        password: str = Config.QBITTORRENT_PASSWORD,
        timeout: Optional[float] = Config.QBITTORRENT_TIMEOUT,
        http=None,
    ) -> "QBittorrentClient":
        """Authenticate and return a client bound to the new session."""
        return cls(Session.open(endpoint, username, password, timeout=timeout, http=http))

    def logout(self):
        """End the session. The server's answer is ignored."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logout()

    # -------------------------------------------------------------------------
    # Version Methods
    # -------------------------------------------------------------------------

    def api_version(self) -> int:
        """WebUI API version."""
        return _version_number(decode_text(self.session.get("version/api")))

    def app_version(self) -> str:
        """qBittorrent application version, e.g. ``v3.3.16``."""
        return decode_text(self.session.get("version/qbittorrent"))

    def api_min_version(self) -> int:
        """Oldest WebUI API version the server remains compatible with."""
        return _version_number(decode_text(self.session.get("version/api_min")))

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def torrents(
        self,
        filter: Optional[Filter] = None,
        category: Optional[str] = None,
        sort: Optional[Sort] = None,
        reverse: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List torrents, in the order the server returns them.

        Args:
            filter: Only torrents in this state
            category: Only torrents in this category ("" for uncategorized)
            sort: Sort key applied by the server
            reverse: Reverse the sort order
            limit: Maximum number of torrents
            offset: Number of torrents to skip

        Returns:
            One record per torrent; ``AddedOn``, ``CompletionOn``,
            ``LastActivity`` and ``SeenComplete`` are datetimes
        """
        params = {}
        if filter is not None:
            params["filter"] = filter.wire_name
        if category is not None:
            params["category"] = category
        if sort is not None:
            params["sort"] = sort.wire_name
        if reverse is not None:
            params["reverse"] = _bool(reverse)
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        response = self.session.get("query/torrents", params=params)
        return normalize_records(decode_json(response), TORRENT_TIMESTAMP_FIELDS)

    def properties(self, info_hash: str) -> Dict[str, Any]:
        """
        General properties of one torrent.

        ``AdditionDate``, ``CompletionDate``, ``CreationDate`` and
        ``LastSeen`` are datetimes.
        """
        response = self.session.get(f"query/propertiesGeneral/{info_hash}")
        return normalize_record(decode_json(response), PROPERTIES_TIMESTAMP_FIELDS)

    def web_seeds(self, info_hash: str) -> List[Dict[str, Any]]:
        """Web seeds of one torrent."""
        response = self.session.get(f"query/propertiesWebSeeds/{info_hash}")
        return normalize_records(decode_json(response), NO_TIMESTAMP_FIELDS)

    def trackers(self, info_hash: str) -> List[Dict[str, Any]]:
        """Trackers of one torrent."""
        response = self.session.get(f"query/propertiesTrackers/{info_hash}")
        return normalize_records(decode_json(response), NO_TIMESTAMP_FIELDS)

    def files(self, info_hash: str) -> List[Dict[str, Any]]:
        """Files of one torrent."""
        response = self.session.get(f"query/propertiesFiles/{info_hash}")
        return normalize_records(decode_json(response), NO_TIMESTAMP_FIELDS)

    def transfer_info(self) -> Dict[str, Any]:
        """Global transfer statistics."""
        response = self.session.get("query/transferInfo")
        return normalize_record(decode_json(response), NO_TIMESTAMP_FIELDS)

    def preferences(self) -> Dict[str, Any]:
        """
        Application preferences.

        Keys are returned as wire names, the same names ``set_preferences``
        accepts, since not every preference key is in snake_case.
        """
        return decode_json(self.session.get("query/preferences"))

    # -------------------------------------------------------------------------
    # Command Methods
    # -------------------------------------------------------------------------

    def shutdown(self):
        """Ask qBittorrent to exit. The session is unusable afterwards."""
        logger.info(f"Shutting down qBittorrent at {self.session.endpoint}")
        self.session.post("command/shutdown", check=False)
        self.session.close(logout=False)

    def add_urls(
        self,
        urls: Union[str, List[str]],
        save_path: Optional[str] = None,
        cookie: Optional[str] = None,
        category: Optional[str] = None,
        skip_checking: Optional[bool] = None,
        paused: Optional[bool] = None,
    ):
        """
        Add torrents from magnet links or HTTP URLs.

        Args:
            urls: One URL or a list of URLs
            save_path: Download directory
            cookie: Cookie sent when fetching HTTP URLs
            category: Category to assign
            skip_checking: Skip hash checking
            paused: Add in paused state
        """
        if isinstance(urls, str):
            urls = [urls]

        fields = [("urls", "\n".join(urls))]
        fields.extend(self._add_options(save_path, cookie, category, skip_checking, paused))

        logger.info(f"Adding {len(urls)} torrent(s) by URL")
        self.session.post("command/download", files=[(name, (None, value)) for name, value in fields])

    def upload(
        self,
        paths: Union[str, List[str]],
        save_path: Optional[str] = None,
        cookie: Optional[str] = None,
        category: Optional[str] = None,
        skip_checking: Optional[bool] = None,
        paused: Optional[bool] = None,
    ):
        """Add torrents from local .torrent files."""
        if isinstance(paths, str):
            paths = [paths]

        files = []
        for path in paths:
            with open(path, "rb") as f:
                files.append(("torrents", (os.path.basename(path), f.read(), "application/x-bittorrent")))
        for name, value in self._add_options(save_path, cookie, category, skip_checking, paused):
            files.append((name, (None, value)))

        logger.info(f"Uploading {len(paths)} torrent file(s)")
        self.session.post("command/upload", files=files)

    @staticmethod
    def _add_options(save_path, cookie, category, skip_checking, paused):
        options = []
        if save_path is not None:
            options.append(("save_path", save_path))
        if cookie is not None:
            options.append(("cookie", cookie))
        if category is not None:
            options.append(("category", category))
        if skip_checking is not None:
            options.append(("skip_checking", _bool(skip_checking)))
        if paused is not None:
            options.append(("paused", _bool(paused)))
        return options

    def delete(self, hashes: Hashes, permanent: bool = False):
        """
        Remove torrents.

        Args:
            hashes: One info hash or a list of them
            permanent: Also delete downloaded data
        """
        path = "command/deletePerm" if permanent else "command/delete"
        logger.info(f"Removing torrent(s) {_join_hashes(hashes)} (permanent={permanent})")
        self.session.post(path, data={"hashes": _join_hashes(hashes)})

    def pause(self, info_hash: str):
        self.session.post("command/pause", data={"hash": info_hash})

    def resume(self, info_hash: str):
        self.session.post("command/resume", data={"hash": info_hash})

    def pause_all(self):
        self.session.post("command/pauseAll")

    def resume_all(self):
        self.session.post("command/resumeAll")

    def recheck(self, info_hash: str):
        self.session.post("command/recheck", data={"hash": info_hash})

    def set_preferences(self, preferences: Dict[str, Any]):
        """Change application preferences, keyed by wire name."""
        blob = json.dumps(preferences, separators=(",", ":"))
        self.session.post("command/setPreferences", data={"json": blob})
