"""
Epoch timestamps as reported by the qBittorrent WebUI.

The WebUI sends times as integer seconds since the Unix epoch and uses -1,
or the unsigned 32-bit maximum, for a time that never happened (a torrent
that has not completed yet, a peer never seen complete).
"""

from datetime import datetime, timedelta, timezone


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NEVER = datetime.min.replace(tzinfo=timezone.utc)

UNSET_VALUES = (-1, 0xFFFFFFFF)


def normalize_timestamp(value: int) -> datetime:
    """Convert epoch seconds to an aware UTC datetime, or NEVER when unset."""
    if value in UNSET_VALUES:
        return NEVER
    return EPOCH + timedelta(seconds=value)


def is_never(value: datetime) -> bool:
    return value == NEVER
