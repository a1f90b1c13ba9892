"""
Response decoding and record normalization.

qBittorrent labels some JSON responses with a charset that does not match
the bytes it sends, so bodies are always decoded as UTF-8 here instead of
through ``response.text``. Decoded objects are then reshaped into records:
epoch timestamps become datetimes and keys become display names.
"""

import json
from typing import Any, Dict, Iterable, List

import requests

from .exceptions import DecodeError
from .naming import to_display_name
from .timestamps import normalize_timestamp


def _body(response: requests.Response) -> bytes:
    """Return exactly the declared number of body bytes."""
    content = response.content
    declared = response.headers.get("Content-Length")

    # The transport has already inflated compressed bodies, so the declared
    # length no longer describes what we hold.
    if declared is None or response.headers.get("Content-Encoding"):
        return content

    try:
        length = int(declared)
    except ValueError:
        raise DecodeError(f"Invalid Content-Length header: {declared!r}")

    if length < 0:
        raise DecodeError(f"Invalid Content-Length header: {declared!r}")
    if len(content) < length:
        raise DecodeError(f"Response body truncated: expected {length} bytes, got {len(content)}")
    return content[:length]


def decode_text(response: requests.Response) -> str:
    """Decode a response body as UTF-8, ignoring the declared charset."""
    try:
        return _body(response).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response body is not valid UTF-8: {e}") from e


def decode_json(response: requests.Response) -> Any:
    """Decode a response body as UTF-8 JSON, ignoring the declared charset."""
    text = decode_text(response)
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e


def normalize_record(obj: Dict[str, Any], timestamp_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Reshape one decoded JSON object into a record.

    Args:
        obj: A flat JSON object as decoded from the WebUI
        timestamp_fields: Wire names of the fields holding epoch seconds

    Returns:
        A new dict keyed by display name, in the same field order
    """
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected a JSON object, got {type(obj).__name__}")

    timestamp_fields = frozenset(timestamp_fields)
    record = {}
    for key, value in obj.items():
        if key in timestamp_fields:
            value = normalize_timestamp(value)
        record[to_display_name(key)] = value
    return record


def normalize_records(objs: List[Dict[str, Any]], timestamp_fields: Iterable[str] = ()) -> List[Dict[str, Any]]:
    """Reshape a decoded JSON array of objects, preserving record order."""
    if not isinstance(objs, list):
        raise DecodeError(f"Expected a JSON array, got {type(objs).__name__}")

    timestamp_fields = frozenset(timestamp_fields)
    return [normalize_record(obj, timestamp_fields) for obj in objs]
