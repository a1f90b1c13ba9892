from datetime import datetime, timezone

import pytest

from qbittorrent_webui.timestamps import EPOCH, NEVER, is_never, normalize_timestamp


@pytest.mark.parametrize("value", [-1, 4294967295])
def test_unset_values_are_never(value):
    assert normalize_timestamp(value) == NEVER
    assert is_never(normalize_timestamp(value))


def test_zero_is_epoch():
    assert normalize_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert normalize_timestamp(0) == EPOCH


def test_one_day():
    assert normalize_timestamp(86400) == datetime(1970, 1, 2, tzinfo=timezone.utc)


def test_real_timestamp_is_utc():
    value = normalize_timestamp(1500000000)
    assert value == datetime(2017, 7, 14, 2, 40, tzinfo=timezone.utc)
    assert value.tzinfo == timezone.utc
    assert not is_never(value)


def test_never_is_earliest():
    assert NEVER < normalize_timestamp(0)
    assert NEVER.year == 1
