from __future__ import annotations

import logging

import pytest

from vscan.vscanner.interfaces import NO_SOCKET
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import (
    PLUGIN_CLASS,
    PREFERENCES,
    SOCKET,
    PluginCollection,
    PluginRecord,
    plugin_free,
    plugin_get_socket,
    plugin_set_socket,
    plugin_unlink,
    plugins_free,
    plugins_set_socket,
)


def _record(name="a.nasl", prefs=None):
    return PluginRecord(filename=name, folder="/plugins", preferences=prefs or Preferences())


@pytest.mark.unit
def test_set_socket_overwrites_single_value():
    """set_socket을 두 번 호출해도 SOCKET 값은 하나이고 마지막 값이 남습니다."""
    record = _record()

    plugin_set_socket(record, 3)
    plugin_set_socket(record, 7)

    assert plugin_get_socket(record) == 7
    assert record.get(SOCKET) == 7
    assert SOCKET not in record.attributes


@pytest.mark.unit
def test_get_socket_sentinel_when_unset():
    record = _record()
    assert plugin_get_socket(record) == NO_SOCKET
    assert SOCKET not in record


@pytest.mark.unit
def test_named_access_maps_known_attributes():
    """PLUGIN_CLASS / SOCKET / preferences 이름이 타입이 있는 필드로 연결되는지 확인합니다."""
    record = _record()
    marker = object()

    record.set(PLUGIN_CLASS, marker)
    record.set(SOCKET, 4)
    record.set("oid", "1.2.3")

    assert record.plugin_class is marker
    assert record.socket == 4
    assert record.get("oid") == "1.2.3"
    assert record.get(PREFERENCES) is record.preferences
    assert record.get("missing", "default") == "default"


@pytest.mark.unit
def test_bind_all_sets_socket_on_every_record():
    collection = PluginCollection([_record("a.nasl"), _record("b.nasl")])

    plugins_set_socket(collection, 5)

    assert [plugin_get_socket(r) for r in collection] == [5, 5]


@pytest.mark.unit
def test_plugins_set_socket_ignores_missing_collection():
    plugins_set_socket(None, 5)


@pytest.mark.unit
def test_unlink_clears_preferences_only():
    """unlink는 preferences만 끊고 레코드 자체는 유지합니다."""
    record = _record()
    record.set_socket(9)

    plugin_unlink(record)

    assert record.preferences is None
    assert record.filename == "a.nasl"
    assert record.get_socket() == 9


@pytest.mark.unit
def test_unlink_invalid_record_logs_and_returns(caplog):
    """잘못된 레코드로 unlink를 호출하면 로그만 남기고 조용히 반환합니다."""
    with caplog.at_level(logging.ERROR, logger="vscan.records"):
        plugin_unlink(None)
        plugin_unlink("not a record")

    assert caplog.text.count("Error in plugin_unlink") == 2


@pytest.mark.unit
def test_plugin_free_unlinks_and_releases():
    record = _record()
    record.attributes["oid"] = "1"
    record.set_socket(2)

    plugin_free(record)

    assert record.preferences is None
    assert record.attributes == {}
    assert record.get_socket() == NO_SOCKET


@pytest.mark.unit
def test_plugins_free_after_unlink():
    """먼저 unlink된 레코드가 있어도 컬렉션 해제가 정상 동작하는지 확인합니다."""
    records = [_record("a.nasl"), _record("b.nasl")]
    collection = PluginCollection(records)
    plugin_unlink(records[0])

    plugins_free(collection)

    assert len(collection) == 0
    assert all(r.preferences is None for r in records)
    assert all(r.attributes == {} for r in records)


@pytest.mark.unit
def test_plugins_free_empty_collection_is_noop():
    collection = PluginCollection()

    plugins_free(collection)
    plugins_free(None)

    assert len(collection) == 0


@pytest.mark.unit
def test_collection_membership_is_identity_based():
    """내용이 같아도 다른 레코드는 컬렉션에 포함되지 않은 것으로 판단합니다."""
    prefs = Preferences()
    first = _record("a.nasl", prefs)
    twin = _record("a.nasl", prefs)
    collection = PluginCollection([first])

    assert first in collection
    assert twin not in collection


@pytest.mark.unit
def test_collection_rejects_non_records():
    with pytest.raises(TypeError):
        PluginCollection().append({"filename": "a.nasl"})


@pytest.mark.unit
def test_empty_collection_is_truthy():
    assert PluginCollection()


@pytest.mark.unit
def test_record_path():
    assert str(_record("x.nasl").path).endswith("x.nasl")
    assert PluginRecord(filename="x.nasl").path is None
