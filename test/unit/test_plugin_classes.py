from __future__ import annotations

import pytest

from vscan.vscanner.plugins import DEFAULT_PLUGIN_CLASSES, nasl, nes, oval
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import PluginCollection


@pytest.mark.unit
def test_default_priority_order():
    """기본 클래스 우선순위가 nes -> nasl -> oval 인지 확인합니다."""
    assert [cls.name for cls in DEFAULT_PLUGIN_CLASSES] == ["nes", "nasl", "oval"]
    assert [cls.extension for cls in DEFAULT_PLUGIN_CLASSES] == [".nes", ".nasl", ".oval.xml"]


@pytest.mark.unit
def test_nasl_parse_header(nasl_script):
    header = nasl.parse_header(nasl_script)

    assert header == {
        "oid": "1.3.6.1.4.1.25623.1.0.10330",
        "name": "Services",
        "family": "Service detection",
        "version": "2023-08-01T13:29:10+0000",
        "category": "ACT_GATHER_INFO",
    }


@pytest.mark.unit
def test_nasl_parse_header_named_argument():
    """script_tag(name:"...") 같은 이름 있는 인자 형식도 읽는지 확인합니다."""
    header = nasl.parse_header('script_name(english:"Legacy name");\nscript_oid("1.2");')
    assert header["name"] == "Legacy name"
    assert header["oid"] == "1.2"


@pytest.mark.unit
def test_nasl_parse_header_keeps_inner_quotes():
    """값 안의 다른 종류 따옴표에서 잘리지 않고 여는 따옴표와 같은 문자까지 읽는지 확인합니다."""
    header = nasl.parse_header(
        'script_oid("1.2");\n'
        'script_name("Apache \'mod_proxy\' flaw");\n'
        "script_family('Web \"servers\"');"
    )
    assert header["name"] == "Apache 'mod_proxy' flaw"
    assert header["family"] == 'Web "servers"'


@pytest.mark.unit
def test_nasl_load_builds_record(tmp_path, nasl_script):
    (tmp_path / "services.nasl").write_text(nasl_script, encoding="utf-8")
    prefs = Preferences()

    record = nasl.load(str(tmp_path), "services.nasl", PluginCollection(), prefs)

    assert record is not None
    assert record.filename == "services.nasl"
    assert record.preferences is prefs
    assert record.attributes["oid"] == "1.3.6.1.4.1.25623.1.0.10330"
    assert record.plugin_class is None


@pytest.mark.unit
def test_nasl_load_declines_script_without_oid(tmp_path):
    (tmp_path / "include.nasl").write_text("function f() { return 1; }", encoding="utf-8")

    assert nasl.load(str(tmp_path), "include.nasl", PluginCollection(), Preferences()) is None


@pytest.mark.unit
def test_nasl_load_declines_unreadable_file(tmp_path):
    assert nasl.load(str(tmp_path), "missing.nasl", PluginCollection(), Preferences()) is None


@pytest.mark.unit
def test_oval_parse_definitions(oval_document):
    definitions = oval.parse_definitions(oval_document)

    assert [d["id"] for d in definitions] == ["oval:org.example:def:1", "oval:org.example:def:2"]
    assert definitions[0]["class"] == "vulnerability"
    assert definitions[0]["title"] == "Example vulnerability"


@pytest.mark.unit
def test_oval_parse_prefixed_definitions():
    markup = (
        '<oval-def:oval_definitions><oval-def:definitions>'
        '<oval-def:definition id="oval:x:def:9" class="inventory">'
        "<oval-def:metadata><oval-def:title>Prefixed</oval-def:title></oval-def:metadata>"
        "</oval-def:definition></oval-def:definitions></oval-def:oval_definitions>"
    )

    definitions = oval.parse_definitions(markup)

    assert definitions == [{"id": "oval:x:def:9", "class": "inventory", "title": "Prefixed"}]


@pytest.mark.unit
def test_oval_load(tmp_path, oval_document):
    (tmp_path / "a.oval.xml").write_text(oval_document, encoding="utf-8")

    record = oval.load(str(tmp_path), "a.oval.xml", PluginCollection(), Preferences())

    assert record.attributes["oid"] == "oval:org.example:def:1"
    assert record.attributes["name"] == "Example vulnerability"
    assert len(record.attributes["definitions"]) == 2


@pytest.mark.unit
def test_oval_load_declines_empty_document(tmp_path):
    (tmp_path / "empty.oval.xml").write_text("<oval_definitions/>", encoding="utf-8")

    assert oval.load(str(tmp_path), "empty.oval.xml", PluginCollection(), Preferences()) is None


@pytest.mark.unit
def test_oval_init_respects_preference():
    assert oval.init(Preferences()) is True
    assert oval.init(Preferences({"oval_plugins": "no"})) is False


@pytest.mark.unit
def test_nes_disabled_by_default():
    """네이티브 플러그인은 nes_plugins 설정이 켜져 있을 때만 활성화됩니다."""
    assert nes.init(Preferences()) is False
    assert nes.init(Preferences({"nes_plugins": "yes"})) is True


@pytest.mark.unit
def test_nes_load_records_size(tmp_path):
    (tmp_path / "native.nes").write_bytes(b"\x7fELF....")
    (tmp_path / "empty.nes").write_bytes(b"")

    record = nes.load(str(tmp_path), "native.nes", PluginCollection(), Preferences())

    assert record.attributes == {"size": 8, "native": True}
    assert nes.load(str(tmp_path), "empty.nes", PluginCollection(), Preferences()) is None
