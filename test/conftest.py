"""
Pytest fixtures for integration and unit tests.
"""

import io

import pytest
from rich.console import Console

from vscan.vscanner.interfaces import PluginClass
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import PluginRecord


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: 단위 테스트")
    config.addinivalue_line("markers", "integration: 통합 테스트")


class FakeClassFactory:
    """
    테스트용 PluginClass 생성기

    load 호출을 기록하고, declined에 들어 있는 파일 이름은 None을 반환합니다.
    """
    def __init__(self):
        self.init_calls = []
        self.load_calls = []

    def make(self, name, extension, *, init_ok=True, declined=(), raises=()):
        def init(preferences):
            self.init_calls.append(name)
            return init_ok

        def load(folder, filename, collection, preferences):
            self.load_calls.append((name, filename))
            if filename in raises:
                raise RuntimeError(f"broken plugin {filename}")
            if filename in declined:
                return None
            return PluginRecord(
                filename=filename,
                folder=folder,
                preferences=preferences,
                attributes={"loaded_by": name},
            )

        return PluginClass(name=name, extension=extension, init=init, load=load)


@pytest.fixture
def fake_classes():
    return FakeClassFactory()


@pytest.fixture
def console_buffer():
    """진행/진단 출력을 문자열로 받는 Console"""
    buffer = io.StringIO()
    return buffer, Console(file=buffer, width=200, color_system=None)


@pytest.fixture
def make_folder(tmp_path):
    """파일 이름 목록으로 플러그인 폴더 생성"""
    def _make(names, contents=None):
        folder = tmp_path / "plugins"
        folder.mkdir(exist_ok=True)
        for name in names:
            text = (contents or {}).get(name, "")
            (folder / name).write_text(text, encoding="utf-8")
        return folder

    return _make


@pytest.fixture
def preferences(tmp_path):
    return Preferences.from_dict(
        {"plugins_folder": str(tmp_path / "plugins")},
        config_file=str(tmp_path / "vscan.conf"),
    )


NASL_SCRIPT = """\
if(description)
{
  script_oid("1.3.6.1.4.1.25623.1.0.10330");
  script_version("2023-08-01T13:29:10+0000");
  script_name("Services");
  script_category(ACT_GATHER_INFO);
  script_family("Service detection");
  exit(0);
}
display("hello");
"""

OVAL_DOCUMENT = """\
<?xml version="1.0" encoding="UTF-8"?>
<oval_definitions xmlns="http://oval.mitre.org/XMLSchema/oval-definitions-5">
  <definitions>
    <definition id="oval:org.example:def:1" class="vulnerability" version="1">
      <metadata>
        <title>Example vulnerability</title>
      </metadata>
    </definition>
    <definition id="oval:org.example:def:2" class="patch" version="1">
      <metadata>
        <title>Example patch</title>
      </metadata>
    </definition>
  </definitions>
</oval_definitions>
"""


@pytest.fixture
def nasl_script():
    return NASL_SCRIPT


@pytest.fixture
def oval_document():
    return OVAL_DOCUMENT
