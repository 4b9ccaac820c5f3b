"""
스캐너 설정(preferences) 모듈

플러그인 로더가 읽는 읽기 전용 설정 맵을 제공합니다.
- JSON 문서(.json) 또는 전통적인 ``key = value`` 형식의 설정 파일을 지원
- 로더는 plugins_folder / config_file / log_plugins_name_at_load 만 사용
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from vscan.vscanner.interfaces import ConfigurationError

PLUGINS_FOLDER = "plugins_folder"
CONFIG_FILE = "config_file"
LOG_PLUGINS_AT_LOAD = "log_plugins_name_at_load"

_TRUE_VALUES = {"yes", "true", "1", "on"}
_FALSE_VALUES = {"no", "false", "0", "off"}


class Preferences(Mapping):
    """외부에서 소유하는 설정 맵. 로더 입장에서는 읽기 전용"""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def from_dict(
        cls,
        values: Mapping[str, Any],
        config_file: Optional[Union[str, Path]] = None,
    ) -> "Preferences":
        data = dict(values)
        if config_file is not None and CONFIG_FILE not in data:
            data[CONFIG_FILE] = str(config_file)
        return cls(data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Preferences":
        """설정 파일을 읽어 Preferences 생성 (확장자로 형식 판별)"""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Failed to read config {path}: {exc}",
                error_code="CONFIG_UNREADABLE",
                context={"path": str(path)},
            ) from exc

        if path.suffix.lower() == ".json":
            values = _parse_json(text, path)
        else:
            values = _parse_key_values(text, path)

        return cls.from_dict(values, config_file=path)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Preferences({self._values!r})"

    @property
    def plugins_folder(self) -> Optional[str]:
        folder = self._values.get(PLUGINS_FOLDER)
        return str(folder) if folder else None

    @property
    def config_file(self) -> Optional[str]:
        return self._values.get(CONFIG_FILE)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return default

    def merged(self, **overrides: Any) -> "Preferences":
        """None이 아닌 값만 덮어쓴 새 Preferences 반환 (CLI 옵션 우선 적용용)"""
        data = dict(self._values)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return Preferences(data)


def log_plugins_at_load(preferences: Optional[Mapping[str, Any]]) -> bool:
    """플러그인 로드 시 파일 이름을 로그로 남길지 여부"""
    if preferences is None:
        return False
    if isinstance(preferences, Preferences):
        return preferences.get_bool(LOG_PLUGINS_AT_LOAD)
    return Preferences(preferences).get_bool(LOG_PLUGINS_AT_LOAD)


def _parse_json(text: str, path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Failed to load config {path}: {exc}",
            error_code="CONFIG_MALFORMED",
            context={"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config {path} must contain a JSON object",
            error_code="CONFIG_MALFORMED",
            context={"path": str(path)},
        )
    return data


def _parse_key_values(text: str, path: Path) -> Dict[str, Any]:
    # openvassd.conf 스타일: "key = value", '#' 주석, 빈 줄 무시
    values: Dict[str, Any] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ConfigurationError(
                f"{path}:{lineno}: expected 'key = value', got {raw!r}",
                error_code="CONFIG_MALFORMED",
                context={"path": str(path), "line": lineno},
            )
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            raise ConfigurationError(
                f"{path}:{lineno}: empty key",
                error_code="CONFIG_MALFORMED",
                context={"path": str(path), "line": lineno},
            )
        values[key] = value.strip()
    return values
