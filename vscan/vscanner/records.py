"""
플러그인 레코드 / 컬렉션 모듈

- PluginRecord: 로드된 플러그인 하나 (PLUGIN_CLASS, SOCKET, preferences + 로더 전용 필드)
- PluginCollection: 레코드의 순서 있는 목록. 재스캔 시 같은 객체에 계속 추가됨
- 소켓 바인딩 / unlink / free 생명주기 함수
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from vscan.vscanner.interfaces import NO_SOCKET, PluginClass
from vscan.vscanner.preferences import Preferences

PLUGIN_CLASS = "PLUGIN_CLASS"
SOCKET = "SOCKET"
PREFERENCES = "preferences"

logger = logging.getLogger("vscan.records")


@dataclass(eq=False)
class PluginRecord:
    """
    로드된 플러그인 하나를 표현하는 레코드

    알려진 속성(PLUGIN_CLASS / SOCKET / preferences)은 필드로 직접 노출하고,
    로더별 속성은 attributes 딕셔너리에 보관합니다.
    비교는 identity 기준 (같은 내용이라도 다른 레코드)
    """
    filename: str
    folder: Optional[str] = None
    plugin_class: Optional[PluginClass] = None
    socket: Optional[int] = None
    preferences: Optional[Preferences] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> Optional[Path]:
        if self.folder is None:
            return None
        return Path(self.folder) / self.filename

    # 이름 기반 접근 (arglist 스타일 호출부 호환용)
    def get(self, name: str, default: Any = None) -> Any:
        if name == PLUGIN_CLASS:
            return self.plugin_class if self.plugin_class is not None else default
        if name == SOCKET:
            return self.socket if self.socket is not None else default
        if name == PREFERENCES:
            return self.preferences if self.preferences is not None else default
        return self.attributes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        if name == PLUGIN_CLASS:
            self.plugin_class = value
        elif name == SOCKET:
            self.set_socket(value)
        elif name == PREFERENCES:
            self.preferences = value
        else:
            self.attributes[name] = value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def set_socket(self, descriptor: int) -> None:
        # 필드 하나에 덮어쓰므로 SOCKET 값은 항상 하나만 존재
        self.socket = int(descriptor)

    def get_socket(self) -> int:
        return self.socket if self.socket is not None else NO_SOCKET

    def unlink(self) -> None:
        self.preferences = None

    def release(self) -> None:
        self.plugin_class = None
        self.socket = None
        self.attributes.clear()


class PluginCollection:
    """PluginRecord 목록. 컬렉션이 레코드를 단독 소유함"""

    def __init__(self, records: Optional[Iterable[PluginRecord]] = None):
        self._records: List[PluginRecord] = []
        if records:
            self.extend(records)

    def append(self, record: PluginRecord) -> None:
        if not isinstance(record, PluginRecord):
            raise TypeError(
                f"PluginCollection accepts PluginRecord only, got {type(record).__name__}"
            )
        self._records.append(record)

    def extend(self, records: Iterable[PluginRecord]) -> None:
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PluginRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> PluginRecord:
        return self._records[index]

    def __contains__(self, record: object) -> bool:
        return any(existing is record for existing in self._records)

    def __bool__(self) -> bool:
        # 빈 컬렉션도 유효한 객체 (None과 구분)
        return True

    def __repr__(self) -> str:
        return f"PluginCollection({len(self._records)} records)"

    def by_class(self, class_name: str) -> List[PluginRecord]:
        return [
            record
            for record in self._records
            if record.plugin_class is not None and record.plugin_class.name == class_name
        ]

    def set_socket(self, descriptor: int) -> None:
        for record in self._records:
            record.set_socket(descriptor)

    def free(self) -> None:
        """모든 레코드의 preferences 참조를 먼저 끊고, 그 다음 전부 해제"""
        if not self._records:
            return
        for record in self._records:
            record.unlink()
        for record in self._records:
            record.release()
        self._records.clear()


# ============================================================
# Socket Binding
# ============================================================

def plugin_set_socket(record: PluginRecord, descriptor: int) -> None:
    record.set_socket(descriptor)


def plugin_get_socket(record: PluginRecord) -> int:
    return record.get_socket()


def plugins_set_socket(collection: Optional[PluginCollection], descriptor: int) -> None:
    """컬렉션의 모든 플러그인에 스캔 대상과의 동일한 연결을 전달"""
    if collection is None:
        return
    collection.set_socket(descriptor)


# ============================================================
# Lifecycle
# ============================================================

def plugin_unlink(record: Optional[PluginRecord]) -> None:
    if not isinstance(record, PluginRecord):
        logger.error("Error in plugin_unlink - invalid record: %r", record)
        return
    record.unlink()


def plugin_free(record: Optional[PluginRecord]) -> None:
    plugin_unlink(record)
    if isinstance(record, PluginRecord):
        record.release()


def plugins_free(collection: Optional[PluginCollection]) -> None:
    if collection is None:
        return
    collection.free()
