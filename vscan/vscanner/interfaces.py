from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from vscan.vscanner.preferences import Preferences
    from vscan.vscanner.records import PluginCollection, PluginRecord

# 소켓이 바인딩되지 않은 레코드에서 get_socket()이 돌려주는 값
NO_SOCKET = -1

# ============================================================================
# Enum Types
# ============================================================================

class OutputFormat(str, Enum):
    """출력 형식"""
    JSON = "JSON"
    CONSOLE = "CONSOLE"


# ============================================================================
# Plugin Class Types (플러그인 클래스 타입)
# ============================================================================

InitCallback = Callable[["Preferences"], bool]
LoadCallback = Callable[
    [str, str, "PluginCollection", "Preferences"], Optional["PluginRecord"]
]


@dataclass(frozen=True)
class PluginClass:
    """
    플러그인 패밀리 정의

    - extension: 파일 이름 접미사 (대소문자 구분, 정확히 일치해야 함)
    - init: 프로세스당 한 번 호출되는 초기화 콜백 (False면 체인에서 제외)
    - load: (folder, filename, collection, preferences) -> PluginRecord | None
    """
    name: str
    extension: str
    init: InitCallback
    load: LoadCallback
    description: str = ""

    def matches(self, filename: str) -> bool:
        """파일 이름이 확장자보다 길고, 끝부분이 확장자와 정확히 같을 때만 True"""
        return len(filename) > len(self.extension) and filename.endswith(self.extension)


# ============================================================================
# Output Types (출력 타입)
# ============================================================================

@dataclass(frozen=True)
class ProgressInfo:
    """진행 상황 정보"""
    current: int
    total: int
    percentage: float
    message: str


@dataclass(frozen=True)
class LoadSummary:
    """디렉토리 한 번 스캔한 결과 요약"""
    folder: Optional[str]
    entries: int = 0
    hidden: int = 0
    matched: int = 0
    loaded: int = 0
    failed: int = 0
    unmatched: int = 0
    class_counts: Dict[str, int] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    duration_seconds: float = 0.0
    error: Optional[str] = None


# ============================================================================
# Error Types (에러 타입)
# ============================================================================

class VScanException(Exception):
    """모든 vscan 예외의 베이스 클래스"""
    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.timestamp = datetime.now()
        self.context = context or {}


class ConfigurationError(VScanException):
    """설정 오류"""
    pass


class PluginLoadError(VScanException):
    """플러그인 파일 해석 실패"""
    pass
