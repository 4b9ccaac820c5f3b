"""
NASL 스크립트 플러그인 클래스 (.nasl)

스크립트를 실행하지 않고 헤더의 script_* 호출만 정규식으로 읽어 레코드를 만듭니다.
script_oid가 없는 파일은 플러그인으로 인정하지 않습니다 (None 반환).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Optional

from vscan.vscanner.interfaces import PluginClass, PluginLoadError
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import PluginCollection, PluginRecord

EXTENSION = ".nasl"

logger = logging.getLogger("vscan.plugins.nasl")

# script_oid("1.3.6.1.4.1.25623.1.0.10330");
_STRING_CALL = r"""{name}\s*\(\s*(?:[a-z_]+\s*:\s*)?(?P<quote>["'])(?P<value>.*?)(?P=quote)"""
HEADER_PATTERNS: Dict[str, re.Pattern] = {
    "oid": re.compile(_STRING_CALL.format(name="script_oid")),
    "name": re.compile(_STRING_CALL.format(name="script_name")),
    "family": re.compile(_STRING_CALL.format(name="script_family")),
    "version": re.compile(_STRING_CALL.format(name="script_version")),
    "category": re.compile(r"script_category\s*\(\s*(?P<value>ACT_[A-Z_]+)\s*\)"),
}


def parse_header(text: str) -> Dict[str, str]:
    """스크립트 본문에서 script_* 메타데이터 추출 (첫 번째 매치만 사용)"""
    header: Dict[str, str] = {}
    for key, pattern in HEADER_PATTERNS.items():
        match = pattern.search(text)
        if match:
            header[key] = match.group("value").strip()
    return header


def init(preferences: Preferences) -> bool:
    return True


def load(
    folder: str,
    filename: str,
    collection: PluginCollection,
    preferences: Preferences,
) -> Optional[PluginRecord]:
    path = Path(folder) / filename
    try:
        header = _read_header(path)
    except PluginLoadError as exc:
        logger.warning("%s", exc.message)
        return None

    if "oid" not in header:
        logger.debug("%s has no script_oid(); not a plugin.", filename)
        return None

    return PluginRecord(
        filename=filename,
        folder=str(folder),
        preferences=preferences,
        attributes=header,
    )


def _read_header(path: Path) -> Dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise PluginLoadError(
            f"Could not read NASL script {path}: {exc}",
            error_code="NASL_UNREADABLE",
            context={"path": str(path)},
        ) from exc
    return parse_header(text)


NASL_PLUGIN_CLASS = PluginClass(
    name="nasl",
    extension=EXTENSION,
    init=init,
    load=load,
    description="NASL scripts",
)
