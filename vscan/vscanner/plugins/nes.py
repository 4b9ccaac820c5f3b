"""
네이티브 바이너리 플러그인 클래스 (.nes)

.nes 파일은 별도 런타임이 필요하므로 nes_plugins 설정이 켜져 있을 때만 활성화됩니다.
로더는 파일을 열지 않고 크기만 기록합니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from vscan.vscanner.interfaces import PluginClass
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import PluginCollection, PluginRecord

EXTENSION = ".nes"
ENABLE_KEY = "nes_plugins"

logger = logging.getLogger("vscan.plugins.nes")


def init(preferences: Preferences) -> bool:
    return preferences.get_bool(ENABLE_KEY, default=False)


def load(
    folder: str,
    filename: str,
    collection: PluginCollection,
    preferences: Preferences,
) -> Optional[PluginRecord]:
    path = Path(folder) / filename
    try:
        size = path.stat().st_size
    except OSError as exc:
        logger.warning("Could not stat native plugin %s: %s", path, exc)
        return None

    if size == 0:
        logger.debug("%s is empty; skipped.", filename)
        return None

    return PluginRecord(
        filename=filename,
        folder=str(folder),
        preferences=preferences,
        attributes={"size": size, "native": True},
    )


NES_PLUGIN_CLASS = PluginClass(
    name="nes",
    extension=EXTENSION,
    init=init,
    load=load,
    description="Native binary plugins",
)
