"""
플러그인 클래스 레지스트리

후보 클래스 목록(고정 순서)을 받아 초기화에 성공한 클래스만 활성 체인에 남깁니다.
체인 순서가 곧 디스패치 우선순위이며, 파일 하나는 처음 일치한 클래스에만 전달됩니다.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Sequence, Tuple

from vscan.vscanner.interfaces import PluginClass
from vscan.vscanner.preferences import Preferences

DispatchEntry = Tuple[Callable[[str], bool], PluginClass]


class PluginClassRegistry:
    """
    PluginClassRegistry: 활성 플러그인 클래스 체인 관리

    - candidates: 초기화를 시도할 클래스 목록 (이 순서가 우선순위)
    - initialize(): 한 번이라도 등록에 성공하면 이후 호출은 no-op
    """

    def __init__(
        self,
        candidates: Sequence[PluginClass],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.candidates: Tuple[PluginClass, ...] = tuple(candidates)
        self.logger = logger or logging.getLogger("vscan.registry")
        self._active: List[PluginClass] = []
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._active)

    @property
    def active_classes(self) -> Tuple[PluginClass, ...]:
        return tuple(self._active)

    def initialize(self, preferences: Preferences) -> Tuple[PluginClass, ...]:
        """
        후보 클래스 초기화 (프로세스당 한 번)

        모든 초기화가 실패하면 활성 체인이 비어 있으므로 다음 호출에서 다시 시도합니다.
        """
        with self._lock:
            if self._active:
                return tuple(self._active)

            active: List[PluginClass] = []
            for plugin_class in self.candidates:
                try:
                    ok = plugin_class.init(preferences)
                except Exception:
                    self.logger.exception(
                        "Initializer of plugin class '%s' raised; class disabled.",
                        plugin_class.name,
                    )
                    continue
                if ok:
                    active.append(plugin_class)
                    self.logger.debug(
                        "Plugin class '%s' (%s) registered.",
                        plugin_class.name,
                        plugin_class.extension,
                    )
                else:
                    self.logger.debug(
                        "Plugin class '%s' declined initialization.", plugin_class.name
                    )

            if not active:
                self.logger.warning(
                    "No plugin class could be initialized; will retry on next load."
                )
            self._active = active
            return tuple(self._active)

    def lookup(self, filename: str) -> Optional[PluginClass]:
        """우선순위 순으로 첫 번째로 일치하는 클래스를 반환 (부수효과 없음)"""
        for predicate, plugin_class in self.dispatch_table():
            if predicate(filename):
                return plugin_class
        return None

    def dispatch_table(self) -> List[DispatchEntry]:
        return [(plugin_class.matches, plugin_class) for plugin_class in self._active]

    def reset(self) -> None:
        with self._lock:
            self._active = []
