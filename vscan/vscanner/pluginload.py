"""
플러그인 로더 (디렉토리 스캐너)
-------------------------------
plugins_folder 디렉토리를 읽어 각 파일을 확장자로 분류하고,
일치하는 플러그인 클래스의 로더를 호출해 PluginCollection에 레코드를 추가합니다.

- 폴더 미설정 / 열기 실패: 콘솔 진단 후 컬렉션을 그대로 반환 (예외 없음)
- 로더가 None 반환 또는 예외: 해당 파일만 건너뜀
- 재스캔은 기존 컬렉션에 누적됨 (교체하지 않음)
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Union

from rich.console import Console

from vscan.vscanner.interfaces import LoadSummary, ProgressInfo
from vscan.vscanner.logger import log_write
from vscan.vscanner.plugins import DEFAULT_PLUGIN_CLASSES
from vscan.vscanner.preferences import PLUGINS_FOLDER, Preferences, log_plugins_at_load
from vscan.vscanner.records import PluginCollection, PluginRecord
from vscan.vscanner.registry import PluginClassRegistry

PROGRESS_EVERY = 50

FolderLike = Union[str, Path]


class PluginLoader:
    """
    PluginLoader: 플러그인 디렉토리 스캔 / 분류 / 로드를 담당

    - registry(선택): PluginClassRegistry, 없으면 기본 클래스(nes, nasl, oval)로 생성
    - console(선택): 진행 표시/진단 출력용 rich Console
    - on_progress(선택): ProgressInfo 콜백
    """
    def __init__(
        self,
        registry: Optional[PluginClassRegistry] = None,
        *,
        console: Optional[Console] = None,
        on_progress: Optional[Callable[[ProgressInfo], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry or PluginClassRegistry(DEFAULT_PLUGIN_CLASSES)
        self.console = console or Console()
        self.on_progress = on_progress
        self.logger = logger or logging.getLogger("vscan.pluginload")
        self.last_summary: Optional[LoadSummary] = None
        self._reload_lock = threading.Lock()

    def plugins_init(self, preferences: Mapping[str, Any], quiet: bool = False) -> PluginCollection:
        """새 컬렉션을 만들어 plugins_folder 전체를 로드"""
        return self.plugins_reload(preferences, PluginCollection(), quiet)

    def plugins_reload(
        self,
        preferences: Mapping[str, Any],
        collection: PluginCollection,
        quiet: bool = False,
    ) -> PluginCollection:
        preferences = _as_preferences(preferences)
        return self.plugins_reload_from_dir(
            preferences, collection, preferences.get(PLUGINS_FOLDER), quiet
        )

    def plugins_reload_from_dir(
        self,
        preferences: Mapping[str, Any],
        collection: PluginCollection,
        folder: Optional[FolderLike],
        quiet: bool = False,
    ) -> PluginCollection:
        """folder의 플러그인을 collection에 추가하고 같은 collection을 반환"""
        preferences = _as_preferences(preferences)

        with self._reload_lock:
            self.registry.initialize(preferences)
            start_time = datetime.now()
            config_file = preferences.config_file

            if not folder:
                self.logger.debug("plugins_folder is unset (config_file=%s)", config_file)
                self._diagnostic(
                    f"Could not determine the value of <plugins_folder>. Check {config_file}"
                )
                self.last_summary = LoadSummary(
                    folder=None,
                    start_time=start_time,
                    end_time=datetime.now(),
                    error="plugins_folder is unset",
                )
                return collection

            folder = str(folder)
            try:
                names = _snapshot_entries(folder)
            except OSError as exc:
                reason = exc.strerror or str(exc)
                self.logger.warning("Couldn't open plugin folder %s: %s", folder, reason)
                self._diagnostic(
                    f'Couldn\'t open the directory called "{folder}" - {reason}\n'
                    f"Check {config_file}"
                )
                self.last_summary = LoadSummary(
                    folder=folder,
                    start_time=start_time,
                    end_time=datetime.now(),
                    error=reason,
                )
                return collection

            self.last_summary = self._load_entries(
                preferences, collection, folder, names, quiet, start_time
            )
            return collection

    # ------------------------------------------------------------------ #
    # 내부 단계
    # ------------------------------------------------------------------ #
    def _load_entries(
        self,
        preferences: Preferences,
        collection: PluginCollection,
        folder: str,
        names: List[str],
        quiet: bool,
        start_time: datetime,
    ) -> LoadSummary:
        visible = [name for name in names if not name.startswith(".")]
        total = len(visible)
        trace = log_plugins_at_load(preferences)
        class_counts: Counter = Counter()
        matched = loaded = failed = unmatched = 0

        if not quiet:
            self._print("Loading the plugins...")
        self._emit_progress(0, total, "Loading the plugins...")

        for current, name in enumerate(visible, start=1):
            if current % PROGRESS_EVERY == 0:
                message = f"Loading the plugins... {current} (out of {total})"
                if not quiet:
                    self._print(message)
                self._emit_progress(current, total, message)

            if trace:
                log_write("Loading %s", name)

            plugin_class = self.registry.lookup(name)
            if plugin_class is None:
                unmatched += 1
                continue

            matched += 1
            record = self._invoke_loader(plugin_class, folder, name, collection, preferences)
            if record is None:
                failed += 1
                continue

            record.plugin_class = plugin_class
            # 로더가 이미 컬렉션에 넣었을 수도 있음
            if record not in collection:
                collection.append(record)
            loaded += 1
            class_counts[plugin_class.name] += 1

        if not quiet:
            self._print("All plugins loaded")
        self._emit_progress(total, total, "All plugins loaded")

        end_time = datetime.now()
        self.logger.debug(
            "Loaded %d plugin(s) from %s (%d matched, %d declined, %d unmatched).",
            loaded,
            folder,
            matched,
            failed,
            unmatched,
        )
        return LoadSummary(
            folder=folder,
            entries=total,
            hidden=len(names) - total,
            matched=matched,
            loaded=loaded,
            failed=failed,
            unmatched=unmatched,
            class_counts=dict(class_counts),
            start_time=start_time,
            end_time=end_time,
            duration_seconds=(end_time - start_time).total_seconds(),
        )

    def _invoke_loader(self, plugin_class, folder, name, collection, preferences) -> Optional[PluginRecord]:
        try:
            record = plugin_class.load(folder, name, collection, preferences)
        except Exception:
            self.logger.exception(
                "Plugin class '%s' failed while loading %s.", plugin_class.name, name
            )
            return None

        if record is not None and not isinstance(record, PluginRecord):
            self.logger.warning(
                "Plugin class '%s' returned %s for %s; skipped.",
                plugin_class.name,
                type(record).__name__,
                name,
            )
            return None
        return record

    def _print(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def _diagnostic(self, message: str) -> None:
        # quiet 모드와 무관하게 항상 출력
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def _emit_progress(self, current: int, total: int, message: str) -> None:
        if not self.on_progress:
            return
        percentage = (current / total * 100.0) if total else 100.0
        try:
            self.on_progress(
                ProgressInfo(current=current, total=total, percentage=percentage, message=message)
            )
        except Exception:  # pylint: disable=broad-except
            self.logger.exception("on_progress callback raised an exception.")


def _as_preferences(preferences: Optional[Mapping[str, Any]]) -> Preferences:
    if isinstance(preferences, Preferences):
        return preferences
    return Preferences(preferences or {})


def _snapshot_entries(folder: str) -> List[str]:
    # 처리 전에 목록을 한 번에 읽어둠 (로더가 디렉토리를 바꿔도 순회에 영향 없음)
    return [entry.name for entry in Path(folder).iterdir()]


# ============================================================
# 프로세스 기본 로더
# ============================================================

_default_loader: Optional[PluginLoader] = None
_default_loader_lock = threading.Lock()


def get_default_loader() -> PluginLoader:
    global _default_loader
    with _default_loader_lock:
        if _default_loader is None:
            _default_loader = PluginLoader()
        return _default_loader


def plugins_init(preferences: Mapping[str, Any], quiet: bool = False) -> PluginCollection:
    return get_default_loader().plugins_init(preferences, quiet)


def plugins_reload(
    preferences: Mapping[str, Any],
    collection: PluginCollection,
    quiet: bool = False,
) -> PluginCollection:
    return get_default_loader().plugins_reload(preferences, collection, quiet)


def plugins_reload_from_dir(
    preferences: Mapping[str, Any],
    collection: PluginCollection,
    folder: Optional[FolderLike],
    quiet: bool = False,
) -> PluginCollection:
    return get_default_loader().plugins_reload_from_dir(preferences, collection, folder, quiet)
