# 콘솔 데이터 구성

"""
Console Formatter Module

로드된 PluginCollection을 콘솔 출력용 문자열로 변환합니다.
format()은 출력 문자열을 반환하고, save()는 색상 없는 같은 표를 텍스트 파일로 저장합니다.
"""

from __future__ import annotations
import io
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text
from rich.table import Table
from rich import box

from vscan.vscanner.interfaces import LoadSummary, NO_SOCKET
from vscan.vscanner.records import PluginCollection
from vscan.vscanner.report.base import ReportFormatter
from vscan.vscanner.report.io_utils import write_text_file


class ConsoleFormatter(ReportFormatter):
    """
    Console 형식 Formatter

    - 요약 테이블 + 클래스별 개수 테이블
    - verbose=True 이면 레코드 목록까지 출력
    - 플러그인 파일에서 온 값은 rich 마크업으로 해석되지 않도록 Text로 감싸서 추가
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def format(self, collection: PluginCollection, summary: Optional[LoadSummary] = None) -> str:
        buffer = io.StringIO()
        self._render(Console(file=buffer, force_terminal=True, width=100), collection, summary)
        return buffer.getvalue()

    def save(self, collection: PluginCollection, path: Path, summary: Optional[LoadSummary] = None):
        buffer = io.StringIO()
        # 파일에는 ANSI 코드 없이 저장
        self._render(Console(file=buffer, color_system=None, width=100), collection, summary)
        write_text_file(path, buffer.getvalue())

    def _render(
        self,
        console: Console,
        collection: PluginCollection,
        summary: Optional[LoadSummary],
    ) -> None:
        # 1. Summary Table
        summary_table = Table(
            title="🧩 Plugin Load Summary",
            title_style="bold magenta",
            box=box.SIMPLE_HEAVY,
            show_header=False,
            padding=(0, 1),
        )
        summary_table.add_row(
            "📁 Folder", Text(str(summary.folder)) if summary and summary.folder else "-"
        )
        summary_table.add_row("📦 Plugins in Collection", f"[bold]{len(collection)}[/]")
        if summary:
            summary_table.add_row("🔎 Entries Considered", str(summary.entries))
            summary_table.add_row("🙈 Hidden Entries", str(summary.hidden))
            summary_table.add_row("✅ Loaded", f"[green]{summary.loaded}[/]")
            summary_table.add_row("⏩ Declined", f"[yellow]{summary.failed}[/]")
            summary_table.add_row("❔ Unmatched", str(summary.unmatched))
            summary_table.add_row(" ⏱ Duration", f"{summary.duration_seconds:.2f} seconds")
            if summary.error:
                summary_table.add_row("❌ Error", Text(summary.error, style="red"))

        console.print(summary_table)

        # 2. 클래스별 개수
        counts = {}
        for record in collection:
            name = record.plugin_class.name if record.plugin_class else "-"
            counts[name] = counts.get(name, 0) + 1

        if counts:
            class_table = Table(
                title="Plugin Classes",
                title_style="bold cyan",
                box=box.MINIMAL_HEAVY_HEAD,
                header_style="bold white",
            )
            class_table.add_column("Class")
            class_table.add_column("Plugins", justify="right")
            for name, count in counts.items():
                class_table.add_row(Text(name), str(count))
            console.print(class_table)

        # 3. 레코드 상세 (verbose)
        if self.verbose and len(collection):
            record_table = Table(
                title="Loaded Plugins",
                title_style="bold cyan",
                box=box.MINIMAL_HEAVY_HEAD,
                header_style="bold white",
            )
            record_table.add_column("File")
            record_table.add_column("Class")
            record_table.add_column("OID")
            record_table.add_column("Name")
            record_table.add_column("Socket", justify="right")
            for record in collection:
                socket = record.get_socket()
                record_table.add_row(
                    Text(record.filename),
                    Text(record.plugin_class.name) if record.plugin_class else "-",
                    Text(str(record.attributes.get("oid") or "-")),
                    Text(str(record.attributes.get("name") or "-")),
                    str(socket) if socket != NO_SOCKET else "-",
                )
            console.print(record_table)
