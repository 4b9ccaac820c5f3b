"""
vscan Report Package

로드 결과(PluginCollection + LoadSummary)를 JSON / Console 형식으로
직렬화하고 저장하는 기능을 제공합니다.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional

from vscan.vscanner.interfaces import LoadSummary, OutputFormat
from vscan.vscanner.records import PluginCollection

from .base import ReportFormatter
from .json_formatter import JSONFormatter
from .console_formatter import ConsoleFormatter


# ============================================================
# Formatter Routing Table
# ============================================================

FORMATTER_MAP: Dict[OutputFormat, type[ReportFormatter]] = {
    OutputFormat.JSON: JSONFormatter,
    OutputFormat.CONSOLE: ConsoleFormatter,
}


# ============================================================
# Unified Output Function (public API)
# ============================================================

def output_report(
    collection: PluginCollection,
    output_format: OutputFormat,
    *,
    summary: Optional[LoadSummary] = None,
    path: Optional[Path] = None,
    verbose: bool = False,
) -> str:
    """
    출력 형식에 맞는 Formatter를 골라 문자열을 만들고, path가 있으면 파일로 저장합니다.

    Returns:
        포맷된 문자열 (콘솔 출력은 호출부에서 담당)
    """

    formatter = FORMATTER_MAP[OutputFormat(output_format)]()

    if isinstance(formatter, ConsoleFormatter):
        formatter.verbose = verbose

    if path:
        formatter.save(collection, Path(path), summary)
    return formatter.format(collection, summary)


# ============================================================
# Public Exports
# ============================================================

__all__ = [
    "ReportFormatter",
    "JSONFormatter",
    "ConsoleFormatter",
    "FORMATTER_MAP",
    "output_report",
]
