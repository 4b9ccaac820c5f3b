# Json 변환 + 저장

from __future__ import annotations
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from vscan.vscanner.interfaces import LoadSummary
from vscan.vscanner.records import PluginCollection, PluginRecord
from vscan.vscanner.report.base import ReportFormatter
from vscan.vscanner.report.io_utils import write_text_file

def _serialize_default(obj: Any) -> str:
    """datetime 객체를 ISO8601 형식 문자열로 변환, 그 외는 str()"""
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    return str(obj)

def record_to_dict(record: PluginRecord) -> Dict[str, Any]:
    """PluginRecord를 딕셔너리로 변환 (preferences 역참조는 제외)"""
    return {
        "filename": record.filename,
        "folder": record.folder,
        "plugin_class": record.plugin_class.name if record.plugin_class else None,
        "socket": record.socket,
        "attributes": dict(record.attributes),
    }

def collection_to_dict(
    collection: PluginCollection,
    summary: Optional[LoadSummary] = None,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "plugins": [record_to_dict(record) for record in collection],
        "summary": asdict(summary) if summary else None,
    }
    return json.loads(json.dumps(data, default=_serialize_default))

class JSONFormatter(ReportFormatter):
    def __init__(self, pretty_print: bool = True):
        self.pretty_print = pretty_print

    def format(self, collection: PluginCollection, summary: Optional[LoadSummary] = None) -> str:
        data = collection_to_dict(collection, summary)
        if self.pretty_print:
            return json.dumps(data, ensure_ascii=False, indent=2)

        return json.dumps(data, ensure_ascii=False)

    def save(self, collection: PluginCollection, path: Path, summary: Optional[LoadSummary] = None):
        write_text_file(Path(path), self.format(collection, summary))
