# 공통 인터페이스/추상클래스

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from vscan.vscanner.interfaces import LoadSummary
from vscan.vscanner.records import PluginCollection

class ReportFormatter(ABC):
    @abstractmethod
    def format(self, collection: PluginCollection, summary: Optional[LoadSummary] = None) -> str:
        pass

    @abstractmethod
    def save(self, collection: PluginCollection, path: Path, summary: Optional[LoadSummary] = None):
        pass
