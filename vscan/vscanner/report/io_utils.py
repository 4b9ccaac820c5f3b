# 파일 저장 공통 유틸

"""
I/O Utility Module

Formatter들이 공통적으로 사용하는 파일 저장 유틸리티를 제공합니다.
"""

from __future__ import annotations
from pathlib import Path


def ensure_parent(path: Path) -> None:
    """
    파일 경로의 부모 디렉토리가 존재하지 않으면 생성합니다.
    """
    parent = path.parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)


def write_text_file(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    텍스트 파일을 저장합니다. 부모 디렉토리가 없으면 먼저 만듭니다.
    """
    path = Path(path)
    ensure_parent(path)
    path.write_text(content, encoding=encoding)
