"""
vscan.vscanner.plugins 패키지 공개 API

기본 플러그인 클래스 목록. 순서가 곧 디스패치 우선순위입니다 (nes -> nasl -> oval).
"""

from .nes import NES_PLUGIN_CLASS
from .nasl import NASL_PLUGIN_CLASS
from .oval import OVAL_PLUGIN_CLASS

DEFAULT_PLUGIN_CLASSES = (
    NES_PLUGIN_CLASS,
    NASL_PLUGIN_CLASS,
    OVAL_PLUGIN_CLASS,
)

__all__ = [
    "NES_PLUGIN_CLASS",
    "NASL_PLUGIN_CLASS",
    "OVAL_PLUGIN_CLASS",
    "DEFAULT_PLUGIN_CLASSES",
]
