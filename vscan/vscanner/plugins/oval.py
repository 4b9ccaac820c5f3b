"""
OVAL 정의 플러그인 클래스 (.oval.xml)

BeautifulSoup으로 <definition> 요소를 읽어 id / class / title 목록을 레코드에 담습니다.
정의가 하나도 없는 문서는 건너뜁니다.
"""

from __future__ import annotations

import logging
import re
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from vscan.vscanner.interfaces import PluginClass
from vscan.vscanner.preferences import Preferences
from vscan.vscanner.records import PluginCollection, PluginRecord

EXTENSION = ".oval.xml"
ENABLE_KEY = "oval_plugins"

logger = logging.getLogger("vscan.plugins.oval")

# html.parser는 태그를 소문자로 만들고 네임스페이스 접두사를 그대로 둠
_DEFINITION_TAG = re.compile(r"^(?:[\w-]+:)?definition$")
_TITLE_TAG = re.compile(r"^(?:[\w-]+:)?title$")


def parse_definitions(markup: str) -> List[Dict[str, Any]]:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    definitions: List[Dict[str, Any]] = []
    for node in soup.find_all(_DEFINITION_TAG):
        title = node.find(_TITLE_TAG)
        definitions.append(
            {
                "id": node.get("id"),
                "class": node.get("class"),
                "title": title.get_text(strip=True) if title else None,
            }
        )
    return definitions


def init(preferences: Preferences) -> bool:
    return preferences.get_bool(ENABLE_KEY, default=True)


def load(
    folder: str,
    filename: str,
    collection: PluginCollection,
    preferences: Preferences,
) -> Optional[PluginRecord]:
    path = Path(folder) / filename
    try:
        markup = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Could not read OVAL document %s: %s", path, exc)
        return None

    definitions = parse_definitions(markup)
    if not definitions:
        logger.debug("%s contains no OVAL definitions.", filename)
        return None

    return PluginRecord(
        filename=filename,
        folder=str(folder),
        preferences=preferences,
        attributes={
            "oid": definitions[0]["id"],
            "name": definitions[0]["title"],
            "definitions": definitions,
        },
    )


OVAL_PLUGIN_CLASS = PluginClass(
    name="oval",
    extension=EXTENSION,
    init=init,
    load=load,
    description="OVAL definition documents",
)
