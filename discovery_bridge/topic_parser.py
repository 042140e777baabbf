from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from .const import HOME_TOPIC_ROOT

# home/<area>/<type>/<name>[/...]
_TOPIC_RE = re.compile(r"^home/([^/]+)/([^/]+)/([^/]+)(?:/.*)?$")

@dataclass(frozen=True)
class ParsedTopic:
    area: str
    type: str
    name: str

    @property
    def entity_key(self) -> str:
        # stable key per logical entity, independent of trailing segments
        return f"{self.area}/{self.type}/{self.name}"

def parse_topic(topic: str) -> Optional[ParsedTopic]:
    if not isinstance(topic, str):
        return None

    match = _TOPIC_RE.match(topic)
    if not match:
        return None

    area, type_, name = match.groups()
    return ParsedTopic(area=area, type=type_, name=name)

def build_topic(area: str, type_: str, name: str, *suffix: str) -> str:
    """Inverse of parse_topic for slash-free segments."""
    return "/".join((HOME_TOPIC_ROOT, area, type_, name) + suffix)
