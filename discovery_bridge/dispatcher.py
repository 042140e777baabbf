"""Route vendor messages to their adapter and hand the result to a publisher."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Union

from .const import DEFAULT_DISCOVERY_PREFIX
from .hue import (
    brightness_to_homeassistant,
    light_to_homeassistant,
    motion_battery_to_homeassistant,
    motion_enabled_to_homeassistant,
    motion_to_homeassistant,
    temperature_to_homeassistant,
)
from .models import DiscoveryMessage
from .netatmo import weather_station_to_homeassistant

_LOGGER = logging.getLogger(__name__)

AdapterResult = Union[DiscoveryMessage, List[DiscoveryMessage], None]
Adapter = Callable[[dict, str], AdapterResult]

ADAPTERS: Dict[str, Adapter] = {
    "hue.brightness": brightness_to_homeassistant,
    "hue.temperature": temperature_to_homeassistant,
    "hue.motion": motion_to_homeassistant,
    "hue.motion_battery": motion_battery_to_homeassistant,
    "hue.motion_enabled": motion_enabled_to_homeassistant,
    "hue.light": light_to_homeassistant,
    "netatmo.weather_station": weather_station_to_homeassistant,
}


class UnknownMessageKind(KeyError):
    """No adapter is registered for the requested message kind."""


def translate(kind: str, msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> List[DiscoveryMessage]:
    """
    Run the adapter registered for `kind`.

    Returns:
        Discovery messages, possibly empty when the vendor message was
        malformed or carried nothing to announce.
    """
    adapter = ADAPTERS.get(kind)
    if adapter is None:
        raise UnknownMessageKind(kind)

    result = adapter(msg, topic_prefix)
    if result is None:
        _LOGGER.debug("Nothing to announce for %s message", kind)
        return []
    if isinstance(result, DiscoveryMessage):
        return [result]
    return list(result)


class DiscoveryDispatcher:
    def __init__(self, publisher, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX):
        self.publisher = publisher
        self.prefix = topic_prefix

    def dispatch(self, kind: str, msg: dict) -> List[DiscoveryMessage]:
        messages = translate(kind, msg, self.prefix)
        for message in messages:
            self.publisher.publish_discovery(message)
        _LOGGER.debug("Published %d discovery messages for %s", len(messages), kind)
        return messages

    def dispatch_many(self, kind: str, msgs: List[dict]) -> List[DiscoveryMessage]:
        published: List[DiscoveryMessage] = []
        for msg in msgs:
            published.extend(self.dispatch(kind, msg))
        return published

