"""Value types shared by the discovery builders and the vendor adapters."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Union

from .const import DISCOVERY_QOS, DISCOVERY_RETAIN


@dataclass(frozen=True)
class DeviceIdentity:
    """Hub-side device record, rendered as the `device` object of a payload."""

    identifiers: Union[str, List[str]]
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    sw_version: Optional[str] = None
    # relation only: identifier of the bridge/station this device talks through
    via_device: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        device = {
            "identifiers": self.identifiers,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "sw_version": self.sw_version,
            "via_device": self.via_device,
        }
        return {key: value for key, value in device.items() if value is not None}


@dataclass(frozen=True)
class StateConfig:
    topic: str
    value_template: Optional[str] = None
    state_off: Any = None
    state_on: Any = None


@dataclass(frozen=True)
class CommandConfig:
    topic: str
    payload_off: Optional[str] = None
    payload_on: Optional[str] = None


@dataclass(frozen=True)
class AvailabilityConfig:
    topic: str
    payload_available: Optional[str] = None
    payload_not_available: Optional[str] = None


@dataclass(frozen=True)
class LightConfig:
    """
    Light capabilities.

    color_modes holds capability tags such as "brightness", "color_temp" or
    "xy"; each one is advertised as a boolean flag of the same name.
    """

    brightness: Optional[bool] = None
    brightness_scale: Optional[int] = None
    color_modes: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class DiscoveryMessage:
    topic: str
    payload: Dict[str, Any]
    qos: int = DISCOVERY_QOS
    retain: bool = DISCOVERY_RETAIN

    def as_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "qos": self.qos,
            "retain": self.retain,
            "payload": self.payload,
        }

    def to_json(self) -> str:
        """Serialize the payload the way it goes on the wire."""
        return json.dumps(self.payload, ensure_ascii=False)
