"""Hue bridge messages to Home Assistant discovery messages.

Hue devices are named `<area>_<name>`. A Hue motion sensor exposes motion,
brightness, temperature and battery as separate sensors whose unique ids only
differ by a `-02-040X` suffix; they are folded back into one device here.
"""
from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from .const import (
    BATTERY_TEMPLATE,
    DEFAULT_DISCOVERY_PREFIX,
    ENABLED_TEMPLATE,
    HUE_LIGHT_BRIGHTNESS_SCALE,
    HUE_MOTION_SENSOR_MODEL,
    VALUE_TEMPLATE,
)
from .discovery import (
    battery_message,
    brightness_message,
    enabled_message,
    light_message,
    motion_message,
    temperature_message,
)
from .models import (
    AvailabilityConfig,
    CommandConfig,
    DeviceIdentity,
    DiscoveryMessage,
    LightConfig,
    StateConfig,
)
from .topic_parser import build_topic

_LOGGER = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^([^_]+)(?:_(.+))?$")
_SENSOR_SUFFIX_RE = re.compile(r"^(.+?)(?:-02-040.)+$")


def parse_name(name: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split a Hue device name into area and name.

    Examples:
        >>> parse_name("livingroom_motion1")
        ('livingroom', 'motion1')
        >>> parse_name("kitchen")
        ('kitchen', None)
        >>> parse_name("_broken")
        None
    """
    if not name or not isinstance(name, str):
        return None

    match = _NAME_RE.match(name)
    if not match:
        return None
    return match.group(1), match.group(2)


def normalize_unique_id(unique_id: str) -> str:
    """Strip the sensor suffix so all sensors of one motion sensor share an id."""
    return _SENSOR_SUFFIX_RE.sub(r"\1", unique_id)


def device_identity(info: dict, area: str, model_name: Optional[str] = None) -> DeviceIdentity:
    model = info.get("model")
    if not isinstance(model, dict):
        model = {}
    if model_name is None:
        model_name = model.get("name")

    return DeviceIdentity(
        identifiers=info["uniqueId"],
        name=f"{model_name} {area}" if model_name else area,
        manufacturer=model.get("manufacturer"),
        model=model.get("id"),
        sw_version=info.get("softwareVersion"),
    )


def _read_info(msg: dict) -> Optional[Tuple[dict, str, Optional[str]]]:
    info = msg.get("info") if isinstance(msg, dict) else None
    if not isinstance(info, dict) or not isinstance(info.get("uniqueId"), str) or not info["uniqueId"]:
        _LOGGER.debug("Ignored Hue message without device info: %s", msg)
        return None

    parsed = parse_name(info.get("name"))
    if parsed is None:
        _LOGGER.debug("Ignored Hue device with unparseable name: %r", info.get("name"))
        return None

    area, name = parsed
    return info, area, name


def _motion_sensor(msg: dict, require_name: bool = False) -> Optional[Tuple[DeviceIdentity, str, Optional[str]]]:
    """Device identity of the motion sensor unit hosting this sensor."""
    read = _read_info(msg)
    if read is None:
        return None

    info, area, name = read
    if require_name and name is None:
        _LOGGER.debug("Ignored Hue sensor %r: no name after the area", info.get("name"))
        return None

    info = dict(info, uniqueId=normalize_unique_id(info["uniqueId"]))
    return device_identity(info, area, HUE_MOTION_SENSOR_MODEL), area, name


def brightness_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    sensor = _motion_sensor(msg)
    if sensor is None:
        return None

    device, area, _ = sensor
    return brightness_message(
        device,
        area,
        StateConfig(build_topic(area, "sensor", "brightness"), VALUE_TEMPLATE),
        topic_prefix,
    )


def temperature_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    sensor = _motion_sensor(msg)
    if sensor is None:
        return None

    device, area, _ = sensor
    return temperature_message(
        device,
        area,
        StateConfig(build_topic(area, "sensor", "temperature"), VALUE_TEMPLATE),
        topic_prefix,
    )


def motion_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    sensor = _motion_sensor(msg, require_name=True)
    if sensor is None:
        return None

    device, area, name = sensor
    return motion_message(
        device,
        area,
        name,
        StateConfig(build_topic(area, "sensor", name), VALUE_TEMPLATE, False, True),
        topic_prefix,
    )


def motion_battery_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    sensor = _motion_sensor(msg)
    if sensor is None:
        return None

    device, area, name = sensor
    # The bridge reports the battery level together with the brightness reading
    return battery_message(
        device,
        area,
        name,
        StateConfig(build_topic(area, "sensor", "brightness"), BATTERY_TEMPLATE),
        topic_prefix,
    )


def motion_enabled_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    sensor = _motion_sensor(msg, require_name=True)
    if sensor is None:
        return None

    device, area, name = sensor
    return enabled_message(
        device,
        area,
        name,
        StateConfig(build_topic(area, "sensor", name), ENABLED_TEMPLATE, False, True),
        CommandConfig(build_topic(area, "sensor", name, "set"), "false", "true"),
        topic_prefix,
    )


def light_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> Optional[DiscoveryMessage]:
    """
    Build the light discovery message.

    Extra color modes are advertised when the bridge payload carries the
    matching field at all, whatever its value.
    """
    read = _read_info(msg)
    if read is None:
        return None

    info, area, name = read
    if name is None:
        _LOGGER.debug("Ignored Hue light %r: no name after the area", info.get("name"))
        return None

    payload = msg.get("payload")
    if not isinstance(payload, dict):
        payload = {}

    color_modes = {"brightness"}
    if "colorTemp" in payload:
        color_modes.add("color_temp")
    if "xy" in payload:
        color_modes.add("xy")

    return light_message(
        device_identity(info, area),
        area,
        name,
        LightConfig(
            brightness=True,
            brightness_scale=HUE_LIGHT_BRIGHTNESS_SCALE,
            color_modes=frozenset(color_modes),
        ),
        StateConfig(build_topic(area, "light", name, "state")),
        CommandConfig(build_topic(area, "light", name, "set")),
        AvailabilityConfig(build_topic(area, "light", name, "availability")),
        topic_prefix,
    )
