"""Netatmo weather station messages to Home Assistant discovery messages."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List

from .const import (
    BATTERY_TEMPLATE,
    DEFAULT_DISCOVERY_PREFIX,
    NETATMO_MANUFACTURER,
    NETATMO_NAME,
    NETATMO_TOPIC_ROOT,
    VALUE_TEMPLATE,
)
from .discovery import (
    battery_message,
    co2_message,
    humidity_message,
    noise_message,
    pressure_message,
    temperature_message,
)
from .models import DeviceIdentity, DiscoveryMessage, StateConfig
from .topic_parser import build_topic

_LOGGER = logging.getLogger(__name__)

SensorBuilder = Callable[[DeviceIdentity, str, StateConfig, str], DiscoveryMessage]

# data_type tag (lower-cased) -> builder
STATION_SENSORS: Dict[str, SensorBuilder] = {
    "temperature": temperature_message,
    "humidity": humidity_message,
    "co2": co2_message,
    "noise": noise_message,
    "pressure": pressure_message,
}

# Noise and pressure are only measured by the base station
MODULE_SENSORS: Dict[str, SensorBuilder] = {
    "temperature": temperature_message,
    "humidity": humidity_message,
    "co2": co2_message,
}


def normalize_identifier(value: str) -> str:
    """Netatmo ids are MAC addresses; colons are not allowed in discovery ids."""
    return value.replace(":", "-")


def station_identity(station: dict) -> DeviceIdentity:
    return DeviceIdentity(
        identifiers=normalize_identifier(station["_id"]),
        name=f"{station.get('type')} {station.get('station_name')}",
        manufacturer=NETATMO_MANUFACTURER,
        model=station.get("type"),
        sw_version=station.get("firmware"),
    )


def module_identity(station: dict, module: dict) -> DeviceIdentity:
    return DeviceIdentity(
        identifiers=normalize_identifier(module["_id"]),
        via_device=normalize_identifier(station["_id"]),
        name=f"{module.get('type')} {module.get('module_name')}",
        manufacturer=NETATMO_MANUFACTURER,
        model=module.get("type"),
        sw_version=module.get("firmware"),
    )


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value)


def _is_complete(item, kind: str) -> bool:
    if not isinstance(item, dict) or not _is_text(item.get("_id")) or not _is_text(item.get("module_name")):
        _LOGGER.warning("Skipping Netatmo %s without _id or module_name: %s", kind, item)
        return False
    return True


def _sensor_messages(
    device: DeviceIdentity,
    area: str,
    data_types: List[str],
    builders: Dict[str, SensorBuilder],
    topic_prefix: str,
) -> List[DiscoveryMessage]:
    messages = []
    for data_type in data_types if isinstance(data_types, list) else []:
        kind = str(data_type).lower()
        builder = builders.get(kind)
        if builder is None:
            _LOGGER.debug("Unsupported Netatmo data type %r for %s", data_type, area)
            continue

        state = StateConfig(build_topic(area, "sensor", kind), VALUE_TEMPLATE)
        messages.append(builder(device, area, state, topic_prefix))
    return messages


def weather_station_to_homeassistant(msg: dict, topic_prefix: str = DEFAULT_DISCOVERY_PREFIX) -> List[DiscoveryMessage]:
    """
    Build discovery messages for every station and module of a Netatmo message.

    Args:
        msg: Message holding the station list under payload.devices
        topic_prefix: Discovery prefix

    Returns:
        Station sensors in declared order, then for each module its sensors
        followed by its battery. Empty when the message carries no devices.
    """
    payload = msg.get("payload") if isinstance(msg, dict) else None
    if not isinstance(payload, dict) or not isinstance(payload.get("devices"), list):
        _LOGGER.debug("Netatmo message without devices")
        return []

    messages: List[DiscoveryMessage] = []

    for station in payload["devices"]:
        if not _is_complete(station, "station"):
            continue

        station_area = station["module_name"].lower()
        messages.extend(_sensor_messages(
            station_identity(station),
            station_area,
            station.get("data_type"),
            STATION_SENSORS,
            topic_prefix,
        ))

        modules = station.get("modules")
        for module in modules if isinstance(modules, list) else []:
            if not _is_complete(module, "module"):
                continue

            device = module_identity(station, module)
            area = module["module_name"].lower()
            messages.extend(_sensor_messages(
                device,
                area,
                module.get("data_type"),
                MODULE_SENSORS,
                topic_prefix,
            ))

            if module.get("battery_percent") is not None:
                messages.append(battery_message(
                    device,
                    area,
                    NETATMO_NAME,
                    StateConfig(
                        f"{NETATMO_TOPIC_ROOT}/{station['_id']}/{module['_id']}",
                        BATTERY_TEMPLATE,
                    ),
                    topic_prefix,
                ))

    _LOGGER.debug("Built %d discovery messages from Netatmo message", len(messages))
    return messages
