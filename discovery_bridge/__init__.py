"""Translate Hue and Netatmo messages into Home Assistant MQTT discovery messages."""
from __future__ import annotations

from .config import BridgeConfig, validate_config
from .dispatcher import ADAPTERS, DiscoveryDispatcher, UnknownMessageKind, translate
from .hue import (
    brightness_to_homeassistant,
    light_to_homeassistant,
    motion_battery_to_homeassistant,
    motion_enabled_to_homeassistant,
    motion_to_homeassistant,
    parse_name,
    temperature_to_homeassistant,
)
from .models import (
    AvailabilityConfig,
    CommandConfig,
    DeviceIdentity,
    DiscoveryMessage,
    LightConfig,
    StateConfig,
)
from .netatmo import weather_station_to_homeassistant
from .topic_parser import ParsedTopic, build_topic, parse_topic

__version__ = "0.3.0"

__all__ = [
    "ADAPTERS",
    "AvailabilityConfig",
    "BridgeConfig",
    "CommandConfig",
    "DeviceIdentity",
    "DiscoveryDispatcher",
    "DiscoveryMessage",
    "LightConfig",
    "ParsedTopic",
    "StateConfig",
    "UnknownMessageKind",
    "brightness_to_homeassistant",
    "build_topic",
    "light_to_homeassistant",
    "motion_battery_to_homeassistant",
    "motion_enabled_to_homeassistant",
    "motion_to_homeassistant",
    "parse_name",
    "parse_topic",
    "temperature_to_homeassistant",
    "translate",
    "validate_config",
    "weather_station_to_homeassistant",
]
