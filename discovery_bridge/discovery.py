"""Home Assistant MQTT discovery messages, one builder per entity kind.

Topic layout: <prefix>/<component>/[<md5(node_id)>/]<object_id>/config

Area and name segments end up in the object id, so callers must keep them to
[a-zA-Z0-9_-]. Nothing here checks that.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, List, Optional, Union

from homeassistant.components.binary_sensor import BinarySensorDeviceClass
from homeassistant.components.sensor import SensorDeviceClass
from homeassistant.const import (
    CONCENTRATION_PARTS_PER_MILLION,
    PERCENTAGE,
    SIGNAL_STRENGTH_DECIBELS_MILLIWATT,
    UnitOfPressure,
    UnitOfTemperature,
)

from .const import (
    COMPONENT_BINARY_SENSOR,
    COMPONENT_LIGHT,
    COMPONENT_SENSOR,
    COMPONENT_SWITCH,
    DEFAULT_DISCOVERY_PREFIX,
    DEFAULT_PAYLOAD_AVAILABLE,
    DEFAULT_PAYLOAD_NOT_AVAILABLE,
)
from .models import (
    AvailabilityConfig,
    CommandConfig,
    DeviceIdentity,
    DiscoveryMessage,
    LightConfig,
    StateConfig,
)

_LOGGER = logging.getLogger(__name__)

NodeId = Union[str, List[str], None]


def object_id(area: str, name: Optional[str] = None, suffix: Optional[str] = None) -> str:
    """Return `{area}[_{name}][_{suffix}]`, used both as unique_id and topic object id."""
    return "_".join(part for part in (area, name, suffix) if part)


def display_name(area: str, name: Optional[str] = None, label: Optional[str] = None) -> str:
    return " - ".join(part for part in (area, name, label) if part)


def hash_node_id(node_id: Union[str, List[str]]) -> str:
    """
    Hash a node id into a fixed-length topic segment.

    The same node id always gives the same 32 hex characters, whatever
    characters the node id itself contains.
    """
    if isinstance(node_id, (list, tuple)):
        node_id = ",".join(node_id)
    return hashlib.md5(node_id.encode("utf-8")).hexdigest()


def discovery_topic(topic_prefix: str, component: str, obj_id: str, node_id: NodeId = None) -> str:
    if node_id:
        return f"{topic_prefix}/{component}/{hash_node_id(node_id)}/{obj_id}/config"
    return f"{topic_prefix}/{component}/{obj_id}/config"


def build_message(
    device: DeviceIdentity,
    component: str,
    obj_id: str,
    name: str,
    fields: Dict[str, Any],
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    """
    Assemble the common discovery skeleton.

    Args:
        device: Device the entity belongs to
        component: One of sensor, binary_sensor, switch, light
        obj_id: Object id, reused verbatim as unique_id
        name: Display name of the entity
        fields: Entity specific fields; None values are left out
        topic_prefix: Discovery prefix
        node_id: Optional node id, hashed into the topic

    Returns:
        DiscoveryMessage with qos 2 and retain set
    """
    payload: Dict[str, Any] = {
        "device": device.as_dict(),
        "name": name,
        "unique_id": obj_id,
    }
    payload.update((key, value) for key, value in fields.items() if value is not None)

    topic = discovery_topic(topic_prefix, component, obj_id, node_id)
    _LOGGER.debug("Built %s discovery message %s", component, topic)
    return DiscoveryMessage(topic=topic, payload=payload)


def _sensor_message(
    device: DeviceIdentity,
    area: str,
    name: Optional[str],
    state: StateConfig,
    suffix: str,
    label: str,
    unit: str,
    device_class: Optional[str],
    topic_prefix: str,
    node_id: NodeId,
) -> DiscoveryMessage:
    return build_message(
        device,
        COMPONENT_SENSOR,
        object_id(area, name, suffix),
        display_name(area, name, label),
        {
            "device_class": device_class,
            "state_topic": state.topic,
            "value_template": state.value_template,
            "unit_of_measurement": unit,
        },
        topic_prefix,
        node_id,
    )


# --- Sensors ------------------------------------------------------------------

def battery_message(
    device: DeviceIdentity,
    area: str,
    name: Optional[str],
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "battery", "battery",
                           PERCENTAGE, SensorDeviceClass.BATTERY, topic_prefix, node_id)


def brightness_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    # Home Assistant expects "lx" for illuminance
    return _sensor_message(device, area, name, state, "brightness", "brightness",
                           "lx", SensorDeviceClass.ILLUMINANCE, topic_prefix, node_id)


def co2_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "co2", "CO²",
                           CONCENTRATION_PARTS_PER_MILLION, None, topic_prefix, node_id)


def humidity_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "humidity", "humidity",
                           PERCENTAGE, SensorDeviceClass.HUMIDITY, topic_prefix, node_id)


def noise_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "noise", "noise",
                           SIGNAL_STRENGTH_DECIBELS_MILLIWATT, None, topic_prefix, node_id)


def pressure_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "pressure", "pressure",
                           UnitOfPressure.HPA, SensorDeviceClass.PRESSURE, topic_prefix, node_id)


def temperature_message(
    device: DeviceIdentity,
    area: str,
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    name: Optional[str] = None,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    return _sensor_message(device, area, name, state, "temperature", "temperature",
                           UnitOfTemperature.CELSIUS, SensorDeviceClass.TEMPERATURE, topic_prefix, node_id)


# --- Binary sensor / switch ---------------------------------------------------

def motion_message(
    device: DeviceIdentity,
    area: str,
    name: Optional[str],
    state: StateConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    """Motion binary sensor; the entity is the sensor itself, so no suffix."""
    return build_message(
        device,
        COMPONENT_BINARY_SENSOR,
        object_id(area, name),
        display_name(area, name),
        {
            "device_class": BinarySensorDeviceClass.MOTION,
            "state_topic": state.topic,
            "value_template": state.value_template,
            "payload_off": state.state_off,
            "payload_on": state.state_on,
        },
        topic_prefix,
        node_id,
    )


def enabled_message(
    device: DeviceIdentity,
    area: str,
    name: Optional[str],
    state: StateConfig,
    command: CommandConfig,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    """Switch toggling whether a device is enabled."""
    return build_message(
        device,
        COMPONENT_SWITCH,
        object_id(area, name, "enabled"),
        display_name(area, name, "enabled"),
        {
            "state_topic": state.topic,
            "value_template": state.value_template,
            "state_off": state.state_off,
            "state_on": state.state_on,
            "command_topic": command.topic,
            "payload_off": command.payload_off,
            "payload_on": command.payload_on,
        },
        topic_prefix,
        node_id,
    )


# --- Light --------------------------------------------------------------------

def light_message(
    device: DeviceIdentity,
    area: str,
    name: Optional[str],
    config: LightConfig,
    state: StateConfig,
    command: Optional[CommandConfig] = None,
    availability: Optional[AvailabilityConfig] = None,
    topic_prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: NodeId = None,
) -> DiscoveryMessage:
    """
    JSON schema light.

    brightness is only advertised when config.brightness is truthy, and
    brightness_scale only alongside it. Every tag in config.color_modes
    becomes `<tag>: true`.
    """
    fields: Dict[str, Any] = {
        "schema": "json",
        "state_topic": state.topic,
    }

    if availability is not None:
        fields["availability"] = {
            "topic": availability.topic,
            "payload_available": availability.payload_available or DEFAULT_PAYLOAD_AVAILABLE,
            "payload_not_available": availability.payload_not_available or DEFAULT_PAYLOAD_NOT_AVAILABLE,
        }

    if command is not None:
        fields["command_topic"] = command.topic

    if config.brightness:
        fields["brightness"] = config.brightness
        fields["brightness_scale"] = config.brightness_scale

    for mode in sorted(config.color_modes):
        fields[mode] = True

    return build_message(
        device,
        COMPONENT_LIGHT,
        object_id(area, name),
        display_name(area, name),
        fields,
        topic_prefix,
        node_id,
    )
