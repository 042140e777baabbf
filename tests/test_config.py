"""Tests for configuration validation."""
import pytest
import voluptuous as vol

from discovery_bridge.config import validate_config


def test_defaults():
    config = validate_config({})

    assert config.host == "localhost"
    assert config.port == 1883
    assert config.username is None
    assert config.password is None
    assert config.tls is False
    assert config.discovery_prefix == "homeassistant"


def test_full_config():
    config = validate_config({
        "broker_host": "mqtt.lan",
        "broker_port": "8883",
        "broker_username": "bridge",
        "broker_password": "secret",
        "broker_tls": True,
        "discovery_prefix": "hass",
    })

    assert config.host == "mqtt.lan"
    assert config.port == 8883
    assert config.username == "bridge"
    assert config.password == "secret"
    assert config.tls is True
    assert config.discovery_prefix == "hass"


@pytest.mark.parametrize("data", [
    {"broker_port": 0},
    {"broker_port": "mqtt"},
    {"broker_host": ""},
    {"discovery_prefix": "home/assistant"},
    {"discovery_prefix": "#"},
    {"unknown_key": 1},
])
def test_invalid_config(data):
    with pytest.raises(vol.Invalid):
        validate_config(data)
