"""Broker and discovery settings."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import voluptuous as vol

from .const import (
    CONF_BROKER_HOST,
    CONF_BROKER_PORT,
    CONF_BROKER_USERNAME,
    CONF_BROKER_PASSWORD,
    CONF_BROKER_TLS,
    CONF_DISCOVERY_PREFIX,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_DISCOVERY_PREFIX,
)

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema({
    vol.Required(CONF_BROKER_HOST, default=DEFAULT_HOST): vol.All(str, vol.Length(min=1)),
    vol.Required(CONF_BROKER_PORT, default=DEFAULT_PORT): vol.All(vol.Coerce(int), vol.Range(min=1, max=65535)),
    vol.Optional(CONF_BROKER_USERNAME, default=""): str,
    vol.Optional(CONF_BROKER_PASSWORD, default=""): str,
    vol.Optional(CONF_BROKER_TLS, default=False): bool,
    # Discovery prefix becomes the first topic level, so no slashes or wildcards
    vol.Optional(CONF_DISCOVERY_PREFIX, default=DEFAULT_DISCOVERY_PREFIX): vol.All(
        str, vol.Match(r"^[^/#+]+$")
    ),
})


@dataclass(frozen=True)
class BridgeConfig:
    host: str
    port: int
    username: Optional[str]
    password: Optional[str]
    tls: bool
    discovery_prefix: str


def validate_config(data: dict) -> BridgeConfig:
    """
    Validate raw settings and return a BridgeConfig.
    Raises voluptuous.Invalid if a value is missing or malformed.
    """
    conf = CONFIG_SCHEMA(dict(data))

    # Convert empty strings to None for optional credentials
    config = BridgeConfig(
        host=conf[CONF_BROKER_HOST],
        port=conf[CONF_BROKER_PORT],
        username=conf[CONF_BROKER_USERNAME] or None,
        password=conf[CONF_BROKER_PASSWORD] or None,
        tls=conf[CONF_BROKER_TLS],
        discovery_prefix=conf[CONF_DISCOVERY_PREFIX],
    )
    _LOGGER.debug("Configuration loaded: host=%s port=%s tls=%s prefix=%s",
                  config.host, config.port, config.tls, config.discovery_prefix)
    return config
