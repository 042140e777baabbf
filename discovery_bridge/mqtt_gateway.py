import asyncio
import json
import ssl
import logging
import secrets
from typing import Optional

import paho.mqtt.client as mqtt
from paho.mqtt.enums import CallbackAPIVersion

from .models import DiscoveryMessage

_LOGGER = logging.getLogger(__name__)


class MqttGateway:
    """Publishing side of the bridge, using paho-mqtt."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        tls_enabled: bool,
        client_id: Optional[str] = None,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._tls_enabled = tls_enabled
        # Generate unique client ID to avoid conflicts between multiple instances
        if client_id is None:
            client_id = f"discovery-bridge-{secrets.token_hex(4)}"
        self._client = mqtt.Client(
            callback_api_version=CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        if username:
            self._client.username_pw_set(username, password)
        if tls_enabled:
            self._client.tls_set(cert_reqs=ssl.CERT_REQUIRED)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._connect_future: Optional[asyncio.Future] = None
        self._is_connected: bool = False
        self._reconnect_count: int = 0

        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect

    @classmethod
    def from_config(cls, config) -> "MqttGateway":
        return cls(
            host=config.host,
            port=config.port,
            username=config.username,
            password=config.password,
            tls_enabled=config.tls,
        )

    async def connect(self, timeout: float = 10.0) -> None:
        """Connect to MQTT broker with timeout. Raises ConnectionError if connection fails."""
        self._loop = asyncio.get_running_loop()
        self._connect_future = self._loop.create_future()

        try:
            await self._loop.run_in_executor(None, self._client.connect, self._host, self._port, 60)
            self._client.loop_start()

            # Wait for connection callback with timeout
            try:
                await asyncio.wait_for(self._connect_future, timeout=timeout)
            except asyncio.TimeoutError:
                self._client.loop_stop()
                raise ConnectionError(f"Connection to MQTT broker {self._host}:{self._port} timed out after {timeout}s")

        except Exception:
            if self._connect_future and not self._connect_future.done():
                self._connect_future.cancel()
            raise
        finally:
            self._connect_future = None

    def _resolve_connect(self, error: Optional[Exception]) -> None:
        future = self._connect_future
        if future is None or future.done():
            return
        if error is None:
            future.set_result(True)
        else:
            future.set_exception(error)

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        # Runs in the paho network thread
        if not reason_code.is_failure:
            if self._reconnect_count > 0:
                _LOGGER.info("Reconnected to MQTT broker (attempt %d)", self._reconnect_count)
                self._reconnect_count = 0
            else:
                _LOGGER.info("Connected to MQTT broker %s:%s", self._host, self._port)
            self._is_connected = True
            error = None
        else:
            _LOGGER.error("MQTT connect failed: %s", reason_code)
            self._is_connected = False
            error = ConnectionError(f"MQTT connection failed: {reason_code}")

        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._resolve_connect, error)

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties=None):
        self._is_connected = False

        if not reason_code.is_failure:
            _LOGGER.info("MQTT disconnected gracefully")
        else:
            _LOGGER.warning("MQTT disconnected unexpectedly (%s), will auto-reconnect", reason_code)
            self._reconnect_count += 1

    def _publish(self, topic: str, data: str, retain: bool, qos: int):
        info = self._client.publish(topic, data, qos=qos, retain=retain)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            _LOGGER.error("Failed to publish to topic %s: %s", topic, mqtt.error_string(info.rc))
        return info

    def publish_json(self, topic: str, payload: dict, retain: bool = True, qos: int = 0):
        """Publish JSON payload to MQTT topic."""
        return self._publish(topic, json.dumps(payload, ensure_ascii=False), retain, qos)

    def publish_discovery(self, message: DiscoveryMessage):
        """Publish a discovery message with its own qos and retain flag."""
        _LOGGER.debug("Publishing discovery message %s", message.topic)
        return self._publish(message.topic, message.to_json(), message.retain, message.qos)

    @property
    def is_connected(self) -> bool:
        """Return True if currently connected to MQTT broker."""
        return self._is_connected

    def stop(self) -> None:
        """Stop MQTT client and disconnect."""
        self._client.loop_stop()
        self._client.disconnect()
