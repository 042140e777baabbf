CONF_BROKER_HOST = "broker_host"
CONF_BROKER_PORT = "broker_port"
CONF_BROKER_USERNAME = "broker_username"
CONF_BROKER_PASSWORD = "broker_password"
CONF_BROKER_TLS = "broker_tls"
CONF_DISCOVERY_PREFIX = "discovery_prefix"  # e.g. "homeassistant"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1883
DEFAULT_DISCOVERY_PREFIX = "homeassistant"

# Requested for every discovery message
DISCOVERY_QOS = 2
DISCOVERY_RETAIN = True

# --- Components ---------------------------------------------------------------

COMPONENT_SENSOR = "sensor"
COMPONENT_BINARY_SENSOR = "binary_sensor"
COMPONENT_SWITCH = "switch"
COMPONENT_LIGHT = "light"

# --- Availability -------------------------------------------------------------

DEFAULT_PAYLOAD_AVAILABLE = "online"
DEFAULT_PAYLOAD_NOT_AVAILABLE = "offline"

# --- Local topics -------------------------------------------------------------

HOME_TOPIC_ROOT = "home"
VALUE_TEMPLATE = "{{ value_json.value }}"
BATTERY_TEMPLATE = "{{ value_json.battery }}"
ENABLED_TEMPLATE = "{{ value_json.enabled }}"

# --- Vendors ------------------------------------------------------------------

HUE_MOTION_SENSOR_MODEL = "Hue motion sensor"
HUE_LIGHT_BRIGHTNESS_SCALE = 100

NETATMO_MANUFACTURER = "Netatmo"
NETATMO_NAME = "netatmo"
NETATMO_TOPIC_ROOT = "netatmo/weather"
