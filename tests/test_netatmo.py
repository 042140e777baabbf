"""Tests for the Netatmo weather station adapter."""
import pytest

from discovery_bridge.netatmo import (
    module_identity,
    normalize_identifier,
    station_identity,
    weather_station_to_homeassistant,
)


def station(data_type=None, modules=None, **extra):
    item = {
        "_id": "70:ee:50:00:00:01",
        "type": "NAMain",
        "station_name": "Home",
        "module_name": "Indoor",
        "firmware": 178,
        "data_type": data_type if data_type is not None else [],
        "modules": modules if modules is not None else [],
    }
    item.update(extra)
    return item


def module(data_type=None, **extra):
    item = {
        "_id": "02:00:00:00:00:02",
        "type": "NAModule1",
        "module_name": "Bedroom",
        "firmware": 50,
        "data_type": data_type if data_type is not None else [],
    }
    item.update(extra)
    return item


def message(*stations):
    return {"payload": {"devices": list(stations)}}


def test_station_and_module_fan_out_order():
    msg = message(station(
        ["Temperature", "Humidity"],
        [module(["CO2"], battery_percent=80)],
    ))

    result = weather_station_to_homeassistant(msg)

    assert [m.topic for m in result] == [
        "homeassistant/sensor/indoor_temperature/config",
        "homeassistant/sensor/indoor_humidity/config",
        "homeassistant/sensor/bedroom_co2/config",
        "homeassistant/sensor/bedroom_netatmo_battery/config",
    ]


def test_all_station_data_types():
    msg = message(station(["Temperature", "CO2", "Humidity", "Noise", "Pressure"]))

    result = weather_station_to_homeassistant(msg, "hass")

    assert [m.payload["unique_id"] for m in result] == [
        "indoor_temperature",
        "indoor_co2",
        "indoor_humidity",
        "indoor_noise",
        "indoor_pressure",
    ]
    assert all(m.topic.startswith("hass/sensor/") for m in result)
    assert result[3].payload["unit_of_measurement"] == "dBm"
    assert result[4].payload["unit_of_measurement"] == "hPa"
    assert result[0].payload["state_topic"] == "home/indoor/sensor/temperature"


def test_module_ignores_station_only_types():
    msg = message(station(modules=[module(["Temperature", "Noise", "Pressure", "Rain"])]))

    result = weather_station_to_homeassistant(msg)

    assert [m.payload["unique_id"] for m in result] == ["bedroom_temperature"]


def test_unknown_data_types_are_skipped():
    msg = message(station(["Temperature", "Wind", "health_idx"]))

    result = weather_station_to_homeassistant(msg)

    assert len(result) == 1


def test_module_device_points_to_station():
    msg = message(station(modules=[module(["Temperature"])]))

    device = weather_station_to_homeassistant(msg)[0].payload["device"]

    assert device == {
        "identifiers": "02-00-00-00-00-02",
        "via_device": "70-ee-50-00-00-01",
        "name": "NAModule1 Bedroom",
        "manufacturer": "Netatmo",
        "model": "NAModule1",
        "sw_version": 50,
    }


def test_station_device():
    device = station_identity(station())

    assert device.identifiers == "70-ee-50-00-00-01"
    assert device.name == "NAMain Home"
    assert device.via_device is None


def test_module_identity():
    device = module_identity(station(), module())

    assert device.identifiers == "02-00-00-00-00-02"
    assert device.via_device == "70-ee-50-00-00-01"


def test_module_battery():
    msg = message(station(modules=[module(battery_percent=64)]))

    result = weather_station_to_homeassistant(msg)

    assert len(result) == 1
    battery = result[0]
    assert battery.payload["unique_id"] == "bedroom_netatmo_battery"
    assert battery.payload["name"] == "bedroom - netatmo - battery"
    assert battery.payload["device_class"] == "battery"
    assert battery.payload["state_topic"] == "netatmo/weather/70:ee:50:00:00:01/02:00:00:00:00:02"
    assert battery.payload["value_template"] == "{{ value_json.battery }}"


def test_module_battery_at_zero_percent():
    msg = message(station(modules=[module(battery_percent=0)]))

    assert len(weather_station_to_homeassistant(msg)) == 1


@pytest.mark.parametrize("msg", [
    {},
    {"payload": {}},
    {"payload": {"devices": []}},
    {"payload": None},
    None,
])
def test_no_devices(msg):
    assert weather_station_to_homeassistant(msg) == []


def test_incomplete_entries_are_skipped():
    broken_station = station(["Temperature"])
    del broken_station["_id"]
    broken_module = module(["Humidity"])
    del broken_module["module_name"]

    msg = message(
        broken_station,
        station(["Pressure"], [broken_module, module(["CO2"])]),
    )

    result = weather_station_to_homeassistant(msg)

    assert [m.payload["unique_id"] for m in result] == ["indoor_pressure", "bedroom_co2"]


def test_wrongly_typed_entries_are_skipped():
    msg = message(
        station(["Temperature"], module_name=7),
        station(["Humidity"], _id=12345),
        station(["Pressure"], [module(["Humidity"], module_name=["Bedroom"]), module(["CO2"], _id=None), "module"]),
        "station",
    )

    result = weather_station_to_homeassistant(msg)

    assert [m.payload["unique_id"] for m in result] == ["indoor_pressure"]


@pytest.mark.parametrize("msg", [
    {"payload": {"devices": "70:ee:50:00:00:01"}},
    {"payload": {"devices": {"_id": "70:ee:50:00:00:01"}}},
])
def test_devices_not_a_list(msg):
    assert weather_station_to_homeassistant(msg) == []


def test_wrongly_typed_lists_are_empty():
    msg = message(station("Temperature", modules=5))

    assert weather_station_to_homeassistant(msg) == []


def test_missing_lists_are_empty():
    item = station()
    del item["data_type"]
    del item["modules"]

    assert weather_station_to_homeassistant(message(item)) == []


def test_normalize_identifier_is_idempotent():
    once = normalize_identifier("70:ee:50:00:00:01")

    assert once == "70-ee-50-00-00-01"
    assert normalize_identifier(once) == once
