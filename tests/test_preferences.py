import pytest

from clockwise.preferences import ClockwiseParams, PreferenceStore


def test_function_should_get_default_values():
    params = ClockwiseParams(PreferenceStore(namespace="clockwise_test"))
    params.load()
    assert params.canvas_server == "raw.githubusercontent.com"
    assert params.time_zone == "Asia/Shanghai"
    assert params.ntp_server == "ntp1.aliyun.com"
    assert params.display_bright == 32
    assert params.use_24h_format is True


def test_other_defaults():
    params = ClockwiseParams(PreferenceStore())
    assert params.night_bright == 5
    assert params.ldr_pin == 35
    assert (params.active_hour_start, params.active_hour_end) == (6, 18)
    assert params.time_control is True
    assert params.swap_blue_green is False
    assert params.wifi_ssid == ""


def test_save_and_reload_from_file(tmp_path):
    path = tmp_path / "prefs.json"
    params = ClockwiseParams(PreferenceStore(path))
    password = "password"
    params.wifi_ssid = "home"
    params.wifi_pwd = password
    params.display_bright = 100
    params.time_control = False
    params.time_zone = "Europe/Berlin"
    params.save()

    reloaded = ClockwiseParams(PreferenceStore(path))
    assert reloaded.wifi_ssid == "home"
    assert reloaded.wifi_pwd == password
    assert reloaded.display_bright == 100
    assert reloaded.time_control is False
    assert reloaded.time_zone == "Europe/Berlin"
    assert reloaded == params


def test_load_discards_unsaved_changes():
    params = ClockwiseParams(PreferenceStore())
    params.display_bright = 200
    params.load()
    assert params.display_bright == 32


def test_byte_settings_wrap_on_load():
    store = PreferenceStore()
    store.put(ClockwiseParams.PREF_DISPLAY_BRIGHT, 256)
    assert ClockwiseParams(store).display_bright == 0


def test_store_get_put_clear():
    store = PreferenceStore()
    assert store.get("ldrPin", 35) == 35
    store.put("ldrPin", 34)
    assert store.get("ldrPin", 35) == 34
    store.clear()
    assert store.get("ldrPin", 35) == 35


def test_store_rejects_long_keys_and_bad_values():
    store = PreferenceStore()
    with pytest.raises(ValueError):
        store.put("a_key_that_is_too_long", 1)
    with pytest.raises(TypeError):
        store.put("list", [1, 2])


def test_namespaces_share_a_file_independently(tmp_path):
    path = tmp_path / "prefs.json"
    first = PreferenceStore(path, "clockwise")
    second = PreferenceStore(path, "clockwise_test")
    first.put("timeZone", "UTC")
    second.put("timeZone", "Asia/Tokyo")
    assert PreferenceStore(path, "clockwise").get("timeZone", "") == "UTC"
    assert PreferenceStore(path, "clockwise_test").get("timeZone", "") == "Asia/Tokyo"


def test_clear_persists(tmp_path):
    path = tmp_path / "prefs.json"
    params = ClockwiseParams(PreferenceStore(path))
    params.night_bright = 1
    params.save()
    PreferenceStore(path).clear()
    assert ClockwiseParams(PreferenceStore(path)).night_bright == 5