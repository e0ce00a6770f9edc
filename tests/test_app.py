import pytest

from clockwise.app import (
    CHECK_INTERVAL_MS,
    MIN_BRIGHT_DISPLAY_OFF,
    BrightnessController,
    in_active_hours,
    main,
    map_range,
)
from clockwise.display import Canvas
from clockwise.preferences import ClockwiseParams, PreferenceStore


def _params(**changes):
    params = ClockwiseParams()
    for name, value in changes.items():
        setattr(params, name, value)
    return params


def test_map_range_endpoints():
    assert map_range(10, 10, 800, 1, 10) == 1
    assert map_range(800, 10, 800, 1, 10) == 10


def test_map_range_truncates_toward_zero():
    assert map_range(-1, 0, 10, 0, 5) == 0


def test_map_range_empty_input_range_raises():
    with pytest.raises(ValueError):
        map_range(5, 3, 3, 0, 10)


@pytest.mark.parametrize("hour,expected", [(6, True), (17, True), (18, False), (5, False)])
def test_in_active_hours_daytime(hour, expected):
    assert in_active_hours(hour, 6, 18) is expected


@pytest.mark.parametrize("hour,expected", [(23, True), (3, True), (12, False)])
def test_in_active_hours_across_midnight(hour, expected):
    assert in_active_hours(hour, 22, 6) is expected


def test_time_control_disabled_restores_display_bright_once():
    params = _params(time_control=False)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.time_control(12, 0) == params.display_bright
    assert canvas.brightness == params.display_bright
    assert controller.time_control(12, 0) is None


def test_time_control_waits_for_interval():
    params = _params(time_control=True)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.time_control(12, CHECK_INTERVAL_MS) is None
    assert canvas.brightness == 255


def test_time_control_switches_between_day_and_night():
    params = _params(time_control=True)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.time_control(12, CHECK_INTERVAL_MS + 1) == params.display_bright
    assert controller.time_control(2, 2 * CHECK_INTERVAL_MS + 2) == params.night_bright
    assert canvas.brightness == params.night_bright


def test_auto_bright_disabled_without_maximum():
    params = _params(auto_bright_max=0)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.auto_bright(500, CHECK_INTERVAL_MS + 1) is None
    assert canvas.brightness == 255


def test_auto_bright_full_light_uses_display_bright():
    params = _params(auto_bright_min=10, auto_bright_max=800)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.auto_bright(900, CHECK_INTERVAL_MS + 1) == params.display_bright
    assert canvas.brightness == params.display_bright


def test_auto_bright_dark_turns_display_off():
    params = _params(auto_bright_min=10, auto_bright_max=800)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.auto_bright(5, CHECK_INTERVAL_MS + 1) == MIN_BRIGHT_DISPLAY_OFF
    assert canvas.brightness == MIN_BRIGHT_DISPLAY_OFF


def test_auto_bright_ignores_small_slot_change():
    params = _params(auto_bright_min=10, auto_bright_max=800)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    controller.auto_bright(800, CHECK_INTERVAL_MS + 1)
    slot_before = controller.current_slot
    assert controller.auto_bright(713, 2 * CHECK_INTERVAL_MS + 2) is None
    assert controller.current_slot == slot_before
    assert canvas.brightness == params.display_bright


def test_auto_bright_waits_for_interval():
    params = _params(auto_bright_min=10, auto_bright_max=800)
    canvas = Canvas()
    controller = BrightnessController(params, canvas)
    assert controller.auto_bright(900, 1000) is None


def test_main_prints_time_with_manual_posix(tmp_path, capsys):
    path = tmp_path / "prefs.json"
    PreferenceStore(path).put("manualPosix", "CST-8")
    assert main(["--prefs", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Clockwise 1.2.2" in out
    assert "CST" in out


def test_main_rejects_unknown_time_zone(tmp_path, capsys):
    path = tmp_path / "prefs.json"
    PreferenceStore(path).put("timeZone", "Nowhere/Invalid")
    assert main(["--prefs", str(path)]) == 1
    assert "time zone" in capsys.readouterr().err