# clockwise

Software for a 64×64 LED matrix wall clock. It collects what such a clock
needs into plain Python modules with no third-party dependencies:

- `clockwise.colors`: RGB565 packing (`color565`) and the channel helpers
  `adjust_bright` and `brighter`.
- `clockwise.images`: flipping row-major pixel images in place
  (`flip_horizontally`), as a copy (`flip_horizontally_clone`), and `clone`.
- `clockwise.sprite`: `Sprite` rectangles with `collided_with`,
  `describe_position` and `name`. It also holds the `Direction` enum and the
  display size constants `DISPLAY_WIDTH` and `DISPLAY_HEIGHT` (64).
- `clockwise.events`: `EventType`, the abstract `EventTask`, and an
  `EventBus` that delivers broadcasts to its subscribers in order. A bus
  holds at most five subscribers by default. One more raises
  `EventBusFullError`.
- `clockwise.font`: `Glyph` and `Font` with `glyph` and `text_bounds`, and
  the tiny `PICOPIXEL` font.
- `clockwise.display`: `Canvas` is an in-memory RGB565 frame buffer. It has
  pixels, rectangles, RGB and 1-bit bitmaps, text and a brightness value.
  `Locator` holds the shared display and event bus. `Picture` and `Tile`
  draw images on the located display, and `Tile.fill_row` repeats one
  across a row.
- `clockwise.icons`: 8×8 icons (`WIFI`, `MAIL`, `WEATHER_CLOUDY_SUN`) and
  `icon_rows`.
- `clockwise.status`: `StatusController` draws the start-up logo and the
  "Connecting WiFi", "NTP Server" and failure screens. It also blinks a
  status LED through a callback you supply. `force_restart` calls a restart
  hook, which by default raises `RestartRequested`.
- `clockwise.clocktime`: `ClockTime` gives the hour, minute, second,
  milliseconds, day, month, weekday and AM/PM in a named zone or a POSIX TZ
  string. `format_time` uses PHP-style format letters, and `parse_posix_tz`
  reads zones such as `CST-8` or `EST5EDT,M3.2.0,M11.1.0`. `Clockface` is the
  abstract base for clock faces.
- `clockwise.preferences`: `ClockwiseParams` holds the clock's settings and
  loads and saves them through a `PreferenceStore`. The store lives in
  memory, or in a JSON file when given a path. Keys are 1 to 15 characters,
  and values must be bool, int or str.
- `clockwise.webserver`: `SettingsServer` is a small HTTP settings API, with
  the helpers `parse_request_line`, `apply_setting` and `settings_headers`.
- `clockwise.wifi`: `ConnectionMonitor` asks for a restart when the device
  stays offline for more than five minutes without ever having connected.
  It also saves Wi-Fi credentials it receives.
- `clockwise.httpclient`: `http_get` makes a TLS GET without certificate
  checks. It raises `HttpError` unless the reply is `200 OK`, and returns the
  body. `read_response_body` does the reply part on any binary stream.
- `clockwise.app`: `map_range`, `in_active_hours`, and `BrightnessController`,
  which sets brightness from a light-sensor reading (`auto_bright`) or by the
  hour (`time_control`). It also holds the `clockwise` command.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

Named time zones come from the system's zoneinfo database.

## The `clockwise` command

```
clockwise [--prefs FILE] [--serve] [--host HOST] [--port PORT]
```

The command does the following:

1. Loads the settings, from `FILE` if `--prefs` is given. Otherwise it uses
   the defaults in memory.
2. Draws the logo and the NTP status screen on an in-memory canvas.
3. Selects the time zone. A manual POSIX string takes precedence over the
   zone name.
4. Sets the brightness by the hour.
5. Prints the firmware name and version, the current time and the chosen
   brightness.

With `--serve` it then runs the settings server on `HOST:PORT`. The default
port is 80, so pass a higher `--port` when you are not privileged. It exits
with status 1 if the time zone cannot be set.

## Settings server

`SettingsServer` answers one request per connection:

| Request                    | Effect |
|----------------------------|--------|
| `GET /`                    | `200 OK` with the settings page (`settings_page`, a minimal HTML page by default) |
| `GET /get`                 | reloads the settings and returns `204 No Content` with one `X-<name>: <value>` header per setting, plus `X-CW_FW_VERSION`, `X-CW_FW_NAME` and `X-CLOCKFACE_NAME` |
| `GET /read?pin=N`          | returns `X-pin: <reading>` from the `analog_read` callback (0 by default) |
| `POST /set?<key>=<value>`  | changes one setting, saves all settings, returns `204` |
| `POST /restart`            | returns `204`; the next connection then triggers a restart |

For example, `POST /set?displayBright=40` changes the brightness.
`POST /set?autoBright=0010,0800` sets the light-sensor range: the first four
characters are the minimum and characters six to nine are the maximum.
Unknown keys are ignored, but the settings are still saved.

```python
from clockwise.preferences import ClockwiseParams
from clockwise.webserver import SettingsServer, parse_request_line

params = ClockwiseParams()
server = SettingsServer(params)
server.process_request(parse_request_line("POST /set?displayBright=40 HTTP/1.1\r\n"))
assert params.display_bright == 40
```

## Library examples

```python
from clockwise.colors import color565
from clockwise.images import flip_horizontally_clone
from clockwise.clocktime import ClockTime

color565(255, 0, 0)                                  # 0xF800
flip_horizontally_clone([1, 2, 3, 4, 5, 6], 3, 2)    # [3, 2, 1, 6, 5, 4]

clock = ClockTime()
clock.begin("UTC", use_24h_format=True, posix_tz="CST-8")
clock.formatted_time("H:i")
```

## Default settings

| Setting           | Default                     |
|-------------------|-----------------------------|
| `swapBlueGreen`   | off                         |
| `use24hFormat`    | on                          |
| `displayBright`   | 32                          |
| `nightBright`     | 5                           |
| `autoBrightMin`   | 0                           |
| `autoBrightMax`   | 0 (light sensor control off) |
| `ldrPin`          | 35                          |
| `timeZone`        | `Asia/Shanghai`             |
| `ntpServer`       | `ntp1.aliyun.com`           |
| `canvasServer`    | `raw.githubusercontent.com` |
| `displayRotation` | 0                           |
| `activeHourStart` | 6                           |
| `activeHourEnd`   | 18                          |
| `timeControl`     | on                          |

## What this package does not do

- It drives no physical LED panel. All drawing goes to the in-memory
  `Canvas`.
- It does not join Wi-Fi networks. `ConnectionMonitor` only tracks a
  connection state that you report to it.
- It does not synchronise the clock over NTP. The NTP server is stored, and
  the time comes from the host clock.
- It includes no clock faces, only the abstract `Clockface` base. The
  settings page is a minimal placeholder.