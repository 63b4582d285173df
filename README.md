# slstatus

A small status monitor for Linux. It gathers system information and joins
it into one line of text, once per second. The line goes either to the
name of the X root window, where a window manager's bar can show it, or to
standard output.

## Installation

```
pip install .
```

The package has no dependencies outside the standard library.

## Usage

```
slstatus [-v] [-s] [-1]
```

- `-v` prints `slstatus-1.1` to standard error and exits with status 1.
- `-s` writes the status line to standard output on every update and
  does not connect to the X server.
- `-1` writes the status line to standard output once and exits. This
  implies `-s`.

Any other option, or any argument after the options, prints a usage
message and exits with status 1.

Without `-s` or `-1`, the program connects to the display named by
`DISPLAY`. It uses the cookie from `XAUTHORITY`, or `~/.Xauthority` if
that variable is unset. On every update it sets the root window's
`WM_NAME` to the status line, and it clears that name when it exits. If
the display cannot be opened, it exits with status 1.

SIGINT and SIGTERM stop the loop. SIGUSR1 triggers an update straight
away.

## The status line

The elements of the line are listed in `slstatus.cli.ARGS` as `Arg`
entries. Each entry holds a component function, a format with one `%s`
(`%%` gives a literal percent sign), and the argument for the component.
The default line shows:

- the used RAM (`ram_used`),
- the output of `pamixer --get-volume-human` (`run_command`),
- the date and time (`datetime` with `"  %a  %b  %d %R "`).

If a component returns `None`, the placeholder `n/a` (`UNKNOWN_STR`) is
shown in its place. The whole line is limited to `MAXLEN - 1` bytes
(`MAXLEN` is 2048). If the line would be longer, it is cut at that
length and a warning is printed.

You can build a status line from Python with `render_status`:

```python
from slstatus.cli import Arg, render_status
from slstatus.components.basic import datetime, uptime

line = render_status(
    [Arg(uptime, "up %s | ", None), Arg(datetime, "%s", "%F %T")],
    "n/a",
    2048,
)
print(line)
```

## Components

Each component takes one argument, which is a path, an interface name, a
format string or `None`. It returns a string, or `None` when no value is
available. Where a failure is worth reporting, a warning goes to
standard error. The components live under `slstatus.components`:

| module        | functions                                                      | reads from |
|---------------|----------------------------------------------------------------|------------|
| `basic`       | `cat`, `datetime`, `entropy`, `hostname`, `kernel_release`, `load_avg`, `num_files`, `run_command`, `uptime`, `gid`, `uid`, `username` | files, the shell, the system clock and the user database |
| `disk`        | `disk_free`, `disk_perc`, `disk_total`, `disk_used`            | `statvfs` of a mount point |
| `battery`     | `battery_perc`, `battery_state`, `battery_remaining`           | `/sys/class/power_supply/<name>` |
| `cpu`         | `cpu_freq`, `cpu_perc`                                         | `/sys/devices/system/cpu/cpu0/cpufreq`, `/proc/stat` |
| `memory`      | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` | `/proc/meminfo` |
| `network`     | `ipv4`, `ipv6`, `up`, `netspeed_rx`, `netspeed_tx`             | socket ioctl, `/proc/net/if_inet6`, `/sys/class/net` |
| `temperature` | `temp`                                                         | a thermal sensor file in millidegrees |
| `volume`      | `vol_perc`                                                     | an OSS mixer device such as `/dev/mixer` |
| `wifi`        | `wifi_essid`, `wifi_perc`                                      | nl80211 over generic netlink |

Some components need two calls before they give a value, because they
report a change since the previous call. These are `cpu_perc`,
`netspeed_rx` and `netspeed_tx`. `battery_state` returns `+` when the
battery is charging, `-` when discharging, `o` when full or not charging,
and `?` for any other state. `battery_remaining` returns the time left
while the battery is discharging, and an empty string otherwise.

Sizes are formatted by `slstatus.util.fmt_human` with one decimal and an
SI (base 1000) or IEC (base 1024) prefix. For example, 1536 at base 1024
reads as `1.5 Ki`.

The `keyboard` module holds helpers rather than components:

- `format_indicators(fmt, led_mask)` renders caps lock (`c`) and num lock
  (`n`) state from an LED mask. A letter followed by `?` appears only while
  its indicator is on. Any other letter always appears, in upper case when
  its indicator is on.
- `get_layout(symbols, group)` picks the layout for a group from an XKB
  symbols name such as `pc+us+de:2+inet(evdev)`.
- `valid_layout_or_variant(sym)` tells layout names apart from rule names.

The `wifi` module also exposes `rssi_to_perc` and `find_attr`.

## What it does not do

- It does not read the keyboard LED state or the active XKB keymap from the
  X server. The `keyboard` helpers only format values that you supply.
- It has no configuration file. To change the status line, edit `ARGS`,
  `INTERVAL`, `UNKNOWN_STR` or `MAXLEN` in `slstatus/cli.py`.
- The battery, CPU, memory, temperature, network-speed and Wi-Fi
  components read Linux interfaces only. On the BSDs, `entropy` returns `∞`.