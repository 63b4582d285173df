"""CPU frequency and usage components for Linux."""

from __future__ import annotations

from slstatus.util import fmt_human, read_text

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"

# user nice system idle iowait irq softirq from the previous sample
_previous: list[float] = [0.0] * 7


def cpu_freq(unused: str | None = None) -> str | None:
    """Return the current frequency of the first CPU."""
    text = read_text(CPU_FREQ)
    if text is None:
        return None
    fields = text.split()
    if not fields or not fields[0].isdigit():
        return None
    return fmt_human(int(fields[0]) * 1000, 1000)


def _read_stat() -> list[float] | None:
    text = read_text(PROC_STAT)
    if text is None:
        return None
    fields = text.split()[1:8]
    if len(fields) != 7:
        return None
    try:
        return [float(field) for field in fields]
    except ValueError:
        return None


def cpu_perc(unused: str | None = None) -> str | None:
    """Return the CPU usage in percent since the previous call."""
    current = _read_stat()
    if current is None:
        return None
    before = _previous.copy()
    _previous[:] = current
    if before[0] == 0:
        return None
    total = sum(before) - sum(current)
    if total == 0:
        return None
    busy_indices = (0, 1, 2, 5, 6)
    busy = sum(before[i] for i in busy_indices) - sum(current[i] for i in busy_indices)
    return str(int(100 * busy / total))