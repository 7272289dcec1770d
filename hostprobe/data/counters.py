"""Raw counter reads from procfs and sysfs.

Nothing here computes rates: each function returns the counters exactly as
the kernel reported them at the moment of the read.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from hostprobe.core.errors import ResourceUnavailable
from hostprobe.models.counters import TOTAL_KEY, CounterSet, CounterSnapshot

CPU_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
)

_CPU_ROW_RE = re.compile(r"^cpu(\d*)$")

# /proc/diskstats columns (0-indexed): 2 is the device, 5 and 9 are sectors.
_DISK_NAME_COLUMN = 2
_SECTORS_READ_COLUMN = 5
_SECTORS_WRITTEN_COLUMN = 9


def read_resource(path: str | Path) -> str:
    """Return the full text of ``path``; unreadable or empty is an error."""

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            content = fh.read()
    except OSError as exc:
        raise ResourceUnavailable(path, exc.strerror) from exc
    if not content.strip():
        raise ResourceUnavailable(path, "empty resource")
    return content


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _synthesize_total(cores: Iterable[CounterSnapshot]) -> CounterSnapshot:
    totals = dict.fromkeys(CPU_FIELDS, 0)
    for core in cores:
        for name in CPU_FIELDS:
            totals[name] += core.get(name)
    return CounterSnapshot(TOTAL_KEY, totals)


def parse_proc_stat(text: str) -> CounterSet:
    """Parse the ``cpu`` rows of ``/proc/stat``.

    The aggregate ``cpu`` row is stored under ``"total"`` and ``cpuN`` rows
    under ``"N"``. Kernels that only expose per-core rows get a ``"total"``
    summed field by field, so callers can always rely on that key.
    """

    counters: CounterSet = {}
    has_total = False
    for line in text.splitlines():
        parts = line.split()
        if not parts:
            continue
        match = _CPU_ROW_RE.match(parts[0])
        if not match:
            continue
        device_id = match.group(1) or TOTAL_KEY
        if device_id == TOTAL_KEY:
            has_total = True
        values = [_to_int(value) for value in parts[1 : len(CPU_FIELDS) + 1]]
        values.extend([0] * (len(CPU_FIELDS) - len(values)))
        counters[device_id] = CounterSnapshot(device_id, dict(zip(CPU_FIELDS, values)))

    if not has_total:
        counters[TOTAL_KEY] = _synthesize_total(counters.values())
    return counters


def parse_diskstats(text: str) -> CounterSet:
    """Parse ``/proc/diskstats`` into sector counters per block device."""

    counters: CounterSet = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) <= _SECTORS_WRITTEN_COLUMN:
            continue
        name = parts[_DISK_NAME_COLUMN]
        counters[name] = CounterSnapshot(
            name,
            {
                "sectors_read": _to_int(parts[_SECTORS_READ_COLUMN]),
                "sectors_written": _to_int(parts[_SECTORS_WRITTEN_COLUMN]),
            },
        )
    return counters


def list_interfaces(root: str | Path) -> list[str]:
    """Names of the entries under the network-device root, sorted."""

    root = Path(root)
    try:
        names = sorted(entry.name for entry in root.iterdir())
    except OSError as exc:
        raise ResourceUnavailable(root, exc.strerror) from exc
    return names


def read_interface_counters(root: str | Path, names: Iterable[str]) -> CounterSet:
    """Read ``tx_bytes`` and ``rx_bytes`` for each named interface.

    Entries without a statistics directory are not interfaces and are
    skipped, as is an interface that vanished while being read. Any other
    read failure propagates.
    """

    root = Path(root)
    counters: CounterSet = {}
    for name in names:
        statistics = root / name / "statistics"
        if not statistics.is_dir():
            continue
        try:
            tx_bytes = _to_int(read_resource(statistics / "tx_bytes").strip())
            rx_bytes = _to_int(read_resource(statistics / "rx_bytes").strip())
        except ResourceUnavailable as exc:
            if isinstance(exc.__cause__, FileNotFoundError) and not statistics.exists():
                continue
            raise
        counters[name] = CounterSnapshot(name, {"tx_bytes": tx_bytes, "rx_bytes": rx_bytes})
    return counters
