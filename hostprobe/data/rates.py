"""Pure conversions from two counter snapshots to usage figures."""

from __future__ import annotations

from typing import Iterable

from hostprobe.core.config import SAMPLING, SamplingConfig
from hostprobe.models.counters import CounterSnapshot, DiskThroughput, NetworkThroughput

_IDLE_FIELDS = ("idle", "iowait")
_NON_IDLE_FIELDS = ("user", "nice", "system", "irq", "softirq", "steal")


def _cpu_split(snapshot: CounterSnapshot) -> tuple[int, int]:
    idle = sum(snapshot.get(name) for name in _IDLE_FIELDS)
    non_idle = sum(snapshot.get(name) for name in _NON_IDLE_FIELDS)
    return idle, non_idle


def cpu_usage_percent(start: CounterSnapshot, end: CounterSnapshot) -> float:
    """Busy share of the jiffies elapsed between ``start`` and ``end``.

    Returns ``0.0`` when no jiffies elapsed at all.
    """

    prev_idle, prev_non_idle = _cpu_split(start)
    idle, non_idle = _cpu_split(end)

    total_diff = (idle + non_idle) - (prev_idle + prev_non_idle)
    idle_diff = idle - prev_idle
    if total_diff == 0:
        return 0.0
    return (total_diff - idle_diff) / total_diff * 100


def disk_throughput(
    start: CounterSnapshot,
    end: CounterSnapshot,
    config: SamplingConfig = SAMPLING,
) -> DiskThroughput:
    """Megabytes read and written between two diskstats snapshots."""

    def _megabytes(field: str) -> float:
        return (end.get(field) - start.get(field)) * config.sector_bytes / config.megabyte

    return DiskThroughput(read=_megabytes("sectors_read"), write=_megabytes("sectors_written"))


def network_throughput(
    start: CounterSnapshot,
    end: CounterSnapshot,
    config: SamplingConfig = SAMPLING,
) -> NetworkThroughput:
    """Megabytes received and sent, rounded per interface."""

    def _megabytes(field: str) -> float:
        return round((end.get(field) - start.get(field)) / config.megabyte, config.network_precision)

    return NetworkThroughput(download=_megabytes("rx_bytes"), upload=_megabytes("tx_bytes"))


def sum_disk(values: Iterable[DiskThroughput]) -> DiskThroughput:
    read = 0.0
    write = 0.0
    for value in values:
        read += value.read
        write += value.write
    return DiskThroughput(read=read, write=write)


def sum_network(values: Iterable[NetworkThroughput]) -> NetworkThroughput:
    download = 0.0
    upload = 0.0
    for value in values:
        download += value.download
        upload += value.upload
    return NetworkThroughput(download=download, upload=upload)
