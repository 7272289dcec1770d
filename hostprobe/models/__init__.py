"""Models exported by hostprobe."""

from .counters import (
    TOTAL_KEY,
    CounterSet,
    CounterSnapshot,
    DeltaResult,
    DeviceFilterPolicy,
    DiskThroughput,
    NetworkThroughput,
)
from .system_info import DiskSpace, LoadAverage, MemoryInfo, SystemInfoSnapshot

__all__ = [
    "TOTAL_KEY",
    "CounterSet",
    "CounterSnapshot",
    "DeltaResult",
    "DeviceFilterPolicy",
    "DiskSpace",
    "DiskThroughput",
    "LoadAverage",
    "MemoryInfo",
    "NetworkThroughput",
    "SystemInfoSnapshot",
]
