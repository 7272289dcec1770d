"""Dataclasses for one-shot host information reads."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MemoryInfo:
    total_mb: int
    free_mb: int
    available_mb: int


@dataclass(slots=True)
class DiskSpace:
    directory: str
    total_mb: int
    free_mb: int


@dataclass(slots=True)
class LoadAverage:
    one: float
    five: float
    fifteen: float

    def as_dict(self) -> dict[str, float]:
        return {"1min": self.one, "5min": self.five, "15min": self.fifteen}


@dataclass(slots=True)
class SystemInfoSnapshot:
    timestamp: float
    os_name: str
    hostname: str
    architecture: str
    kernel_version: str
    uptime_seconds: float | None
    container: str | None
    virtualization: str | None
    distribution: str | None
    user: str
    is_root: bool
