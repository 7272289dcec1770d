"""Dataclasses for raw counter readings and the deltas derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Mapping, TypeVar

T = TypeVar("T")

TOTAL_KEY = "total"


@dataclass(frozen=True, slots=True)
class CounterSnapshot:
    """Cumulative counters of one device at one point in time."""

    device_id: str
    fields: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, name: str) -> int:
        return self.fields[name]

    def get(self, name: str, default: int = 0) -> int:
        return self.fields.get(name, default)


CounterSet = dict[str, CounterSnapshot]


@dataclass(frozen=True, slots=True)
class DeviceFilterPolicy:
    """Substring denylist; a device containing any pattern is excluded."""

    name: str
    patterns: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DiskThroughput:
    read: float = 0.0
    write: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"read": self.read, "write": self.write}


@dataclass(frozen=True, slots=True)
class NetworkThroughput:
    download: float = 0.0
    upload: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"download": self.download, "upload": self.upload}


@dataclass
class DeltaResult(Generic[T]):
    """Per-device metrics of a two-point sample plus the synthesized total.

    ``total`` is always set, even when no device survived filtering.
    """

    total: T
    per_device: dict[str, T] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        """Flatten into ``{device: value, ..., "total": value}``."""

        def _plain(value: object) -> object:
            return value.to_dict() if hasattr(value, "to_dict") else value

        result: dict[str, object] = {
            device: _plain(value) for device, value in self.per_device.items()
        }
        result[TOTAL_KEY] = _plain(self.total)
        return result
