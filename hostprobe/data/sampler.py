"""Two-point samplers for CPU, disk and network usage.

Each sample reads a counter set, blocks for ``duration`` seconds, reads the
same set again and turns the difference into per-device figures plus a
``total``. Nothing is kept between calls.
"""

from __future__ import annotations

import logging
import platform
import time
from abc import ABC, abstractmethod
from typing import Callable, TypeVar

from hostprobe.core.config import (
    DISK_DENYLIST,
    NETWORK_DENYLIST,
    PATHS,
    SAMPLING,
    ResourcePaths,
    SamplingConfig,
)
from hostprobe.core.errors import UnsupportedPlatform
from hostprobe.models.counters import (
    TOTAL_KEY,
    CounterSet,
    CounterSnapshot,
    DeltaResult,
    DeviceFilterPolicy,
    DiskThroughput,
    NetworkThroughput,
)

from .counters import (
    list_interfaces,
    parse_diskstats,
    parse_proc_stat,
    read_interface_counters,
    read_resource,
)
from .filters import filter_counters, is_included
from .rates import cpu_usage_percent, disk_throughput, network_throughput, sum_disk, sum_network

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetricSource(ABC):
    """Platform strategy producing raw counter sets."""

    @abstractmethod
    def read_cpu(self) -> CounterSet:
        """Jiffy counters per core, always including ``"total"``."""

    @abstractmethod
    def read_disks(self) -> CounterSet:
        """Sector counters per block device."""

    @abstractmethod
    def read_interfaces(self, policy: DeviceFilterPolicy) -> CounterSet:
        """Byte counters for the interfaces ``policy`` lets through."""


class LinuxMetricSource(MetricSource):
    def __init__(self, paths: ResourcePaths = PATHS) -> None:
        self._paths = paths

    def read_cpu(self) -> CounterSet:
        return parse_proc_stat(read_resource(self._paths.proc_stat))

    def read_disks(self) -> CounterSet:
        return parse_diskstats(read_resource(self._paths.diskstats))

    def read_interfaces(self, policy: DeviceFilterPolicy) -> CounterSet:
        # Filter before reading: the root also holds plain files such as
        # bonding_masters that have no statistics directory.
        root = self._paths.sys_net_root
        names = [name for name in list_interfaces(root) if is_included(name, policy)]
        return read_interface_counters(root, names)


_SOURCES: dict[str, Callable[[ResourcePaths], MetricSource]] = {
    "Linux": LinuxMetricSource,
}


def select_metric_source(
    os_name: str | None = None,
    paths: ResourcePaths = PATHS,
) -> MetricSource:
    """Pick the counter strategy for ``os_name`` (the running OS by default)."""

    os_name = os_name or platform.system()
    factory = _SOURCES.get(os_name)
    if factory is None:
        raise UnsupportedPlatform(os_name)
    logger.debug("Using %s metric source", os_name)
    return factory(paths)


def _pairwise(
    start: CounterSet,
    end: CounterSet,
    compute: Callable[[CounterSnapshot, CounterSnapshot], T],
) -> dict[str, T]:
    # Devices seen in only one of the two reads are dropped.
    return {
        device_id: compute(snapshot, end[device_id])
        for device_id, snapshot in start.items()
        if device_id in end
    }


class Sampler:
    """Blocking two-point sampler over a :class:`MetricSource`."""

    def __init__(
        self,
        source: MetricSource,
        *,
        disk_policy: DeviceFilterPolicy = DISK_DENYLIST,
        network_policy: DeviceFilterPolicy = NETWORK_DENYLIST,
        config: SamplingConfig = SAMPLING,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._source = source
        self._disk_policy = disk_policy
        self._network_policy = network_policy
        self._config = config
        self._sleep = sleep or time.sleep

    def _window(self, duration: int | None, read: Callable[[], CounterSet]) -> tuple[CounterSet, CounterSet]:
        if duration is None:
            duration = self._config.default_duration
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise TypeError(f"duration must be whole seconds, got {duration!r}")
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        start = read()
        logger.debug("Sampling window of %ss opened", duration)
        self._sleep(duration)
        end = read()
        return start, end

    def sample_cpu(self, duration: int | None = None) -> DeltaResult[float]:
        start, end = self._window(duration, self._source.read_cpu)
        start_total = start.pop(TOTAL_KEY)
        end_total = end.pop(TOTAL_KEY)
        return DeltaResult(
            total=cpu_usage_percent(start_total, end_total),
            per_device=_pairwise(start, end, cpu_usage_percent),
        )

    def sample_disks(self, duration: int | None = None) -> DeltaResult[DiskThroughput]:
        def _read() -> CounterSet:
            return filter_counters(self._source.read_disks(), self._disk_policy)

        start, end = self._window(duration, _read)
        per_device = _pairwise(
            start, end, lambda a, b: disk_throughput(a, b, self._config)
        )
        return DeltaResult(total=sum_disk(per_device.values()), per_device=per_device)

    def sample_network(self, duration: int | None = None) -> DeltaResult[NetworkThroughput]:
        def _read() -> CounterSet:
            return filter_counters(
                self._source.read_interfaces(self._network_policy), self._network_policy
            )

        start, end = self._window(duration, _read)
        per_device = _pairwise(
            start, end, lambda a, b: network_throughput(a, b, self._config)
        )
        return DeltaResult(total=sum_network(per_device.values()), per_device=per_device)

    def cpu_usage(self, duration: int | None = None) -> float:
        return self.sample_cpu(duration).total

    def io_usage(self, duration: int | None = None) -> dict[str, object]:
        return self.sample_disks(duration).as_dict()

    def network_usage(self, duration: int | None = None) -> dict[str, object]:
        return self.sample_network(duration).as_dict()


def _default_sampler() -> Sampler:
    return Sampler(select_metric_source())


def get_cpu_usage(duration: int = SAMPLING.default_duration) -> float:
    return _default_sampler().cpu_usage(duration)


def get_io_usage(duration: int = SAMPLING.default_duration) -> dict[str, object]:
    return _default_sampler().io_usage(duration)


def get_network_usage(duration: int = SAMPLING.default_duration) -> dict[str, object]:
    return _default_sampler().network_usage(duration)
