"""Denylist filtering of virtual and pseudo devices."""

from __future__ import annotations

from hostprobe.models.counters import CounterSet, DeviceFilterPolicy


def is_included(device_id: str, policy: DeviceFilterPolicy) -> bool:
    """Return False when ``device_id`` contains any denylisted substring."""

    return not any(pattern in device_id for pattern in policy.patterns)


def filter_counters(counters: CounterSet, policy: DeviceFilterPolicy) -> CounterSet:
    return {
        device_id: snapshot
        for device_id, snapshot in counters.items()
        if is_included(device_id, policy)
    }
