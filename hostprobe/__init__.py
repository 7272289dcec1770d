"""Host system-information probe."""

from __future__ import annotations

__all__ = [
    "core",
    "data",
    "models",
    "Architecture",
    "Sampler",
    "ProbeError",
    "ResourceUnavailable",
    "UnknownArchitecture",
    "UnsupportedPlatform",
    "collect_system_info",
    "get_cpu_usage",
    "get_io_usage",
    "get_network_usage",
]

from .core.errors import (  # noqa: E402
    ProbeError,
    ResourceUnavailable,
    UnknownArchitecture,
    UnsupportedPlatform,
)
from .data import (  # noqa: E402
    Architecture,
    Sampler,
    collect_system_info,
    get_cpu_usage,
    get_io_usage,
    get_network_usage,
)
