"""Core configuration and errors for hostprobe."""

from __future__ import annotations

from .config import DISK_DENYLIST, NETWORK_DENYLIST, PATHS, SAMPLING, ResourcePaths, SamplingConfig
from .errors import ProbeError, ResourceUnavailable, UnknownArchitecture, UnsupportedPlatform

__all__ = [
    "DISK_DENYLIST",
    "NETWORK_DENYLIST",
    "PATHS",
    "SAMPLING",
    "ProbeError",
    "ResourcePaths",
    "ResourceUnavailable",
    "SamplingConfig",
    "UnknownArchitecture",
    "UnsupportedPlatform",
]
