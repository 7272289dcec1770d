"""Exceptions raised by the host probe."""

from __future__ import annotations

from pathlib import Path


class ProbeError(Exception):
    """Base class for every error raised by hostprobe."""


class ResourceUnavailable(ProbeError, OSError):
    """A counter or information resource could not be read, or was empty."""

    def __init__(self, path: str | Path, reason: str | None = None) -> None:
        self.path = str(path)
        self.reason = reason
        message = f"Unable to read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedPlatform(ProbeError):
    """No strategy exists for the requested metric on this operating system."""

    def __init__(self, platform_name: str) -> None:
        self.platform_name = platform_name
        super().__init__(f"{platform_name} not supported.")


class UnknownArchitecture(ProbeError, ValueError):
    """An architecture string matched none of the known families."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"'{raw}' architecture not recognised.")
