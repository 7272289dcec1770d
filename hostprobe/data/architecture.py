"""CPU architecture families and the host predicates built on them."""

from __future__ import annotations

import platform
import re
from enum import Enum

from hostprobe.core.errors import UnknownArchitecture


class Architecture(Enum):
    """Known architecture families, tried in declaration order."""

    X86 = "x86"
    PPC = "ppc"
    ARM64 = "arm64"
    ARMV7 = "armv7"
    ARMV8 = "armv8"

    @property
    def pattern(self) -> re.Pattern[str]:
        return _PATTERNS[self]

    def matches(self, raw: str) -> bool:
        return self.pattern.search(raw) is not None

    @classmethod
    def classify(cls, raw: str) -> "Architecture":
        """First family, in declaration order, whose pattern matches ``raw``."""

        for member in cls:
            if member.matches(raw):
                return member
        raise UnknownArchitecture(raw)

    @classmethod
    def from_name(cls, name: str) -> "Architecture":
        try:
            return cls(name)
        except ValueError as exc:
            raise UnknownArchitecture(name) from exc


_PATTERNS = {
    Architecture.X86: re.compile(r"x86*|i386|i686"),
    Architecture.PPC: re.compile(r"ppc*"),
    Architecture.ARM64: re.compile(r"arm64|aarch64"),
    Architecture.ARMV7: re.compile(r"armv7"),
    Architecture.ARMV8: re.compile(r"armv8"),
}


def get_arch() -> str:
    return platform.machine()


def get_arch_enum() -> Architecture:
    return Architecture.classify(get_arch())


def is_arch(arch: Architecture | str) -> bool:
    """Whether the host matches ``arch``, given as a member or its value."""

    if isinstance(arch, str):
        arch = Architecture.from_name(arch)
    return arch.matches(get_arch())


def is_x86() -> bool:
    return Architecture.X86.matches(get_arch())


def is_ppc() -> bool:
    return Architecture.PPC.matches(get_arch())


def is_arm64() -> bool:
    return Architecture.ARM64.matches(get_arch())


def is_armv7() -> bool:
    return Architecture.ARMV7.matches(get_arch())


def is_armv8() -> bool:
    return Architecture.ARMV8.matches(get_arch())
