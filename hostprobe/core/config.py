"""Global configuration values for the host probe."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hostprobe.models.counters import DeviceFilterPolicy


@dataclass(frozen=True)
class ResourcePaths:
    """Locations of the pseudo-files and markers the probe reads."""

    proc_root: Path = Path("/proc")
    sys_net_root: Path = Path("/sys/class/net")
    dmi_root: Path = Path("/sys/class/dmi/id")
    os_release: Path = Path("/etc/os-release")
    lsb_release: Path = Path("/etc/lsb-release")
    docker_marker: Path = Path("/.dockerenv")
    podman_marker: Path = Path("/run/.containerenv")

    @property
    def proc_stat(self) -> Path:
        return self.proc_root / "stat"

    @property
    def diskstats(self) -> Path:
        return self.proc_root / "diskstats"

    @property
    def init_cgroup(self) -> Path:
        return self.proc_root / "1" / "cgroup"


@dataclass(frozen=True)
class SamplingConfig:
    """Units and defaults for the two-point samplers."""

    default_duration: int = 1  # seconds
    sector_bytes: int = 512
    megabyte: int = 1_048_576
    network_precision: int = 2  # decimal places per interface


PATHS = ResourcePaths()
SAMPLING = SamplingConfig()

DISK_DENYLIST = DeviceFilterPolicy("disk", ("loop", "ram"))
NETWORK_DENYLIST = DeviceFilterPolicy(
    "network",
    ("veth", "docker", "lo", "tun", "vboxnet", ".", "bonding_masters"),
)
