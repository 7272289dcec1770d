"""One-shot host information reads."""

from __future__ import annotations

import getpass
import os
import platform
import re
import shutil
import subprocess
import time
from pathlib import Path

import psutil

from hostprobe.core.config import PATHS, ResourcePaths
from hostprobe.core.errors import ResourceUnavailable, UnsupportedPlatform
from hostprobe.models import DiskSpace, LoadAverage, MemoryInfo, SystemInfoSnapshot

from .architecture import get_arch

_MEGABYTE = 1024 * 1024

_OS_RELEASE_NAME_RE = re.compile(r'^NAME="?([^"\n]+)"?', re.MULTILINE)
_LSB_ID_RE = re.compile(r"DISTRIB_ID=(.+)")

_CGROUP_RUNTIMES = ("docker", "lxc", "containerd")

_VM_TYPES = {
    "VirtualBox": "virtualbox",
    "VMware": "vmware",
    "KVM": "kvm",
    "QEMU": "qemu",
    "Xen": "xen",
    "Parallels": "parallels",
    "Hyper-V": "hyperv",
}


def _is_linux() -> bool:
    return get_os() == "Linux"


def _read_optional(path: Path) -> str | None:
    if not path.exists():
        return None
    try:
        value = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    return value or None


def get_os() -> str:
    return platform.system()


def get_hostname() -> str:
    return platform.node()


def get_kernel_version() -> str:
    return platform.release()


def get_cpu_cores() -> int:
    """Logical processor count."""

    count = psutil.cpu_count(logical=True)
    if count is None:
        raise UnsupportedPlatform(get_os())
    return count


def get_memory_info() -> MemoryInfo:
    """Total, free and available memory in megabytes."""

    try:
        mem = psutil.virtual_memory()
    except (psutil.Error, OSError) as exc:
        raise ResourceUnavailable("virtual memory", str(exc)) from exc
    return MemoryInfo(
        total_mb=int(mem.total) // _MEGABYTE,
        free_mb=int(mem.free) // _MEGABYTE,
        available_mb=int(mem.available) // _MEGABYTE,
    )


def get_memory_total() -> int:
    return get_memory_info().total_mb


def get_memory_free() -> int:
    return get_memory_info().free_mb


def get_memory_available() -> int:
    return get_memory_info().available_mb


def get_disk_space(directory: str | Path = ".") -> DiskSpace:
    try:
        usage = psutil.disk_usage(str(directory))
    except OSError as exc:
        raise ResourceUnavailable(directory, exc.strerror) from exc
    return DiskSpace(
        directory=str(directory),
        total_mb=int(usage.total) // _MEGABYTE,
        free_mb=int(usage.free) // _MEGABYTE,
    )


def get_disk_total(directory: str | Path = ".") -> int:
    return get_disk_space(directory).total_mb


def get_disk_free(directory: str | Path = ".") -> int:
    return get_disk_space(directory).free_mb


def get_uptime() -> float:
    """Seconds since boot."""

    try:
        boot_time = psutil.boot_time()
    except (psutil.Error, OSError) as exc:
        raise ResourceUnavailable("boot time", str(exc)) from exc
    return max(0.0, time.time() - boot_time)


def get_load_average() -> LoadAverage:
    try:
        one, five, fifteen = os.getloadavg()
    except (OSError, AttributeError) as exc:
        raise UnsupportedPlatform(get_os()) from exc
    return LoadAverage(one=one, five=five, fifteen=fifteen)


def get_process_count() -> int:
    try:
        return len(psutil.pids())
    except (psutil.Error, OSError) as exc:
        raise ResourceUnavailable("process table", str(exc)) from exc


def get_current_user() -> str:
    """Name of the effective user."""

    if hasattr(os, "geteuid"):
        import pwd

        try:
            return pwd.getpwuid(os.geteuid()).pw_name
        except KeyError:
            return "unknown"
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def get_env(name: str, default: str | None = None) -> str | None:
    """Environment lookup where an empty value counts as unset."""

    return os.environ.get(name) or default


def get_linux_distribution(paths: ResourcePaths = PATHS) -> str | None:
    if not _is_linux():
        return None

    os_release = _read_optional(paths.os_release)
    if os_release:
        match = _OS_RELEASE_NAME_RE.search(os_release)
        if match:
            return match.group(1)

    lsb_release = _read_optional(paths.lsb_release)
    if lsb_release:
        match = _LSB_ID_RE.search(lsb_release)
        if match:
            return match.group(1).strip()

    return None


def get_container_type(paths: ResourcePaths = PATHS) -> str | None:
    """Container runtime the process runs under, if any."""

    if paths.docker_marker.exists():
        return "docker"
    if paths.podman_marker.exists():
        return "podman"

    cgroup = _read_optional(paths.init_cgroup)
    if cgroup:
        for runtime in _CGROUP_RUNTIMES:
            if runtime in cgroup:
                return runtime
    return None


def is_container(paths: ResourcePaths = PATHS) -> bool:
    return get_container_type(paths) is not None


def _systemd_detect_virt() -> str | None:
    binary = shutil.which("systemd-detect-virt")
    if binary is None:
        return None
    try:
        completed = subprocess.run(
            [binary],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    value = completed.stdout.strip()
    if not value or value == "none":
        return None
    return value


def get_virtualization_type(paths: ResourcePaths = PATHS) -> str | None:
    """Hypervisor name, from systemd first and DMI product name second."""

    if not _is_linux():
        return None

    detected = _systemd_detect_virt()
    if detected:
        return detected

    product = _read_optional(paths.dmi_root / "product_name")
    if product:
        for indicator, label in _VM_TYPES.items():
            if indicator in product:
                return label
    return None


def is_virtualized(paths: ResourcePaths = PATHS) -> bool:
    return get_virtualization_type(paths) is not None


def collect_system_info(paths: ResourcePaths = PATHS) -> SystemInfoSnapshot:
    timestamp = time.time()
    try:
        uptime_seconds: float | None = get_uptime()
    except ResourceUnavailable:
        uptime_seconds = None

    return SystemInfoSnapshot(
        timestamp=timestamp,
        os_name=get_os(),
        hostname=get_hostname(),
        architecture=get_arch(),
        kernel_version=get_kernel_version(),
        uptime_seconds=uptime_seconds,
        container=get_container_type(paths),
        virtualization=get_virtualization_type(paths),
        distribution=get_linux_distribution(paths),
        user=get_current_user(),
        is_root=is_root(),
    )
