"""Shared fixtures: a throwaway procfs/sysfs tree under ``tmp_path``."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from hostprobe.core.config import ResourcePaths


class FakeHost:
    """Writes counter files the way the kernel lays them out."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.paths = ResourcePaths(
            proc_root=root / "proc",
            sys_net_root=root / "sys" / "class" / "net",
            dmi_root=root / "sys" / "class" / "dmi" / "id",
            os_release=root / "etc" / "os-release",
            lsb_release=root / "etc" / "lsb-release",
            docker_marker=root / ".dockerenv",
            podman_marker=root / "run" / ".containerenv",
        )
        self.paths.proc_root.mkdir(parents=True)
        self.paths.sys_net_root.mkdir(parents=True)

    def write_proc(self, name: str, content: str) -> Path:
        path = self.paths.proc_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_stat(self, rows: dict[str, list[int]]) -> None:
        lines = [f"{name} " + " ".join(str(value) for value in values) for name, values in rows.items()]
        lines.append("intr 12345 0 0")
        lines.append("ctxt 67890")
        self.write_proc("stat", "\n".join(lines) + "\n")

    def write_diskstats(self, devices: dict[str, tuple[int, int]]) -> None:
        lines = []
        for index, (name, (sectors_read, sectors_written)) in enumerate(devices.items()):
            lines.append(
                f"   8       {index} {name} 100 5 {sectors_read} 40 200 7 {sectors_written} 90 0 120 130"
            )
        self.write_proc("diskstats", "\n".join(lines) + "\n")

    def write_interface(self, name: str, rx_bytes: int, tx_bytes: int) -> None:
        statistics = self.paths.sys_net_root / name / "statistics"
        statistics.mkdir(parents=True, exist_ok=True)
        (statistics / "rx_bytes").write_text(f"{rx_bytes}\n", encoding="utf-8")
        (statistics / "tx_bytes").write_text(f"{tx_bytes}\n", encoding="utf-8")


class RecordingSleep:
    """Stand-in for ``time.sleep`` that runs a hook between the two reads."""

    def __init__(self, between: Callable[[], None] | None = None) -> None:
        self.calls: list[float] = []
        self._between = between

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self._between is not None:
            self._between()


@pytest.fixture
def fake_host(tmp_path: Path) -> FakeHost:
    return FakeHost(tmp_path)


@pytest.fixture
def make_sleep() -> type[RecordingSleep]:
    return RecordingSleep
