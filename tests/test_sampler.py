"""Tests for the two-point samplers and platform dispatch."""

from __future__ import annotations

import pytest

from hostprobe.core.errors import ResourceUnavailable, UnsupportedPlatform
from hostprobe.data import sampler as sampler_module
from hostprobe.data.sampler import LinuxMetricSource, Sampler, select_metric_source
from hostprobe.models import DeviceFilterPolicy, DiskThroughput, NetworkThroughput

IDLE_ROW = [100, 0, 50, 800, 10, 0, 0, 0, 0]


def _sampler(fake_host, sleep, **kwargs):
    return Sampler(LinuxMetricSource(fake_host.paths), sleep=sleep, **kwargs)


def test_select_metric_source_for_linux(fake_host):
    source = select_metric_source("Linux", fake_host.paths)
    assert isinstance(source, LinuxMetricSource)


@pytest.mark.parametrize("os_name", ["Darwin", "Windows", "FreeBSD"])
def test_select_metric_source_unsupported(os_name):
    with pytest.raises(UnsupportedPlatform, match=f"{os_name} not supported."):
        select_metric_source(os_name)


def test_cpu_usage_over_window(fake_host, make_sleep):
    fake_host.write_stat({"cpu": IDLE_ROW, "cpu0": IDLE_ROW})

    def advance():
        busier = [value + 10 for value in IDLE_ROW]
        busier[3] = IDLE_ROW[3] + 5
        fake_host.write_stat({"cpu": busier, "cpu0": IDLE_ROW})

    sleep = make_sleep(advance)
    result = _sampler(fake_host, sleep).sample_cpu(3)

    assert sleep.calls == [3]
    assert result.total == pytest.approx(80.0, abs=1e-9)
    assert result.per_device == {"0": 0.0}
    assert result.as_dict()["total"] == result.total


def test_cpu_total_is_synthesized_when_aggregate_row_missing(fake_host, make_sleep):
    fake_host.write_stat({"cpu0": [0, 0, 0, 100, 0, 0, 0, 0, 0], "cpu1": [0, 0, 0, 100, 0, 0, 0, 0, 0]})

    def advance():
        # core 0 fully busy, core 1 fully idle
        fake_host.write_stat({"cpu0": [100, 0, 0, 100, 0, 0, 0, 0, 0], "cpu1": [0, 0, 0, 200, 0, 0, 0, 0, 0]})

    result = _sampler(fake_host, make_sleep(advance)).sample_cpu(1)

    assert result.per_device == {"0": 100.0, "1": 0.0}
    assert result.total == pytest.approx(50.0)


def test_cpu_usage_defaults_to_one_second(fake_host, make_sleep):
    fake_host.write_stat({"cpu": IDLE_ROW})
    sleep = make_sleep()
    assert _sampler(fake_host, sleep).cpu_usage() == 0.0
    assert sleep.calls == [1]


def test_negative_duration_rejected(fake_host, make_sleep):
    fake_host.write_stat({"cpu": IDLE_ROW})
    with pytest.raises(ValueError):
        _sampler(fake_host, make_sleep()).sample_cpu(-1)


def test_missing_stat_is_fatal(fake_host, make_sleep):
    sleep = make_sleep()
    with pytest.raises(ResourceUnavailable):
        _sampler(fake_host, sleep).cpu_usage(1)
    assert sleep.calls == []


def test_io_usage_filters_and_totals(fake_host, make_sleep):
    fake_host.write_diskstats({"sda": (0, 0), "nvme0n1": (100, 100), "loop0": (0, 0), "ram0": (0, 0)})

    def advance():
        fake_host.write_diskstats(
            {"sda": (2048, 1024), "nvme0n1": (100 + 4096, 100), "loop0": (8192, 8192), "ram0": (2048, 0)}
        )

    result = _sampler(fake_host, make_sleep(advance)).sample_disks(1)

    assert set(result.per_device) == {"sda", "nvme0n1"}
    assert result.per_device["sda"] == DiskThroughput(read=1.0, write=0.5)
    assert result.per_device["nvme0n1"] == DiskThroughput(read=2.0, write=0.0)
    assert result.total == DiskThroughput(read=3.0, write=0.5)


def test_io_usage_flattened_shape(fake_host, make_sleep):
    fake_host.write_diskstats({"sda": (0, 0)})

    def advance():
        fake_host.write_diskstats({"sda": (2048, 0)})

    usage = _sampler(fake_host, make_sleep(advance)).io_usage(1)
    assert usage == {
        "sda": {"read": 1.0, "write": 0.0},
        "total": {"read": 1.0, "write": 0.0},
    }


def test_device_missing_from_second_read_is_dropped(fake_host, make_sleep):
    fake_host.write_diskstats({"sda": (0, 0), "sdb": (0, 0)})

    def advance():
        fake_host.write_diskstats({"sda": (2048, 0)})

    result = _sampler(fake_host, make_sleep(advance)).sample_disks(1)

    assert list(result.per_device) == ["sda"]
    assert result.total == DiskThroughput(read=1.0, write=0.0)


def test_device_appearing_in_second_read_is_dropped(fake_host, make_sleep):
    fake_host.write_diskstats({"sda": (0, 0)})

    def advance():
        fake_host.write_diskstats({"sda": (0, 0), "sdc": (2048, 2048)})

    result = _sampler(fake_host, make_sleep(advance)).sample_disks(1)

    assert list(result.per_device) == ["sda"]
    assert result.total == DiskThroughput()


def test_zero_duration_with_static_counters_is_all_zero(fake_host, make_sleep):
    fake_host.write_stat({"cpu": IDLE_ROW, "cpu0": IDLE_ROW})
    fake_host.write_diskstats({"sda": (512, 512)})
    fake_host.write_interface("eth0", rx_bytes=4096, tx_bytes=4096)
    sampler = _sampler(fake_host, make_sleep())

    cpu = sampler.sample_cpu(0)
    disks = sampler.sample_disks(0)
    network = sampler.sample_network(0)

    assert cpu.total == 0.0
    assert cpu.per_device == {"0": 0.0}
    assert disks.per_device == {"sda": DiskThroughput()}
    assert disks.total == DiskThroughput()
    assert network.per_device == {"eth0": NetworkThroughput()}
    assert network.total == NetworkThroughput()


def test_network_usage_per_interface_rounding_and_total(fake_host, make_sleep):
    fake_host.write_interface("eth0", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("wlan0", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("lo", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("docker0", rx_bytes=0, tx_bytes=0)
    (fake_host.paths.sys_net_root / "bonding_masters").write_text("\n", encoding="utf-8")

    def advance():
        fake_host.write_interface("eth0", rx_bytes=2 * 1_048_576, tx_bytes=1_048_576 // 2)
        fake_host.write_interface("wlan0", rx_bytes=1_048_576 // 4, tx_bytes=0)
        fake_host.write_interface("lo", rx_bytes=50 * 1_048_576, tx_bytes=50 * 1_048_576)
        fake_host.write_interface("docker0", rx_bytes=9 * 1_048_576, tx_bytes=0)

    usage = _sampler(fake_host, make_sleep(advance)).network_usage(1)

    assert usage == {
        "eth0": {"download": 2.0, "upload": 0.5},
        "wlan0": {"download": 0.25, "upload": 0.0},
        "total": {"download": 2.25, "upload": 0.5},
    }


def test_network_total_sums_rounded_values(fake_host, make_sleep):
    # 0.004 MB rounds to 0.0 per interface, so the total stays 0.0
    fake_host.write_interface("eth0", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("eth1", rx_bytes=0, tx_bytes=0)

    def advance():
        fake_host.write_interface("eth0", rx_bytes=4200, tx_bytes=0)
        fake_host.write_interface("eth1", rx_bytes=4200, tx_bytes=0)

    result = _sampler(fake_host, make_sleep(advance)).sample_network(1)

    assert result.per_device["eth0"].download == 0.0
    assert result.total.download == 0.0


def test_injected_policies(fake_host, make_sleep):
    fake_host.write_diskstats({"sda": (0, 0), "loop0": (0, 0)})
    fake_host.write_interface("eth0", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("lo", rx_bytes=0, tx_bytes=0)
    sampler = _sampler(
        fake_host,
        make_sleep(),
        disk_policy=DeviceFilterPolicy("disks", ("sd",)),
        network_policy=DeviceFilterPolicy("nics", ("eth",)),
    )

    assert list(sampler.sample_disks(0).per_device) == ["loop0"]
    assert list(sampler.sample_network(0).per_device) == ["lo"]


def test_empty_network_root_still_has_total(fake_host, make_sleep):
    result = _sampler(fake_host, make_sleep()).sample_network(0)
    assert result.per_device == {}
    assert result.total == NetworkThroughput()


@pytest.mark.parametrize("duration", [0.5, 1.0, "1", True])
def test_non_integer_duration_rejected(fake_host, make_sleep, duration):
    fake_host.write_stat({"cpu": IDLE_ROW})
    sleep = make_sleep()
    with pytest.raises(TypeError):
        _sampler(fake_host, sleep).sample_cpu(duration)
    assert sleep.calls == []


def test_module_entry_points_sample_current_host(fake_host, make_sleep, monkeypatch):
    fake_host.write_stat({"cpu": IDLE_ROW, "cpu0": IDLE_ROW})
    fake_host.write_diskstats({"sda": (0, 0), "loop0": (0, 0)})
    fake_host.write_interface("eth0", rx_bytes=0, tx_bytes=0)
    fake_host.write_interface("lo", rx_bytes=0, tx_bytes=0)

    steps = []

    def advance():
        steps.append(None)
        n = len(steps)
        fake_host.write_diskstats({"sda": (2048 * n, 0), "loop0": (2048 * n, 0)})
        fake_host.write_interface("eth0", rx_bytes=1_048_576 * n, tx_bytes=0)

    sleep = make_sleep(advance)
    monkeypatch.setattr(
        sampler_module, "select_metric_source", lambda: LinuxMetricSource(fake_host.paths)
    )
    monkeypatch.setattr(sampler_module.time, "sleep", sleep)

    assert sampler_module.get_cpu_usage(2) == 0.0
    assert sampler_module.get_io_usage(3) == {
        "sda": {"read": 1.0, "write": 0.0},
        "total": {"read": 1.0, "write": 0.0},
    }
    assert sampler_module.get_network_usage() == {
        "eth0": {"download": 1.0, "upload": 0.0},
        "total": {"download": 1.0, "upload": 0.0},
    }
    assert sleep.calls == [2, 3, 1]


def test_module_entry_points_unsupported_platform(monkeypatch):
    monkeypatch.setattr(sampler_module.platform, "system", lambda: "Darwin")
    for entry_point in (
        sampler_module.get_cpu_usage,
        sampler_module.get_io_usage,
        sampler_module.get_network_usage,
    ):
        with pytest.raises(UnsupportedPlatform, match="Darwin not supported."):
            entry_point(0)
