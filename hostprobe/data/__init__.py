"""Data provider package."""

from .architecture import (
    Architecture,
    get_arch,
    get_arch_enum,
    is_arch,
    is_arm64,
    is_armv7,
    is_armv8,
    is_ppc,
    is_x86,
)
from .sampler import (
    LinuxMetricSource,
    MetricSource,
    Sampler,
    get_cpu_usage,
    get_io_usage,
    get_network_usage,
    select_metric_source,
)
from .system import (
    collect_system_info,
    get_container_type,
    get_cpu_cores,
    get_current_user,
    get_disk_free,
    get_disk_space,
    get_disk_total,
    get_env,
    get_hostname,
    get_kernel_version,
    get_linux_distribution,
    get_load_average,
    get_memory_available,
    get_memory_free,
    get_memory_info,
    get_memory_total,
    get_os,
    get_process_count,
    get_uptime,
    get_virtualization_type,
    is_container,
    is_root,
    is_virtualized,
)

__all__ = [
    "Architecture",
    "LinuxMetricSource",
    "MetricSource",
    "Sampler",
    "collect_system_info",
    "get_arch",
    "get_arch_enum",
    "get_container_type",
    "get_cpu_cores",
    "get_cpu_usage",
    "get_current_user",
    "get_disk_free",
    "get_disk_space",
    "get_disk_total",
    "get_env",
    "get_hostname",
    "get_io_usage",
    "get_kernel_version",
    "get_linux_distribution",
    "get_load_average",
    "get_memory_available",
    "get_memory_free",
    "get_memory_info",
    "get_memory_total",
    "get_network_usage",
    "get_os",
    "get_process_count",
    "get_uptime",
    "get_virtualization_type",
    "is_arch",
    "is_arm64",
    "is_armv7",
    "is_armv8",
    "is_container",
    "is_ppc",
    "is_root",
    "is_virtualized",
    "is_x86",
    "select_metric_source",
]
