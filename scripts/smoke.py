"""Smoke test: sample every metric family on the current host."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hostprobe.data import (  # noqa: E402
    Sampler,
    collect_system_info,
    get_load_average,
    get_memory_info,
    select_metric_source,
)


def run_smoke(duration: int = 1) -> dict[str, object]:
    sampler = Sampler(select_metric_source())
    report = {
        "system": asdict(collect_system_info()),
        "memory": asdict(get_memory_info()),
        "load": get_load_average().as_dict(),
        "cpu": sampler.sample_cpu(duration).as_dict(),
        "io": sampler.io_usage(duration),
        "network": sampler.network_usage(duration),
    }
    assert "total" in report["cpu"], "CPU sample without total"
    assert "total" in report["io"], "IO sample without total"
    assert "total" in report["network"], "Network sample without total"
    return report


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print(json.dumps(run_smoke(), indent=2))
    print("SMOKE_OK")
