"""
Shared compute infrastructure for mcmle.

This module provides generator handles, hardware detection and timing
utilities that are shared across all domain-specific backends.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/.

Submodules:
    rng: Generator construction and independent stream spawning
    device: Hardware detection and device selection
    timing: Execution timing utilities
"""

from mcmle.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from mcmle.core.compute.rng import (
    SeedLike,
    make_rng,
    spawn_rngs,
    spawn_grid_rngs,
)
from mcmle.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Generators
    "SeedLike",
    "make_rng",
    "spawn_rngs",
    "spawn_grid_rngs",
    # Timing
    "Timer",
]
