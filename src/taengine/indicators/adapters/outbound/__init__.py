"""
Outbound adapters for the indicators package.
"""

from .compute_numba import (
    ComputeNumbaWarmupRunner,
    apply_numba_runtime_config,
    ensure_numba_cache_dir_writable,
)

__all__ = [
    "ComputeNumbaWarmupRunner",
    "apply_numba_runtime_config",
    "ensure_numba_cache_dir_writable",
]
