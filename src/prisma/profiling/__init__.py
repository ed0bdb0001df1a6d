"""
Prisma Profiling Package

Lightweight timing markers for the render pipeline:

- profile: decorator recording each call of a function
- perf_marker: context manager recording a code block

Quick usage:
    from prisma.profiling import profile, perf_marker, enable_profiling

    enable_profiling(True)

    @profile
    def my_function():
        with perf_marker("my_section"):
            ...
"""

from .profile import (
    enable_profiling,
    is_profiling_enabled,
    reset_profile,
    get_profile_results,
    perf_marker,
    profile,
    _PROFILING_COMPILED_OUT,
)

__all__ = [
    'enable_profiling',
    'is_profiling_enabled',
    'reset_profile',
    'get_profile_results',
    'perf_marker',
    'profile',
]
