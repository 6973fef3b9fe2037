"""
ratsweep Profiling Package

Lightweight profiling markers for the sweep (@profile decorator,
perf_marker context manager).

Quick usage:
    from ratsweep.profiling import profile, perf_marker, enable_profiling

    enable_profiling(True)

    @profile
    def my_function():
        with perf_marker("my_section"):
            ...

    print(get_profile_results())
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
    '_PROFILING_COMPILED_OUT',
]
