"""
Timing markers for the sweep.

Two instruments feed one recorder:

    @profile / @profile("name")     times every call of a function
    with perf_marker("name"): ...   times a block

Markers nest. Each finished marker folds its elapsed time into per-name
statistics and counts the marker that was open around it as its parent, so
get_profile_results() can show where the time of the event loop went:

    {'sweep_handle': {'count': 41, 'total_ms': 3.2, 'avg_ms': 0.078,
                      'min_ms': 0.02, 'max_ms': 0.4,
                      'parents': {'sweep_loop': 41}}}

Nothing is recorded until enable_profiling(True). Setting
RATSWEEP_NO_PROFILING=1, or running under python -O, removes the
instrumentation entirely: decorators return the function unchanged and
perf_marker hands back a shared no-op object. Both are read at import time.
"""

import os
import time
import functools
from typing import Dict, Any, Optional, Callable, Union, List

# =============================================================================
# Configuration
# =============================================================================

_PROFILING_COMPILED_OUT = (
    os.environ.get('RATSWEEP_NO_PROFILING', '').lower() in ('1', 'true', 'yes')
    or not __debug__
)

_clock = time.perf_counter


class _NoOpMarker:
    __slots__ = ()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


_NOOP_MARKER = _NoOpMarker()


# =============================================================================
# Recording
# =============================================================================

class _Stats:
    """Running totals for one marker name, in seconds."""
    __slots__ = ('count', 'total', 'shortest', 'longest', 'parents')

    def __init__(self):
        self.count = 0
        self.total = 0.0
        self.shortest = float('inf')
        self.longest = 0.0
        self.parents: Dict[str, int] = {}

    def add(self, elapsed: float, parent: Optional[str]) -> None:
        self.count += 1
        self.total += elapsed
        if elapsed < self.shortest:
            self.shortest = elapsed
        if elapsed > self.longest:
            self.longest = elapsed
        if parent is not None:
            self.parents[parent] = self.parents.get(parent, 0) + 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'total_ms': round(self.total * 1000, 3),
            'avg_ms': round(self.total * 1000 / self.count, 3),
            'min_ms': round(self.shortest * 1000, 3),
            'max_ms': round(self.longest * 1000, 3),
            'parents': dict(self.parents),
        }


class _Recorder:
    """
    Collects marker timings while enabled.

    open_names mirrors the markers currently entered, innermost last; the
    top of it is the parent of the next marker to finish.
    """

    def __init__(self):
        self.enabled = False
        self.open_names: List[str] = []
        self.stats: Dict[str, _Stats] = {}

    def clear(self) -> None:
        self.open_names.clear()
        self.stats.clear()

    def begin(self, name: str) -> float:
        self.open_names.append(name)
        return _clock()

    def finish(self, name: str, started: float) -> None:
        elapsed = _clock() - started
        # Markers still open when clear() ran have nothing to close.
        if not self.open_names or self.open_names[-1] != name:
            return
        self.open_names.pop()
        parent = self.open_names[-1] if self.open_names else None
        stats = self.stats.get(name)
        if stats is None:
            stats = self.stats[name] = _Stats()
        stats.add(elapsed, parent)

    def results(self) -> Dict[str, Dict[str, Any]]:
        return {name: stats.as_dict() for name, stats in self.stats.items()}

    def marker(self, name: str):
        if not self.enabled:
            return _NOOP_MARKER
        return _Marker(self, name)

    def wrap(self, func: Callable, name: str) -> Callable:
        recorder = self

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not recorder.enabled:
                return func(*args, **kwargs)
            started = recorder.begin(name)
            try:
                return func(*args, **kwargs)
            finally:
                recorder.finish(name, started)

        return wrapper


class _Marker:
    """Context manager for one timed block."""
    __slots__ = ('_recorder', '_name', '_started')

    def __init__(self, recorder: _Recorder, name: str):
        self._recorder = recorder
        self._name = name
        self._started = 0.0

    def __enter__(self):
        self._started = self._recorder.begin(self._name)
        return self

    def __exit__(self, *args):
        self._recorder.finish(self._name, self._started)
        return False


_recorder = None if _PROFILING_COMPILED_OUT else _Recorder()


# =============================================================================
# Public API
# =============================================================================

def enable_profiling(enabled: bool = True) -> None:
    """Turn recording on or off. Has no effect when compiled out."""
    if _recorder is not None:
        _recorder.enabled = enabled


def is_profiling_enabled() -> bool:
    return _recorder is not None and _recorder.enabled


def reset_profile() -> None:
    """Forget every recorded timing."""
    if _recorder is not None:
        _recorder.clear()


def get_profile_results() -> Dict[str, Dict[str, Any]]:
    """
    Statistics per marker name.

    Returns:
        Dict mapping each marker name that finished at least once to its
        count, total/avg/min/max time in milliseconds, and a 'parents' dict
        counting the enclosing marker of each call. Empty when nothing was
        recorded or profiling is compiled out.
    """
    if _recorder is None:
        return {}
    return _recorder.results()


def perf_marker(name: Optional[str] = None):
    """
    Context manager timing the enclosed block under name.

    Usage:
        with perf_marker("event_queue_init"):
            ...
    """
    if _recorder is None:
        return _NOOP_MARKER
    return _recorder.marker(name or "unknown")


def profile(name_or_func: Union[str, Callable, None] = None) -> Callable:
    """
    Decorator timing each call of a function.

    Usable bare (@profile, recorded under the function's name) or with a
    marker name (@profile("bentley_ottmann")).
    """
    def decorator(func: Callable) -> Callable:
        if _recorder is None:
            return func
        marker_name = name_or_func if isinstance(name_or_func, str) else func.__name__
        return _recorder.wrap(func, marker_name)

    if callable(name_or_func):
        return decorator(name_or_func)
    return decorator
