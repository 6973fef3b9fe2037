"""
Tests for the ratsweep.profiling module.
"""
import os
import subprocess
import sys
from pathlib import Path

import pytest

from ratsweep.profiling import (
    _PROFILING_COMPILED_OUT,
    enable_profiling,
    get_profile_results,
    is_profiling_enabled,
    perf_marker,
    profile,
    reset_profile,
)

SRC_DIR = str(Path(__file__).resolve().parents[2] / "src")

_COMPILED_OUT_CHECK = """
from ratsweep.profiling import (
    _PROFILING_COMPILED_OUT, enable_profiling, get_profile_results, perf_marker, profile
)

def square(x):
    return x * x

enable_profiling(True)
with perf_marker("block") as a, perf_marker("other") as b:
    shared = a is b
# Plain checks: -O strips assert statements.
if (_PROFILING_COMPILED_OUT and shared and profile(square) is square
        and profile("named")(square) is square and get_profile_results() == {}):
    print("compiled out")
"""


def _python(code, *flags, **env_overrides):
    env = os.environ.copy()
    env["PYTHONPATH"] = SRC_DIR + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("RATSWEEP_NO_PROFILING", None)
    env.update(env_overrides)
    return subprocess.run([sys.executable, *flags, "-c", code],
                          capture_output=True, text=True, env=env)


@pytest.fixture
def recording():
    reset_profile()
    enable_profiling(True)
    yield
    enable_profiling(False)
    reset_profile()


class TestCompileOut:
    """Instrumentation disappears under -O or RATSWEEP_NO_PROFILING."""

    def test_active_in_normal_runs(self):
        if os.environ.get("RATSWEEP_NO_PROFILING"):
            pytest.skip("profiling compiled out by environment")
        assert _PROFILING_COMPILED_OUT is False

    @pytest.mark.parametrize("flags, env", [
        (("-O",), {}),
        ((), {"RATSWEEP_NO_PROFILING": "1"}),
        ((), {"RATSWEEP_NO_PROFILING": "yes"}),
    ])
    def test_compiled_out(self, flags, env):
        result = _python(_COMPILED_OUT_CHECK, *flags, **env)
        assert result.returncode == 0, result.stderr
        assert "compiled out" in result.stdout


@pytest.mark.skipif(_PROFILING_COMPILED_OUT, reason="profiling compiled out")
class TestRecorder:
    """Statistics gathered while recording is on."""

    def test_off_until_enabled(self):
        reset_profile()
        assert not is_profiling_enabled()
        with perf_marker("skipped"):
            pass
        assert get_profile_results() == {}

    def test_disabled_markers_are_shared(self):
        assert perf_marker("a") is perf_marker("b")

    def test_block_statistics(self, recording):
        for _ in range(3):
            with perf_marker("block"):
                pass

        stats = get_profile_results()["block"]
        assert stats["count"] == 3
        assert stats["min_ms"] <= stats["avg_ms"] <= stats["max_ms"]
        assert stats["parents"] == {}

    def test_elapsed_time_is_measured(self, recording):
        import time

        with perf_marker("sleep"):
            time.sleep(0.01)
        assert get_profile_results()["sleep"]["total_ms"] >= 5

    def test_parents_count_enclosing_marker(self, recording):
        with perf_marker("loop"):
            for _ in range(4):
                with perf_marker("step"):
                    pass
        with perf_marker("step"):
            pass

        results = get_profile_results()
        assert results["step"]["count"] == 5
        assert results["step"]["parents"] == {"loop": 4}
        assert results["loop"]["parents"] == {}

    def test_decorator_names(self, recording):
        @profile
        def bare():
            return 1

        @profile("renamed")
        def named():
            return 2

        assert bare() + named() == 3
        results = get_profile_results()
        assert results["bare"]["count"] == 1
        assert "renamed" in results and "named" not in results

    def test_recursive_calls_nest_under_themselves(self, recording):
        @profile("depth")
        def depth(n):
            return 0 if n == 0 else 1 + depth(n - 1)

        assert depth(3) == 3
        stats = get_profile_results()["depth"]
        assert stats["count"] == 4
        assert stats["parents"] == {"depth": 3}

    def test_failing_call_is_still_timed(self, recording):
        @profile("fails")
        def fails():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            fails()
        assert get_profile_results()["fails"]["count"] == 1
        with perf_marker("after"):
            pass
        assert get_profile_results()["after"]["parents"] == {}, "The failed call was closed"

    def test_enabling_after_decoration(self):
        @profile("late")
        def late():
            return 7

        reset_profile()
        late()
        assert get_profile_results() == {}

        enable_profiling(True)
        try:
            late()
        finally:
            enable_profiling(False)
        assert get_profile_results()["late"]["count"] == 1
        reset_profile()

    def test_reset_drops_open_markers(self, recording):
        with perf_marker("outer"):
            reset_profile()
            with perf_marker("inner"):
                pass

        results = get_profile_results()
        assert results["inner"]["parents"] == {}
        assert "outer" not in results

    def test_sweep_sections(self, recording):
        from ratsweep import BentleyOttmann, Segment

        BentleyOttmann.intersections([Segment((0, 0), (4, 4)), Segment((0, 4), (4, 0))])

        results = get_profile_results()
        assert results["bentley_ottmann"]["count"] == 1
        assert results["event_queue_init"]["parents"] == {"bentley_ottmann": 1}
        handle = results["sweep_handle"]
        assert handle["parents"] == {"sweep_loop": handle["count"]}
