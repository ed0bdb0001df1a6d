"""
Tests for the profiling package.
"""
import os
import subprocess
import sys
import time
from pathlib import Path

import pytest

SRC_PATH = str(Path(__file__).resolve().parents[2] / "src")


def _run_python(args, env=None):
    env = dict(env or os.environ)
    env["PYTHONPATH"] = SRC_PATH + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run([sys.executable] + args, capture_output=True, text=True, env=env)


@pytest.fixture
def profiling_on():
    from prisma.profiling import enable_profiling, reset_profile
    reset_profile()
    enable_profiling(True)
    yield
    enable_profiling(False)
    reset_profile()


class TestProfilingCompiledOut:
    """Tests for the zero-overhead compile-out feature."""

    def test_normal_mode_not_compiled_out(self):
        """In normal mode (no -O flag), profiling should NOT be compiled out."""
        from prisma.profiling import _PROFILING_COMPILED_OUT
        assert _PROFILING_COMPILED_OUT is False

    def test_optimized_mode_compiled_out(self):
        """When running with python -O, profiling should be compiled out."""
        result = _run_python(
            ["-O", "-c",
             "from prisma.profiling import _PROFILING_COMPILED_OUT; "
             "print(_PROFILING_COMPILED_OUT)"])
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "True" in result.stdout

    def test_env_var_compiles_out(self):
        """When PRISMA_NO_PROFILING=1, profiling should be compiled out."""
        env = os.environ.copy()
        env["PRISMA_NO_PROFILING"] = "1"

        result = _run_python(
            ["-c",
             "from prisma.profiling import _PROFILING_COMPILED_OUT; "
             "print(_PROFILING_COMPILED_OUT)"],
            env=env)
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "True" in result.stdout

    def test_compiled_out_mode_has_noop_functions(self):
        """When compiled out, all functions should be no-ops that don't error."""
        env = os.environ.copy()
        env["PRISMA_NO_PROFILING"] = "1"

        code = """
from prisma.profiling import (
    enable_profiling, is_profiling_enabled, reset_profile, get_profile_results, perf_marker, profile
)

enable_profiling(True)
assert is_profiling_enabled() is False

reset_profile()
assert get_profile_results() == {}

with perf_marker("test"):
    pass

@profile
def my_func():
    return 42

@profile("custom_name")
def my_func2():
    return 43

assert my_func() == 42
assert my_func2() == 43
assert get_profile_results() == {}

print("OK")
"""
        result = _run_python(["-c", code], env=env)
        assert result.returncode == 0, f"Failed: {result.stderr}"
        assert "OK" in result.stdout


class TestProfilingDisabled:
    """Recording is off until enabled."""

    def test_disabled_by_default_records_nothing(self):
        from prisma.profiling import (
            enable_profiling, is_profiling_enabled, reset_profile, perf_marker, get_profile_results
        )
        enable_profiling(False)
        reset_profile()
        assert is_profiling_enabled() is False

        with perf_marker("ignored"):
            pass

        assert get_profile_results() == {}

    def test_toggle_inside_marker_keeps_pairs(self, profiling_on):
        from prisma.profiling import enable_profiling, perf_marker, get_profile_results

        enable_profiling(False)
        with perf_marker("started_off"):
            enable_profiling(True)
        with perf_marker("after"):
            pass

        results = get_profile_results()
        assert "started_off" not in results
        assert results["after"]["count"] == 1


class TestProfilingFunctionality:
    """Tests for actual profiling functionality."""

    def test_perf_marker_records_timing(self, profiling_on):
        from prisma.profiling import perf_marker, get_profile_results

        with perf_marker("test_marker"):
            time.sleep(0.01)

        results = get_profile_results()

        assert "test_marker" in results
        assert results["test_marker"]["count"] == 1
        assert results["test_marker"]["total_ms"] >= 5

    def test_profile_decorator_records_timing(self, profiling_on):
        from prisma.profiling import profile, get_profile_results

        @profile
        def slow_function():
            time.sleep(0.01)
            return 42

        result = slow_function()

        results = get_profile_results()

        assert result == 42
        assert "slow_function" in results
        assert results["slow_function"]["count"] == 1
        assert results["slow_function"]["total_ms"] >= 5

    def test_profile_decorator_with_custom_name(self, profiling_on):
        from prisma.profiling import profile, get_profile_results

        @profile("my_custom_name")
        def some_function():
            return 123

        some_function()

        results = get_profile_results()

        assert "my_custom_name" in results
        assert "some_function" not in results

    def test_nested_markers_track_hierarchy(self, profiling_on):
        from prisma.profiling import perf_marker, get_profile_results

        with perf_marker("outer"):
            with perf_marker("inner"):
                pass

        results = get_profile_results()

        assert "outer" in results
        assert "inner" in results
        assert results["inner"]["parents"].get("outer", 0) == 1

    def test_multiple_calls_accumulate(self, profiling_on):
        from prisma.profiling import perf_marker, get_profile_results

        for _ in range(5):
            with perf_marker("repeated"):
                pass

        assert get_profile_results()["repeated"]["count"] == 5

    def test_reset_clears_data(self, profiling_on):
        from prisma.profiling import reset_profile, perf_marker, get_profile_results

        with perf_marker("before_reset"):
            pass

        assert "before_reset" in get_profile_results()

        reset_profile()

        assert get_profile_results() == {}

    def test_render_pipeline_stages_are_instrumented(self, profiling_on):
        from prisma.profiling import get_profile_results
        from prisma.elements.prisma_mesh import Mesh
        from prisma.prisma_render import PrismaRender

        PrismaRender.render(Mesh.cube([(255, 0, 0)] * 6))

        results = get_profile_results()
        for stage in ("render", "camera_transform", "depth_sort", "shade"):
            assert stage in results, f"missing marker {stage}"
        assert results["shade"]["parents"].get("render", 0) == 1
