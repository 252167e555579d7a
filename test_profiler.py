#!/usr/bin/env python3
"""
GrowthProfiler Tests

Feeds the profiler synthetic work functions with known growth and checks
that the ratio test lands on the right complexity class, that malformed
size sequences are rejected before any work runs, and that repeated runs
are identical.
"""

import logging
import math
import pathlib
import sys

import pytest

# Add src to path so we can import bigoprof modules
sys.path.insert(0, str(pathlib.Path(__file__).parent / "src"))

from bigoprof import ComplexityClass, GrowthProfiler, InvalidInput, profile
from bigoprof.utils.config import Settings
import bigoprof.utils.logger as logger_module

SIZES = [10, 100, 1000]


def test_constant_cost_is_constant():
    """Identical costs across all sizes classify as O(1)."""
    result = profile(lambda n: 5.0, SIZES)

    assert result.complexity_class == ComplexityClass.CONSTANT
    assert result.score == 0.0
    assert not result.ambiguous


def test_linear_cost_is_linear_with_near_zero_error():
    result = profile(lambda n: float(n), SIZES)

    assert result.complexity_class == ComplexityClass.LINEAR
    assert result.score < 1e-9
    assert result.exponent == pytest.approx(1.0)


def test_quadratic_cost_is_quadratic():
    result = profile(lambda n: float(n * n), SIZES)

    assert result.complexity_class == ComplexityClass.QUADRATIC
    assert result.exponent == pytest.approx(2.0)


def test_linearithmic_is_told_apart_from_linear():
    """With 10x size steps n log n must not be mistaken for n."""
    result = profile(lambda n: n * math.log2(n), SIZES)

    assert result.complexity_class == ComplexityClass.LINEARITHMIC
    assert ComplexityClass.LINEAR not in [c.complexity_class for c in result.candidates]
    assert result.scores[ComplexityClass.LINEAR.value] > 0.5


@pytest.mark.parametrize("work, sizes, expected", [
    (lambda n: math.log2(n), [16, 256, 4096], ComplexityClass.LOGARITHMIC),
    (lambda n: float(n ** 3), [10, 20, 40], ComplexityClass.CUBIC),
    (lambda n: 2.0 ** n, [4, 8, 12, 16], ComplexityClass.EXPONENTIAL),
    (lambda n: float(math.factorial(n)), [3, 6, 9, 12], ComplexityClass.FACTORIAL),
])
def test_other_canonical_classes(work, sizes, expected):
    assert profile(work, sizes).complexity_class == expected


def test_profile_is_idempotent():
    work = lambda n: 3.0 * n * n + 7.0 * n
    first = profile(work, SIZES)
    second = profile(work, SIZES)

    assert first == second
    assert first.to_record() == second.to_record()


@pytest.mark.parametrize("sizes, code", [
    ([5, 5, 10], "not_increasing"),
    ([5, 10], "too_few_sizes"),
    ([10, 5, 20], "not_increasing"),
    ([0, 5, 10], "non_positive_size"),
    ([1, 2.5, 10], "non_integer_size"),
])
def test_malformed_sizes_are_rejected_before_any_work(sizes, code):
    calls = []

    def work(n):
        calls.append(n)
        return float(n)

    with pytest.raises(InvalidInput) as exc_info:
        profile(work, sizes)

    assert exc_info.value.code == code
    assert calls == []


def test_work_runs_once_per_size_in_order():
    calls = []

    def work(n):
        calls.append(n)
        return float(n)

    GrowthProfiler().profile(work, iter([1, 10, 100, 1000]))
    assert calls == [1, 10, 100, 1000]


@pytest.mark.parametrize("bad_cost", [-1.0, float("nan"), float("inf"), "12", None])
def test_invalid_cost_from_work(bad_cost):
    with pytest.raises(InvalidInput) as exc_info:
        profile(lambda n: bad_cost, SIZES)
    assert exc_info.value.code == "invalid_cost"


def test_work_exceptions_propagate():
    def work(n):
        if n > 100:
            raise RuntimeError("boom")
        return float(n)

    with pytest.raises(RuntimeError, match="boom"):
        profile(work, SIZES)


def test_samples_are_kept_in_order():
    result = profile(lambda n: float(n), SIZES)
    assert [s.as_pair() for s in result.samples] == [(10, 10.0), (100, 100.0), (1000, 1000.0)]


def test_record_shape():
    record = profile(lambda n: 2.0, SIZES).to_record()

    assert record["class"] == "O(1)"
    assert record["score"] == 0.0
    assert record["samples"] == [[10, 2.0], [100, 2.0], [1000, 2.0]]
    assert record["ambiguous"] is False
    assert record["anomalies"] == []


def test_explicit_settings_widen_candidates():
    loose = Settings(ambiguity_tolerance=1.0)
    result = profile(lambda n: float(n), SIZES, settings=loose)

    assert result.complexity_class == ComplexityClass.LINEAR
    assert result.ambiguous
    assert result.candidates[0].complexity_class == ComplexityClass.LINEAR
    assert ComplexityClass.LINEARITHMIC in [c.complexity_class for c in result.candidates]


@pytest.fixture
def file_logging_by_default(tmp_path, monkeypatch):
    """Global settings that would write logs/ into the working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        logger_module, "get_settings",
        lambda: Settings(log_to_file=True, log_dir=str(tmp_path / "logs")),
    )
    yield tmp_path
    for name in ("GrowthProfiler", "Analyst"):
        logger = logging.getLogger(name)
        for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
            logger.removeHandler(handler)
            handler.close()


def test_explicit_settings_can_turn_file_logging_off(file_logging_by_default):
    tmp_path = file_logging_by_default
    quiet = Settings(log_to_file=False, log_dir=str(tmp_path / "mine"))

    profile(lambda n: float(n), SIZES, settings=quiet)

    assert list(tmp_path.iterdir()) == []


def test_explicit_settings_choose_the_log_directory(file_logging_by_default):
    tmp_path = file_logging_by_default
    chatty = Settings(log_to_file=True, log_dir=str(tmp_path / "mine"))

    GrowthProfiler(chatty).run(lambda n: float(n), SIZES)

    assert (tmp_path / "mine" / "GrowthProfiler.log").exists()
    assert (tmp_path / "mine" / "Analyst.log").exists()
    assert not (tmp_path / "logs").exists()
