"""Tests for warmup-skipping summary statistics."""

import math

import pytest

from perfreport.aggregator import aggregate
from perfreport.stats import compute_stats, iter_stat_rows, sample_stdev


def test_round_trip_scenario(registry, duration_source):
    benchmark = aggregate(registry, duration_source, "Bench.dll")
    samples = benchmark.tests[0].performance.samples_for("Duration")

    stats = compute_stats(samples)
    assert stats.count == 3
    assert stats.mean == pytest.approx(11.0)
    assert stats.min == 10.0
    assert stats.max == 12.0
    assert stats.stdev == pytest.approx(1.0)


def test_first_sample_is_dropped():
    stats = compute_stats([1000.0, 1.0, 2.0, 3.0, 4.0])
    assert stats.count == 4
    assert stats.max == 4.0
    assert stats.mean == pytest.approx(2.5)


def test_single_sample_is_kept():
    stats = compute_stats([42.5])
    assert stats.count == 1
    assert stats.mean == stats.min == stats.max == 42.5
    assert math.isnan(stats.stdev)


def test_two_samples_leave_one_and_nan_stdev():
    stats = compute_stats([9.0, 3.0])
    assert stats.count == 1
    assert stats.mean == 3.0
    assert math.isnan(stats.stdev)


def test_empty_samples_are_rejected():
    with pytest.raises(ValueError):
        compute_stats([])


def test_warmup_skip_can_be_disabled():
    stats = compute_stats([100.0, 10.0, 12.0, 11.0], skip_warmup=False)
    assert stats.count == 4
    assert stats.max == 100.0


@pytest.mark.parametrize("values", [
    [1.0, 2.0],
    [0.5, 0.25, 0.125, 4.0],
    [-3.0, 7.5, 7.5, 1e6, -2e-3],
])
def test_stdev_uses_bessel_correction(values):
    mean = sum(values) / len(values)
    expected = math.sqrt(sum((x - mean) ** 2 for x in values) / (len(values) - 1))
    assert sample_stdev(values, mean) == pytest.approx(expected)


def test_non_finite_samples_pass_through():
    stats = compute_stats([0.0, 1.0, math.inf])
    assert stats.max == math.inf
    assert math.isinf(stats.mean)


def test_stat_rows_skip_metrics_without_samples(registry):
    from perfreport.sources import InMemoryMeasurementSource

    source = InMemoryMeasurementSource({
        "TestA": [{"Duration": 5.0, "Allocated": None}, {"Duration": 6.0, "Allocated": None}],
    })
    rows = list(iter_stat_rows(aggregate(registry, source, "b")))

    assert [(r.test_name, r.metric) for r in rows] == [("TestA", "Duration")]
    assert rows[0].statistics.count == 1


def test_opposite_infinities_give_nan_mean():
    stats = compute_stats([0.0, math.inf, -math.inf])
    assert stats.count == 2
    assert math.isnan(stats.mean)


def test_mean_is_exact_for_many_small_values():
    stats = compute_stats([0.0] + [0.1] * 10)
    assert stats.mean == 0.1
