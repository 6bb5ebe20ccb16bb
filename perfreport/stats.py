"""Summary statistics over per-iteration samples."""

import math
import statistics
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from perfreport.schemas import BenchmarkModel


@dataclass(frozen=True)
class SampleStatistics:
    """Summary of one metric's samples after the warmup skip."""

    count: int
    mean: float
    stdev: float
    min: float
    max: float


@dataclass(frozen=True)
class StatRow:
    """Statistics of one (test, metric) pair of a benchmark."""

    test_name: str
    metric: str
    statistics: SampleStatistics


def sample_stdev(values: Sequence[float], mean: float) -> float:
    """Sample standard deviation (n - 1 denominator).

    Undefined for a single value: NaN is returned rather than raising, and
    it is not coerced to zero.
    """
    n = len(values)
    if n < 2:
        return float("nan")
    return math.sqrt(sum((x - mean) ** 2 for x in values) / (n - 1))


def compute_stats(samples: Sequence[float], skip_warmup: bool = True) -> SampleStatistics:
    """Compute count, mean, sample stdev, min and max of a metric's samples.

    When more than one sample is present the first one is treated as the
    warmup iteration and dropped; the reported count is the post-skip count.

    Args:
        samples: Samples in iteration order
        skip_warmup: Drop the first sample when more than one is present

    Raises:
        ValueError: If ``samples`` is empty
    """
    values: List[float] = [float(x) for x in samples]
    if not values:
        raise ValueError("cannot compute statistics without samples")

    if skip_warmup and len(values) > 1:
        values = values[1:]

    try:
        mean = statistics.fmean(values)
    except ValueError:
        # fsum rejects inf + -inf; the plain sum yields NaN
        mean = sum(values) / len(values)
    return SampleStatistics(
        count=len(values),
        mean=mean,
        stdev=sample_stdev(values, mean),
        min=min(values),
        max=max(values),
    )


def iter_stat_rows(benchmark: BenchmarkModel, skip_warmup: bool = True) -> Iterator[StatRow]:
    """Statistics for every (test, metric) pair that has samples.

    Pairs without samples, e.g. when only a subset of the tests ran, are
    skipped.
    """
    for test in benchmark.tests:
        for metric in test.performance.metrics:
            samples = test.performance.samples_for(metric.name)
            if not samples:
                continue
            yield StatRow(
                test_name=test.name,
                metric=metric.display_name,
                statistics=compute_stats(samples, skip_warmup=skip_warmup),
            )


__all__ = [
    "SampleStatistics",
    "StatRow",
    "sample_stdev",
    "compute_stats",
    "iter_stat_rows",
]
