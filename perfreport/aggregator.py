"""Joins raw measurements to registered test cases.

The aggregator makes a single pass over the measurement source, attributes
every (test case, metric, samples) triple to the registry entry with the same
identifier and builds the report model from the matches.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Tuple

from perfreport.schemas import (
    AssemblyModelCollection,
    BenchmarkModel,
    IterationRecord,
    MeasurementSource,
    MetricModel,
    PerformanceModel,
    TestCaseRecord,
    TestModel,
    TestRegistry,
)
from perfreport.units import UnitPolicy, infer_unit

logger = logging.getLogger(__name__)

Measurement = Tuple[str, str, List[float]]


def collect_measurements(source: MeasurementSource) -> Iterator[Measurement]:
    """Group each test case's iterations into per-metric sample lists.

    Yields ``(test_case, metric, values)`` with metrics in first-seen order.
    Test cases for which the source returns no values are skipped; a metric
    recorded without any value is yielded with an empty list.
    """
    for test_case in source.test_cases:
        iterations = source.get_values(test_case)
        if iterations is None:
            logger.debug("No values recorded for '%s', skipping", test_case)
            continue

        measurements: Dict[str, List[float]] = {}
        for iteration in iterations:
            for metric, value in iteration.items():
                samples = measurements.setdefault(metric, [])
                if value is not None:
                    samples.append(float(value))

        for metric, values in measurements.items():
            yield test_case, metric, values


def _create_test(record: TestCaseRecord) -> TestModel:
    return TestModel(
        name=record.display_name,
        class_name=record.class_name,
        method=record.method,
        performance=PerformanceModel(),
    )


def aggregate(
    registry: TestRegistry,
    source: MeasurementSource,
    name: str,
    namespace: str = "",
    unit_policy: UnitPolicy = infer_unit,
) -> BenchmarkModel:
    """Build the report model for one benchmark.

    Args:
        registry: Known test cases; entries are visited in registry order
        source: Raw per-iteration samples keyed by test case name
        name: Name of the benchmark (or assembly) being reported
        namespace: Optional namespace written on the benchmark element
        unit_policy: Maps a metric name to its unit label

    Returns:
        A BenchmarkModel with one entry per registered test that has
        measurements. Registered tests without measurements are omitted.
    """
    benchmark = BenchmarkModel(name=name, namespace=namespace)
    measurements = list(collect_measurements(source))
    tests: Dict[str, TestModel] = {}
    joined = set()

    for record in registry.entries:
        test_id = record.display_name
        if test_id in joined:
            logger.debug("Registry lists '%s' more than once; merging into first entry", test_id)
            continue
        joined.add(test_id)

        for test_case, metric, values in measurements:
            if test_case != test_id:
                continue

            test = tests.get(test_id)
            if test is None:
                test = _create_test(record)
                tests[test_id] = test
                benchmark.tests.append(test)

            performance = test.performance
            if performance.find_metric(metric) is None:
                performance.metrics.append(
                    MetricModel(name=metric, display_name=metric, unit=unit_policy(metric))
                )

            for value in values:
                performance.iterations.append(IterationRecord(values={metric: value}))

        if test_id not in tests:
            logger.debug("No measurements found for '%s'", test_id)

    unmatched = sorted({m[0] for m in measurements} - joined)
    if unmatched:
        logger.debug("Ignoring measurements of unregistered tests: %s", ", ".join(unmatched))

    logger.info(
        "Aggregated %d of %d registered tests for '%s'",
        len(benchmark.tests),
        len(joined),
        name,
    )
    return benchmark


def aggregate_assemblies(
    inputs: Iterable[Tuple[str, TestRegistry, MeasurementSource]],
    unit_policy: UnitPolicy = infer_unit,
) -> AssemblyModelCollection:
    """Aggregate several assemblies, one independent pass each."""
    collection = AssemblyModelCollection()
    for name, registry, source in inputs:
        collection.assemblies.append(aggregate(registry, source, name, unit_policy=unit_policy))
    return collection


__all__ = [
    "Measurement",
    "collect_measurements",
    "aggregate",
    "aggregate_assemblies",
]
