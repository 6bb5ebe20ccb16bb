"""Report model schemas.

This module contains the hierarchical, serializable representation built by
the aggregator: a benchmark holds test entries, each test entry holds its
metric descriptors and the ordered iteration records sampled for it.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from perfreport.units import PerformanceMetricUnits


class MetricModel(BaseModel):
    """Describes one metric recorded for a test."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Stable metric key, unique within a test")
    display_name: str
    unit: str = PerformanceMetricUnits.UNKNOWN


class IterationRecord(BaseModel):
    """Metric samples taken during one iteration of a test.

    The iteration index is the record's position in its test's iteration
    list; it is not stored.
    """

    model_config = ConfigDict(frozen=True)

    values: Dict[str, float] = Field(default_factory=dict)

    def __contains__(self, metric_name: str) -> bool:
        return metric_name in self.values


class PerformanceModel(BaseModel):
    """Metric descriptors and iteration records of a single test."""

    metrics: List[MetricModel] = Field(default_factory=list)
    iterations: List[IterationRecord] = Field(default_factory=list)

    def find_metric(self, name: str) -> Optional[MetricModel]:
        """Retrieve a metric descriptor by name."""
        for metric in self.metrics:
            if metric.name == name:
                return metric
        return None

    def samples_for(self, metric_name: str) -> List[float]:
        """All samples of a metric, in iteration order."""
        return [
            record.values[metric_name]
            for record in self.iterations
            if metric_name in record.values
        ]


class TestModel(BaseModel):
    """A logical test case and the measurements attributed to it."""

    # Keeps pytest from collecting this class when imported into test modules.
    __test__ = False

    name: str = Field(description="Test case identifier")
    class_name: str = Field(default="", description="Declaring type of the test method")
    method: str = ""
    namespace: str = ""
    performance: PerformanceModel = Field(default_factory=PerformanceModel)


class BenchmarkModel(BaseModel):
    """Top-level container: one assembly or scenario benchmark."""

    name: str
    namespace: str = ""
    tests: List[TestModel] = Field(default_factory=list)

    def find_test(self, name: str) -> Optional[TestModel]:
        """Retrieve a test entry by identifier."""
        for test in self.tests:
            if test.name == name:
                return test
        return None

    def test_names(self) -> List[str]:
        return [test.name for test in self.tests]


class AssemblyModelCollection(BaseModel):
    """Benchmarks of several assemblies reported together."""

    assemblies: List[BenchmarkModel] = Field(default_factory=list)


__all__ = [
    "MetricModel",
    "IterationRecord",
    "PerformanceModel",
    "TestModel",
    "BenchmarkModel",
    "AssemblyModelCollection",
]
