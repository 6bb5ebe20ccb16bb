"""Schemas for the report model and its input collaborators.

This package re-exports all schemas for convenient importing:
    from perfreport.schemas import BenchmarkModel, TestModel, MetricModel
"""

from perfreport.schemas.model_schemas import (
    MetricModel,
    IterationRecord,
    PerformanceModel,
    TestModel,
    BenchmarkModel,
    AssemblyModelCollection,
)

from perfreport.schemas.source_schemas import (
    IterationSamples,
    TestCaseRecord,
    TestRegistry,
    MeasurementSource,
)

__all__ = [
    # Report model
    "MetricModel",
    "IterationRecord",
    "PerformanceModel",
    "TestModel",
    "BenchmarkModel",
    "AssemblyModelCollection",
    # Collaborators
    "IterationSamples",
    "TestCaseRecord",
    "TestRegistry",
    "MeasurementSource",
]
