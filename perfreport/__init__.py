"""Performance measurement aggregation and reporting.

Joins raw per-iteration metric samples to the test cases that produced them
and renders the result as:
- a hierarchical XML report (assembly or scenario layout)
- a flat statistics table (count, mean, stdev, min, max per metric)

Main exports:
- aggregate, aggregate_assemblies: Build the report model
- compute_stats: Warmup-skipping summary statistics
- get_statistics: Statistics table of a benchmark
- render_benchmark, render_assemblies, write_report: XML output
"""

from perfreport.aggregator import aggregate, aggregate_assemblies, collect_measurements
from perfreport.errors import (
    PerfReportError,
    ReportError,
    ReportWriteError,
    SourceFormatError,
    UnsupportedOperationError,
)
from perfreport.formatting import INVARIANT, FormatOptions, format_number
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
from perfreport.serializer import (
    read_report,
    render_assemblies,
    render_benchmark,
    write_assemblies,
    write_benchmark,
    write_report,
)
from perfreport.sources import InMemoryMeasurementSource, InMemoryTestRegistry
from perfreport.stats import SampleStatistics, StatRow, compute_stats
from perfreport.table import DataTable, TableHeader, get_statistics
from perfreport.units import PerformanceMetricUnits, UnitTable, infer_unit

__all__ = [
    # Aggregation
    "aggregate",
    "aggregate_assemblies",
    "collect_measurements",
    # Model
    "AssemblyModelCollection",
    "BenchmarkModel",
    "IterationRecord",
    "MetricModel",
    "PerformanceModel",
    "TestModel",
    # Collaborators
    "MeasurementSource",
    "TestRegistry",
    "TestCaseRecord",
    "InMemoryMeasurementSource",
    "InMemoryTestRegistry",
    # Statistics
    "SampleStatistics",
    "StatRow",
    "compute_stats",
    "DataTable",
    "TableHeader",
    "get_statistics",
    # Output
    "FormatOptions",
    "INVARIANT",
    "format_number",
    "render_benchmark",
    "render_assemblies",
    "write_report",
    "write_benchmark",
    "write_assemblies",
    "read_report",
    # Units
    "PerformanceMetricUnits",
    "UnitTable",
    "infer_unit",
    # Errors
    "PerfReportError",
    "ReportError",
    "ReportWriteError",
    "SourceFormatError",
    "UnsupportedOperationError",
]
