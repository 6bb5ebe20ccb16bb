"""Hierarchical XML rendering of the report model.

Two layouts are supported over the same model:

- assembly layout: ``assemblies/assembly/collection/test/performance``
- scenario layout: ``ScenarioBenchmark/Tests/Test/Performance``

Both share the performance block: a ``metrics`` element with one child per
metric descriptor (the element is named after the metric) and an
``iterations`` element with one ``iteration`` child per record. Iteration
indices are assigned at render time, starting at 0.

The format is write-only; ``read_report`` always fails.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Union

from perfreport.errors import ReportError, UnsupportedOperationError
from perfreport.formatting import INVARIANT, FormatOptions, format_count, format_number
from perfreport.output import write_text_atomic
from perfreport.schemas import AssemblyModelCollection, BenchmarkModel, PerformanceModel

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
INDEX_ATTRIBUTE = "index"

_XML_NAME = re.compile(r"^[^\W\d][\w.\-]*$")


def _check_name(name: str, what: str) -> str:
    if not _XML_NAME.match(name):
        raise ReportError(f"{what} '{name}' is not a valid XML name")
    return name


def render_performance(
    parent: ET.Element,
    performance: PerformanceModel,
    tag: str,
    options: FormatOptions = INVARIANT,
) -> ET.Element:
    """Append the metrics and iterations block of one test to ``parent``."""
    element = ET.SubElement(parent, tag)

    metrics = ET.SubElement(element, "metrics")
    for metric in performance.metrics:
        ET.SubElement(
            metrics,
            _check_name(metric.name, "Metric name"),
            {"displayName": metric.display_name, "unit": metric.unit},
        )

    iterations = ET.SubElement(element, "iterations")
    for index, record in enumerate(performance.iterations):
        iteration = ET.SubElement(iterations, "iteration")
        iteration.set(INDEX_ATTRIBUTE, format_count(index))
        for key, value in record.values.items():
            if key == INDEX_ATTRIBUTE:
                raise ReportError(f"Metric name '{key}' collides with the iteration index")
            iteration.set(_check_name(key, "Metric name"), format_number(value, options))

    return element


def render_assembly(benchmark: BenchmarkModel, options: FormatOptions = INVARIANT) -> ET.Element:
    """Render one benchmark as an ``assembly`` element."""
    assembly = ET.Element("assembly", {"name": benchmark.name})
    collection = ET.SubElement(assembly, "collection")
    for test in benchmark.tests:
        element = ET.SubElement(
            collection,
            "test",
            {"name": test.name, "type": test.class_name, "method": test.method},
        )
        render_performance(element, test.performance, "performance", options)
    return assembly


def render_assemblies(
    collection: AssemblyModelCollection,
    options: FormatOptions = INVARIANT,
) -> ET.Element:
    """Render several assemblies under one ``assemblies`` root."""
    root = ET.Element("assemblies")
    for benchmark in collection.assemblies:
        root.append(render_assembly(benchmark, options))
    return root


def render_benchmark(benchmark: BenchmarkModel, options: FormatOptions = INVARIANT) -> ET.Element:
    """Render a benchmark in the scenario layout."""
    root = ET.Element("ScenarioBenchmark", {"Name": benchmark.name, "Namespace": benchmark.namespace})
    tests = ET.SubElement(root, "Tests")
    for test in benchmark.tests:
        element = ET.SubElement(tests, "Test", {"Name": test.name, "Namespace": test.namespace})
        render_performance(element, test.performance, "Performance", options)
    return root


def to_xml_string(root: ET.Element) -> str:
    """Serialize a rendered document, with declaration and indentation."""
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def write_report(root: ET.Element, path: Union[str, Path]) -> Path:
    """Write a rendered document to ``path``.

    Raises:
        ReportWriteError: If the destination cannot be created or written;
            no partial file is left behind
    """
    return write_text_atomic(path, to_xml_string(root))


def write_benchmark(
    benchmark: BenchmarkModel,
    path: Union[str, Path],
    options: FormatOptions = INVARIANT,
) -> Path:
    return write_report(render_benchmark(benchmark, options), path)


def write_assemblies(
    collection: AssemblyModelCollection,
    path: Union[str, Path],
    options: FormatOptions = INVARIANT,
) -> Path:
    return write_report(render_assemblies(collection, options), path)


def read_report(path: Union[str, Path]):
    """Reading reports back is not supported."""
    raise UnsupportedOperationError(
        f"cannot read {path}: the performance report format is write-only"
    )


__all__ = [
    "render_performance",
    "render_assembly",
    "render_assemblies",
    "render_benchmark",
    "to_xml_string",
    "write_report",
    "write_benchmark",
    "write_assemblies",
    "read_report",
]
