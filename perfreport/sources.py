"""File-backed and in-memory collaborators for the aggregator."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from perfreport.errors import SourceFormatError
from perfreport.schemas import (
    IterationSamples,
    MeasurementSource,
    TestCaseRecord,
    TestRegistry,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

TEST_CASE_COLUMN = "test"


class InMemoryMeasurementSource(MeasurementSource):
    """Measurement source over already-collected iteration samples."""

    def __init__(self, measurements: Mapping[str, Optional[Sequence[IterationSamples]]]):
        self._measurements: Dict[str, Optional[List[IterationSamples]]] = {
            name: None if iterations is None else [dict(i) for i in iterations]
            for name, iterations in measurements.items()
        }

    @property
    def test_cases(self) -> List[str]:
        return list(self._measurements)

    def get_values(self, test_case: str) -> Optional[Iterable[IterationSamples]]:
        return self._measurements.get(test_case)


class InMemoryTestRegistry(TestRegistry):
    """Test registry over a fixed list of records."""

    __test__ = False

    def __init__(self, entries: Iterable[Union[TestCaseRecord, Mapping[str, Any]]]):
        self._entries = [
            entry if isinstance(entry, TestCaseRecord) else TestCaseRecord(**entry)
            for entry in entries
        ]

    @property
    def entries(self) -> List[TestCaseRecord]:
        return list(self._entries)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise SourceFormatError(path, f"cannot read file ({e.strerror or e})") from e
    except json.JSONDecodeError as e:
        raise SourceFormatError(path, f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceFormatError(path, f"not UTF-8 text ({e.reason} at byte {e.start})") from e


def _to_sample(path: Path, test_case: str, metric: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SourceFormatError(
            path, f"non-numeric sample {value!r} for metric '{metric}' of '{test_case}'"
        )
    return float(value)


def load_measurements_json(path: PathLike) -> InMemoryMeasurementSource:
    """Load measurements stored as ``{"<test>": [{"<metric>": value}, ...]}``.

    A test mapped to ``null`` is kept as a test case without values.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise SourceFormatError(path, "expected an object keyed by test case name")

    measurements: Dict[str, Optional[List[IterationSamples]]] = {}
    for test_case, iterations in data.items():
        if iterations is None:
            measurements[test_case] = None
            continue
        if not isinstance(iterations, list):
            raise SourceFormatError(path, f"iterations of '{test_case}' must be a list")

        records = []
        for iteration in iterations:
            if not isinstance(iteration, dict):
                raise SourceFormatError(path, f"iteration of '{test_case}' must be an object")
            records.append({
                metric: _to_sample(path, test_case, metric, value)
                for metric, value in iteration.items()
            })
        measurements[test_case] = records

    logger.debug("Loaded measurements for %d test cases from %s", len(measurements), path)
    return InMemoryMeasurementSource(measurements)


def load_measurements_csv(path: PathLike) -> InMemoryMeasurementSource:
    """Load measurements from a wide CSV file, one row per iteration.

    The ``test`` column names the test case; every other column is a metric.
    Empty cells record the metric without a value.
    """
    path = Path(path)
    measurements: Dict[str, List[IterationSamples]] = {}
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames or TEST_CASE_COLUMN not in reader.fieldnames:
                raise SourceFormatError(path, f"missing '{TEST_CASE_COLUMN}' column")
            metrics = [name for name in reader.fieldnames if name != TEST_CASE_COLUMN]

            for line_number, row in enumerate(reader, start=2):
                test_case = (row.get(TEST_CASE_COLUMN) or "").strip()
                if not test_case:
                    raise SourceFormatError(path, f"line {line_number}: empty test name")

                iteration: Dict[str, Optional[float]] = {}
                for metric in metrics:
                    cell = (row.get(metric) or "").strip()
                    if not cell:
                        iteration[metric] = None
                        continue
                    try:
                        iteration[metric] = float(cell)
                    except ValueError:
                        raise SourceFormatError(
                            path, f"line {line_number}: non-numeric value {cell!r} for '{metric}'"
                        ) from None
                measurements.setdefault(test_case, []).append(iteration)
    except OSError as e:
        raise SourceFormatError(path, f"cannot read file ({e.strerror or e})") from e
    except csv.Error as e:
        raise SourceFormatError(path, f"invalid CSV: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceFormatError(path, f"not UTF-8 text ({e.reason} at byte {e.start})") from e

    logger.debug("Loaded measurements for %d test cases from %s", len(measurements), path)
    return InMemoryMeasurementSource(measurements)


def load_measurements(path: PathLike) -> InMemoryMeasurementSource:
    """Load a measurement file, choosing the reader by file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_measurements_json(path)
    if suffix == ".csv":
        return load_measurements_csv(path)
    raise SourceFormatError(path, f"unsupported measurement file type '{suffix}'")


def load_registry_json(path: PathLike) -> InMemoryTestRegistry:
    """Load a test registry stored as ``[{"name", "type", "method"}, ...]``."""
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, list):
        raise SourceFormatError(path, "expected a list of test cases")

    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise SourceFormatError(path, f"entry {index} must be an object")
        try:
            entries.append(
                TestCaseRecord(
                    display_name=item.get("name"),
                    class_name=item.get("type", ""),
                    method=item.get("method", ""),
                )
            )
        except ValidationError as e:
            raise SourceFormatError(path, f"entry {index}: {e.errors()[0]['msg']}") from e

    logger.debug("Loaded %d registry entries from %s", len(entries), path)
    return InMemoryTestRegistry(entries)


__all__ = [
    "TEST_CASE_COLUMN",
    "InMemoryMeasurementSource",
    "InMemoryTestRegistry",
    "load_measurements_json",
    "load_measurements_csv",
    "load_measurements",
    "load_registry_json",
]
