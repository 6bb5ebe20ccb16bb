"""Tests for the file-backed collaborators."""

import json

import pytest

from perfreport.errors import SourceFormatError
from perfreport.sources import (
    InMemoryTestRegistry,
    load_measurements,
    load_measurements_csv,
    load_measurements_json,
    load_registry_json,
)


def test_load_measurements_json(tmp_path):
    path = tmp_path / "results.json"
    path.write_text(json.dumps({
        "TestA": [{"Duration": 100}, {"Duration": 10.5, "Allocated": None}],
        "TestB": None,
    }))
    source = load_measurements_json(path)

    assert source.test_cases == ["TestA", "TestB"]
    assert list(source.get_values("TestA")) == [
        {"Duration": 100.0},
        {"Duration": 10.5, "Allocated": None},
    ]
    assert source.get_values("TestB") is None
    assert source.get_values("Missing") is None


@pytest.mark.parametrize("payload", [
    [],
    {"TestA": {"Duration": 1}},
    {"TestA": [1.0]},
    {"TestA": [{"Duration": "fast"}]},
    {"TestA": [{"Duration": True}]},
])
def test_malformed_json_measurements(tmp_path, payload):
    path = tmp_path / "results.json"
    path.write_text(json.dumps(payload))
    with pytest.raises(SourceFormatError):
        load_measurements_json(path)


def test_invalid_json_reports_path(tmp_path):
    path = tmp_path / "results.json"
    path.write_text("{not json")
    with pytest.raises(SourceFormatError, match="results.json"):
        load_measurements_json(path)


def test_load_measurements_csv(tmp_path):
    path = tmp_path / "results.csv"
    path.write_text(
        "test,Duration,Allocated\n"
        "TestA,100,\n"
        "TestA,10,2048\n"
        "TestB,5.5,\n"
    )
    source = load_measurements_csv(path)

    assert source.test_cases == ["TestA", "TestB"]
    assert list(source.get_values("TestA")) == [
        {"Duration": 100.0, "Allocated": None},
        {"Duration": 10.0, "Allocated": 2048.0},
    ]


def test_csv_without_test_column(tmp_path):
    path = tmp_path / "results.csv"
    path.write_text("name,Duration\nTestA,1\n")
    with pytest.raises(SourceFormatError, match="test"):
        load_measurements_csv(path)


def test_csv_with_non_numeric_cell(tmp_path):
    path = tmp_path / "results.csv"
    path.write_text("test,Duration\nTestA,slow\n")
    with pytest.raises(SourceFormatError, match="line 2"):
        load_measurements_csv(path)


def test_load_measurements_dispatches_on_suffix(tmp_path):
    path = tmp_path / "results.txt"
    path.write_text("")
    with pytest.raises(SourceFormatError):
        load_measurements(path)


def test_missing_measurement_file(tmp_path):
    with pytest.raises(SourceFormatError):
        load_measurements(tmp_path / "absent.csv")


def test_load_registry_json(tmp_path):
    path = tmp_path / "tests.json"
    path.write_text(json.dumps([
        {"name": "TestA", "type": "NS.ClassA", "method": "MethodA"},
        {"name": "TestB"},
    ]))
    registry = load_registry_json(path)

    assert isinstance(registry, InMemoryTestRegistry)
    assert [(e.display_name, e.class_name, e.method) for e in registry.entries] == [
        ("TestA", "NS.ClassA", "MethodA"),
        ("TestB", "", ""),
    ]


def test_registry_entry_without_name(tmp_path):
    path = tmp_path / "tests.json"
    path.write_text(json.dumps([{"type": "NS.ClassA"}]))
    with pytest.raises(SourceFormatError, match="entry 0"):
        load_registry_json(path)


def test_csv_that_is_not_utf8(tmp_path):
    path = tmp_path / "results.csv"
    path.write_bytes(b"test,Duration\nT\xff,1.0\n")
    with pytest.raises(SourceFormatError, match="results.csv"):
        load_measurements_csv(path)


def test_json_that_is_not_utf8(tmp_path):
    path = tmp_path / "results.json"
    path.write_bytes(b'{"T\xff": [{"Duration": 1.0}]}')
    with pytest.raises(SourceFormatError, match="results.json"):
        load_measurements_json(path)
