"""End-to-end tests for the perfreport command."""

import csv
import json
import xml.etree.ElementTree as ET

import pytest

from perfreport.cli import main


@pytest.fixture
def inputs(tmp_path):
    registry = tmp_path / "tests.json"
    registry.write_text(json.dumps([
        {"name": "TestA", "type": "NS.ClassA", "method": "MethodA"},
        {"name": "TestB", "type": "NS.ClassB", "method": "MethodB"},
    ]))
    measurements = tmp_path / "run1.json"
    measurements.write_text(json.dumps({
        "TestA": [{"Duration": 100.0}, {"Duration": 10.0}, {"Duration": 12.0}, {"Duration": 11.0}],
    }))
    return registry, measurements


def test_prints_statistics_table(inputs, capsys):
    registry, measurements = inputs
    assert main([str(registry), str(measurements)]) == 0

    out = capsys.readouterr().out
    assert "| Test Name | Metric   | Iterations | AVG | SD | MIN | MAX |" in out
    assert "| TestA     | Duration | 3          | 11  | 1  | 10  | 12  |" in out


def test_writes_xml_and_csv(inputs, tmp_path):
    registry, measurements = inputs
    xml_path = tmp_path / "report.xml"
    csv_path = tmp_path / "stats.csv"

    assert main([
        str(registry), str(measurements),
        "--xml", str(xml_path), "--csv", str(csv_path), "--namespace", "Perf",
    ]) == 0

    root = ET.parse(xml_path).getroot()
    assert root.attrib == {"Name": "run1", "Namespace": "Perf"}
    with open(csv_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[1][:3] == ["TestA", "Duration", "3"]


def test_assembly_layout_and_units(inputs, tmp_path):
    registry, measurements = inputs
    units = tmp_path / "units.json"
    units.write_text(json.dumps({"Duration": "sec"}))
    xml_path = tmp_path / "report.xml"

    assert main([
        str(registry), str(measurements), "--layout", "assembly",
        "--name", "Bench.dll", "--units", str(units), "--xml", str(xml_path),
    ]) == 0

    root = ET.parse(xml_path).getroot()
    assert root.find("assembly").get("name") == "Bench.dll"
    assert root.find(".//metrics/Duration").get("unit") == "sec"


def test_missing_input_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "tests.json"), str(tmp_path / "run.json")]) == 1
    assert "tests.json" in capsys.readouterr().out


def test_unwritable_report_exits_with_error(inputs, tmp_path):
    registry, measurements = inputs
    assert main([
        str(registry), str(measurements), "--xml", str(tmp_path / "missing" / "report.xml"),
    ]) == 1


def test_invalid_decimal_point(inputs):
    registry, measurements = inputs
    assert main([str(registry), str(measurements), "--decimal-point", "ab"]) == 2


def test_non_utf8_measurements_exit_with_error(inputs, tmp_path, capsys):
    registry, _ = inputs
    measurements = tmp_path / "run.csv"
    measurements.write_bytes(b"test,Duration\nT\xff,1.0\n")

    assert main([str(registry), str(measurements)]) == 1
    assert "run.csv" in capsys.readouterr().out


def test_non_utf8_unit_table_exits_with_error(inputs, tmp_path):
    registry, measurements = inputs
    units = tmp_path / "units.json"
    units.write_bytes(b'{"Duration": "\xff"}')

    assert main([str(registry), str(measurements), "--units", str(units)]) == 1


def test_package_logger_does_not_propagate(inputs):
    import logging

    registry, measurements = inputs
    main([str(registry), str(measurements)])
    assert logging.getLogger("perfreport").propagate is False
