"""Shared fixtures for perfreport tests."""

import pytest

from perfreport.sources import InMemoryMeasurementSource, InMemoryTestRegistry


@pytest.fixture
def registry():
    return InMemoryTestRegistry([
        {"display_name": "TestA", "class_name": "NS.ClassA", "method": "MethodA"},
        {"display_name": "TestB", "class_name": "NS.ClassB", "method": "MethodB"},
    ])


@pytest.fixture
def duration_source():
    """TestA with a slow warmup iteration followed by three steady ones."""
    return InMemoryMeasurementSource({
        "TestA": [
            {"Duration": 100.0},
            {"Duration": 10.0},
            {"Duration": 12.0},
            {"Duration": 11.0},
        ],
    })
