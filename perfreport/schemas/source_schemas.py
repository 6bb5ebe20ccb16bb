"""Collaborator interfaces consumed by the aggregator.

The aggregator never parses raw result files itself. It reads test case
metadata from a ``TestRegistry`` and per-iteration samples from a
``MeasurementSource``; concrete implementations live in ``perfreport.sources``.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

# One iteration's samples. A ``None`` value records that the metric was
# collected for the iteration without producing a value.
IterationSamples = Mapping[str, Optional[float]]


class TestCaseRecord(BaseModel):
    """A logical test case known to the test registry."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(description="Test case identifier used to join measurements")
    class_name: str = Field(default="", description="Enclosing type name")
    method: str = ""


class TestRegistry(ABC):
    """Supplies the logical test cases measurements are attributed to."""

    __test__ = False

    @property
    @abstractmethod
    def entries(self) -> List[TestCaseRecord]:
        """Test case records, in registry order."""
        pass


class MeasurementSource(ABC):
    """Supplies raw per-iteration samples keyed by test case name."""

    @property
    @abstractmethod
    def test_cases(self) -> List[str]:
        """Names of the test cases that have measurements."""
        pass

    @abstractmethod
    def get_values(self, test_case: str) -> Optional[Iterable[IterationSamples]]:
        """Ordered iteration samples for a test case.

        Args:
            test_case: Test case name as listed by ``test_cases``

        Returns:
            One mapping of metric name to sample per iteration, or None when
            the source holds nothing for the test case
        """
        pass


__all__ = [
    "IterationSamples",
    "TestCaseRecord",
    "TestRegistry",
    "MeasurementSource",
]
