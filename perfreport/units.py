"""Unit inference for metric descriptors.

The unit attached to a metric is a best-effort guess: the measurement source
only supplies metric names, so the unit is derived from the name alone.
``infer_unit`` is the default policy; a ``UnitTable`` can be passed to the
aggregator wherever a caller knows the units of its own metrics.
"""

from typing import Callable, Dict, Mapping, Optional


class PerformanceMetricUnits:
    """Unit labels written to the ``unit`` attribute of metric descriptors."""

    MILLISECONDS = "msec"
    BYTES = "bytes"
    COUNT = "count"
    UNKNOWN = "unknown"


DURATION_METRIC = "Duration"

DEFAULT_UNITS: Dict[str, str] = {
    DURATION_METRIC: PerformanceMetricUnits.MILLISECONDS,
}

UnitPolicy = Callable[[str], str]


def infer_unit(metric_name: str) -> str:
    """Guess the unit of a metric from its name.

    Only the metric literally named ``Duration`` is recognized (as
    milliseconds); every other name resolves to the unknown unit.
    """
    return DEFAULT_UNITS.get(metric_name, PerformanceMetricUnits.UNKNOWN)


class UnitTable:
    """Caller-supplied metric name to unit mapping, usable as a unit policy."""

    def __init__(
        self,
        units: Optional[Mapping[str, str]] = None,
        fallback: str = PerformanceMetricUnits.UNKNOWN,
        include_defaults: bool = True,
    ):
        self.units: Dict[str, str] = dict(DEFAULT_UNITS) if include_defaults else {}
        if units:
            self.units.update(units)
        self.fallback = fallback

    def __call__(self, metric_name: str) -> str:
        return self.units.get(metric_name, self.fallback)

    def __repr__(self) -> str:
        return f"UnitTable({self.units!r}, fallback={self.fallback!r})"


__all__ = [
    "PerformanceMetricUnits",
    "DURATION_METRIC",
    "DEFAULT_UNITS",
    "UnitPolicy",
    "infer_unit",
    "UnitTable",
]
