"""Locale-independent number formatting for report output."""

import math
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormatOptions(BaseModel):
    """How numbers are rendered into report text.

    Output never depends on the process locale and never contains grouping
    separators.
    """

    model_config = ConfigDict(frozen=True)

    decimal_point: str = Field(default=".", description="Decimal separator")
    nan_text: str = "NaN"
    positive_infinity_text: str = "Infinity"
    negative_infinity_text: str = "-Infinity"

    @field_validator("decimal_point")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1 or value.isdigit():
            raise ValueError("decimal_point must be a single non-digit character")
        return value


INVARIANT = FormatOptions()


def format_number(value: float, options: FormatOptions = INVARIANT) -> str:
    """Render a sample or statistic as shortest round-trip decimal text.

    Integral values drop the trailing ``.0`` and exponents use an upper-case
    ``E`` (``11``, ``0.25``, ``1E+16``). Non-finite values are passed through
    using the option texts.
    """
    value = float(value)
    if math.isnan(value):
        return options.nan_text
    if math.isinf(value):
        return options.positive_infinity_text if value > 0 else options.negative_infinity_text

    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    mantissa = mantissa.replace(".", options.decimal_point)
    if sep:
        return f"{mantissa}E{exponent}"
    return mantissa


def format_count(value: int) -> str:
    """Render an integer count with plain digits."""
    return str(int(value))


__all__ = [
    "FormatOptions",
    "INVARIANT",
    "format_number",
    "format_count",
]
