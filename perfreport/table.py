"""Flat statistics table: one row per (test, metric) pair."""

import csv
import io
from pathlib import Path
from typing import Dict, List, Sequence, Union

from perfreport.formatting import INVARIANT, FormatOptions, format_count, format_number
from perfreport.output import write_text_atomic
from perfreport.schemas import BenchmarkModel
from perfreport.stats import iter_stat_rows


class TableHeader:
    """Fixed column headers of the statistics table."""

    TEST_NAME = "Test Name"
    METRIC = "Metric"
    ITERATIONS = "Iterations"
    AVG = "AVG"
    SD = "SD"
    MIN = "MIN"
    MAX = "MAX"


STATISTICS_COLUMNS = [
    TableHeader.TEST_NAME,
    TableHeader.METRIC,
    TableHeader.ITERATIONS,
    TableHeader.AVG,
    TableHeader.SD,
    TableHeader.MIN,
    TableHeader.MAX,
]


class DataTable:
    """An ordered table of text cells with named columns."""

    def __init__(self, columns: Sequence[str]):
        if len(set(columns)) != len(columns):
            raise ValueError("column names must be unique")
        self.columns: List[str] = list(columns)
        self.rows: List[List[str]] = []

    def append_row(self, values: Sequence[str]) -> None:
        """Append a row; it must have one cell per column."""
        if len(values) != len(self.columns):
            raise ValueError(
                f"row has {len(values)} cells, table has {len(self.columns)} columns"
            )
        self.rows.append([str(v) for v in values])

    def column(self, name: str) -> List[str]:
        """All cells of a column, in row order."""
        index = self.columns.index(name)
        return [row[index] for row in self.rows]

    def to_records(self) -> List[Dict[str, str]]:
        return [dict(zip(self.columns, row)) for row in self.rows]

    def to_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.columns)
        writer.writerows(self.rows)
        return buffer.getvalue()

    def write_csv(self, path: Union[str, Path]) -> Path:
        """Write the table as CSV, replacing ``path`` only on success."""
        return write_text_atomic(path, self.to_csv())

    def to_markdown(self) -> str:
        """Render the table as an aligned markdown table."""
        widths = [len(c) for c in self.columns]
        for row in self.rows:
            widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

        def line(cells):
            return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |"

        lines = [line(self.columns), "|" + "|".join("-" * (w + 2) for w in widths) + "|"]
        lines.extend(line(row) for row in self.rows)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.rows)


def get_statistics(
    benchmark: BenchmarkModel,
    options: FormatOptions = INVARIANT,
    skip_warmup: bool = True,
) -> DataTable:
    """Build the statistics table of a benchmark.

    Args:
        benchmark: Aggregated report model
        options: Number formatting applied to every numeric cell
        skip_warmup: Drop each metric's first sample when more than one exists

    Returns:
        A DataTable with the fixed statistics columns and one row per
        (test, metric) pair that has at least one sample
    """
    table = DataTable(STATISTICS_COLUMNS)
    for row in iter_stat_rows(benchmark, skip_warmup=skip_warmup):
        stats = row.statistics
        table.append_row([
            row.test_name,
            row.metric,
            format_count(stats.count),
            format_number(stats.mean, options),
            format_number(stats.stdev, options),
            format_number(stats.min, options),
            format_number(stats.max, options),
        ])
    return table


__all__ = [
    "TableHeader",
    "STATISTICS_COLUMNS",
    "DataTable",
    "get_statistics",
]
