"""Exception types raised by the report pipeline."""


class PerfReportError(Exception):
    """Base class for all perfreport errors."""


class SourceFormatError(PerfReportError, ValueError):
    """A measurement or registry input could not be read."""

    def __init__(self, path, message: str):
        self.path = str(path)
        super().__init__(f"{self.path}: {message}")


class ReportError(PerfReportError):
    """The report model cannot be rendered."""


class ReportWriteError(ReportError):
    """The rendered report could not be written to its destination."""


class UnsupportedOperationError(PerfReportError, NotImplementedError):
    """Raised for operations the report format deliberately does not offer."""


__all__ = [
    "PerfReportError",
    "SourceFormatError",
    "ReportError",
    "ReportWriteError",
    "UnsupportedOperationError",
]
