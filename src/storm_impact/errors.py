"""Error types raised by the storm impact pipelines.

Each failure the report can hit is surfaced as its own exception instead
of letting bad data flow silently into the aggregates.  They subclass the
matching builtin so callers that already catch ``ValueError`` or
``RuntimeError`` keep working.
"""

from __future__ import annotations


class StormReportError(Exception):
    """Base class for all report failures."""


class DownloadError(StormReportError, RuntimeError):
    """The raw dataset could not be fetched from its source URL."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class DateParseError(StormReportError, ValueError):
    """One or more begin dates are missing or do not match the expected format."""

    def __init__(self, column: str, date_format: str, n_bad: int, samples: list) -> None:
        self.column = column
        self.date_format = date_format
        self.n_bad = n_bad
        self.samples = samples
        super().__init__(
            f"{column}: {n_bad:,} values do not match format {date_format!r}. "
            f"Samples: {samples}"
        )


class UnmappedMagnitudeCodeError(StormReportError, ValueError):
    """A magnitude code has no entry in its multiplier table."""

    def __init__(self, column: str, codes: list[str], n_rows: int) -> None:
        self.column = column
        self.codes = codes
        self.n_rows = n_rows
        super().__init__(
            f"{column}: {n_rows:,} rows use magnitude codes with no multiplier: {codes}"
        )
