"""Errors raised while loading the score sheet.

Only whole-refresh failures are errors; a malformed row is never raised, it is
degraded to empty names and zero scores by `common.parsing`.
"""


class SheetDataError(Exception):
    """Base class for failures that abort a refresh."""


class FetchError(SheetDataError):
    """The values endpoint answered with a non-success status or was unreachable."""


class NoDataError(SheetDataError):
    """The sheet returned fewer than two rows (header only, or nothing)."""
