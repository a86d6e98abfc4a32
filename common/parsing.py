"""
Row normalization for the score sheet.

The sheet is filled by a Google Form, so depending on how it was set up a row
may or may not start with a submission timestamp and/or the submitter's email
before the columns we care about:

    [timestamp?] [email?] date  player1  score1  player2  score2

There is no schema to tell us which, so `infer_date_column` guesses from the
first two cells. Everything downstream only sees `Match` objects.

Malformed rows never raise: missing cells become empty names and zero scores.
"""

from __future__ import annotations
import logging
import re
from typing import Any, List, Sequence

from common.constants import NO_DATA_MESSAGE
from common.errors import NoDataError
from models.match_model import Match

logger = logging.getLogger(__name__)

# Leading integer, the way a form-entered score is usually typed ("6", " 6 ", "6 games"),
# or hex with a 0x prefix
_LEADING_INT = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(\d+))")

# date, player1, score1, player2, score2
BARE_ROW_WIDTH = 5


def _cell(row: Sequence[Any], idx: int) -> str:
    """Cell `idx` as a string, '' when the row is too short or the cell is empty."""
    if idx < len(row) and row[idx] is not None:
        return str(row[idx])
    return ""


def infer_date_column(row: Sequence[Any]) -> int:
    """
    Guess which column holds the match date.

      - cell 0 looks like a timestamp or an email ('/' or '@')  -> a prefix exists:
          * cell 1 looks like a date ('/')   -> date is column 1
          * otherwise (timestamp + email)    -> date is column 2
      - otherwise                                             -> date is column 0

    One exception to the prefix rule: a bare date in cell 0 followed by a plain
    name (no '/' or '@') in a row of at most five cells is an unprefixed row,
    so the date is column 0.
    """
    first = _cell(row, 0)
    if first and ("@" in first or "/" in first):
        second = _cell(row, 1)
        if "/" in second:
            return 1
        if "@" in first or "@" in second or len(row) > BARE_ROW_WIDTH:
            return 2
    return 0


def parse_score(value: Any) -> int:
    """Leading integer of `value` (decimal, or hex after 0x); 0 when there is none ('', 'n/a', None...)."""
    if value is None:
        return 0
    m = _LEADING_INT.match(str(value))
    if not m:
        return 0
    sign, hex_digits, digits = m.groups()
    n = int(hex_digits, 16) if hex_digits else int(digits)
    return -n if sign == "-" else n


def normalize_row(row: Sequence[Any]) -> Match:
    date_col = infer_date_column(row)
    return Match(
        date=_cell(row, date_col),
        player1=_cell(row, date_col + 1),
        score1=parse_score(_cell(row, date_col + 2)),
        player2=_cell(row, date_col + 3),
        score2=parse_score(_cell(row, date_col + 4)),
    )


def parse_sheet_values(values: Sequence[Sequence[Any]] | None) -> List[Match]:
    """
    Turn the raw `values` payload into matches, newest first.

    Row 0 is the header and is dropped. The form appends new answers at the
    bottom of the sheet, so the data rows are reversed.
    """
    if not values or len(values) < 2:
        raise NoDataError(NO_DATA_MESSAGE)

    matches = [normalize_row(row) for row in values[1:]]
    matches.reverse()
    logger.info("Parsed %d match rows", len(matches))
    return matches
