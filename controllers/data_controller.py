"""
Data controller that glues the Sheets network helper to the engine.

`SheetsSource` is the data source injected into `DashboardController`. It
knows the spreadsheet coordinates from `DashboardConfig` and returns the raw
`values` rows; parsing them into matches is the engine's job.

All HTTP failures are translated here into `FetchError` so the UI has a single
human-readable message to show.
"""

from __future__ import annotations
import logging
from typing import Any, List

import requests

from common.config import DashboardConfig
from common.constants import FETCH_ERROR_MESSAGE, NO_DATA_MESSAGE
from common.errors import FetchError, NoDataError
from common.utils import sheets_get

logger = logging.getLogger(__name__)


class SheetsSource:
    def __init__(self, config: DashboardConfig):
        self.config = config

    def fetch_values(self) -> List[List[Any]]:
        cfg = self.config
        try:
            data = sheets_get(cfg.spreadsheet_id, cfg.sheet_name, cfg.api_key)
        except requests.RequestException as exc:
            logger.warning("Sheets fetch failed for %s/%s: %s", cfg.spreadsheet_id, cfg.sheet_name, exc)
            raise FetchError(FETCH_ERROR_MESSAGE) from exc

        rows = (data or {}).get("values") or []
        if len(rows) < 2:
            raise NoDataError(NO_DATA_MESSAGE)
        logger.info("Fetched %d rows from sheet %r", len(rows), cfg.sheet_name)
        return rows
