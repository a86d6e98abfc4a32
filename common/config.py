"""
Configuration for the dashboard.

Three values are required to reach the sheet (API key, spreadsheet id and the
sheet/tab name); the Google Form URL is optional and only controls whether the
"Add Score" toggle is offered.

Values are read from `st.secrets["sheets"]` when a secrets file provides them,
otherwise from environment variables (a `.env` file is loaded by `main.py`):

    TENNIS_API_KEY, TENNIS_SPREADSHEET_ID, TENNIS_SHEET_NAME, TENNIS_FORM_URL

`LOG_LEVEL` picks the logging level for every page (INFO when unset or not a
level name).
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict

import streamlit as st

from common.constants import (
    API_KEY_PLACEHOLDER, SPREADSHEET_ID_PLACEHOLDER, FORM_URL_PLACEHOLDER, DEFAULT_SHEET_NAME,
)


@dataclass(frozen=True)
class DashboardConfig:
    api_key: str = API_KEY_PLACEHOLDER
    spreadsheet_id: str = SPREADSHEET_ID_PLACEHOLDER
    sheet_name: str = DEFAULT_SHEET_NAME
    form_url: str = ""

    @property
    def is_configured(self) -> bool:
        """False when a required value is missing or still a placeholder."""
        if not (self.api_key and self.spreadsheet_id and self.sheet_name):
            return False
        return (self.api_key != API_KEY_PLACEHOLDER
                and self.spreadsheet_id != SPREADSHEET_ID_PLACEHOLDER)

    @property
    def has_form(self) -> bool:
        return bool(self.form_url) and self.form_url != FORM_URL_PLACEHOLDER


def _get_secrets() -> Dict[str, Any]:
    try:
        if "sheets" in st.secrets:
            return dict(st.secrets["sheets"])
    except Exception:
        # st.secrets raises when no secrets.toml exists at all
        pass
    return {}


def load_config() -> DashboardConfig:
    secrets = _get_secrets()

    def _value(key: str, env: str, default: str) -> str:
        if key in secrets:
            return str(secrets[key] or "").strip()
        return os.getenv(env, default).strip()

    return DashboardConfig(
        api_key=_value("api_key", "TENNIS_API_KEY", API_KEY_PLACEHOLDER),
        spreadsheet_id=_value("spreadsheet_id", "TENNIS_SPREADSHEET_ID", SPREADSHEET_ID_PLACEHOLDER),
        sheet_name=_value("sheet_name", "TENNIS_SHEET_NAME", DEFAULT_SHEET_NAME),
        form_url=_value("form_url", "TENNIS_FORM_URL", ""),
    )


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(name: str | None) -> int:
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> int:
    """Configure the root logger from `LOG_LEVEL`; called by every page."""
    level = resolve_log_level(os.getenv("LOG_LEVEL"))
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level
