"""
Common utility functions for data fetching and lightweight helpers used by
multiple pages.

This module contains the network helper (a small requests.Session wrapper
around the Google Sheets values endpoint), the rounding helpers shared by the
statistics code, and UI convenience utilities such as
`selectbox_with_placeholder` used to render a selectbox that can start with a
placeholder text.
"""

# Import libraries
from __future__ import annotations
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import requests
import streamlit as st
from .constants import BASE_URL, USER_AGENT

logger = logging.getLogger(__name__)

Number = Union[int, float]

def safe_rerun() -> None:
    if hasattr(st, "rerun"): st.rerun()
    elif hasattr(st, "experimental_rerun"): st.experimental_rerun()
    else: st.stop()

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT})

def sheets_get(spreadsheet_id: str, sheet_range: str, api_key: str) -> Dict[str, Any]:
    """GET `/{spreadsheet_id}/values/{range}` and return the decoded JSON body."""
    url = f"{BASE_URL.rstrip('/')}/{quote(spreadsheet_id, safe='')}/values/{quote(sheet_range, safe='!:')}"
    logger.debug("GET %s", url)
    resp = SESSION.get(url, params={"key": api_key}, timeout=(10, 20))
    resp.raise_for_status()
    return resp.json()

def round1(value: float) -> float:
    """
    Round to one decimal, halves away from zero.

    Works on the exact binary value of the float (like JavaScript's
    `toFixed(1)`), so 6.25 -> 6.3 where the builtin `round` gives 6.2.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

def pct(part: Number, total: Number) -> Number:
    """Percentage rounded to one decimal; the int 0 when `total` is zero."""
    if not total:
        return 0
    return round1(part / total * 100)

def ratio(part: Number, total: Number) -> Number:
    if not total:
        return 0
    return round1(part / total)

def selectbox_with_placeholder(
    label: str,
    options: List[str],
    key: Optional[str] = None,
    default_index: Optional[int] = None,
):
    """
    A selectbox that can start empty (placeholder) or preselect an item (default_index).
    - Uses a hidden label to avoid duplicate text under the title.
    - Works on older Streamlit as well.
    """
    try:
        return st.selectbox(
            label,
            options=options,
            index=default_index,            # None -> placeholder shown; int -> preselect
            placeholder=label,
            label_visibility="collapsed",
            key=key,
        )
    except TypeError:
        # Older Streamlit versions do not accept `placeholder`. Fall back to
        # inserting a synthetic placeholder item at the front of the list.
        if default_index is None:
            placeholder = f"— {label} —"
            choice = st.selectbox(label, options=[placeholder] + options, index=0, key=key)
            return None if choice == placeholder else choice
        return st.selectbox(label, options=options, index=default_index, key=key)
