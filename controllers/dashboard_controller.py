"""
Refresh lifecycle of the dashboard.

`DashboardController` is built with its collaborators injected: the
configuration, a data source (anything with `fetch_values()`, normally
`SheetsSource`) and a renderer. It decides which of the three views to show:

    - setup instructions, when the configuration is missing (no network call),
    - an error panel, when the last refresh failed,
    - the dashboard, rendered from the current `MatchStatsEngine`.

Key points:
    - `refresh()` is the single error boundary around fetch-and-parse. Any
        exception in there (HTTP, JSON, row mapping) ends the refresh, clears
        the engine and stores one message for the error panel.
    - Refreshes are serialized: if one is already in flight, a new request is
        ignored and the in-flight one decides the outcome.
    - Pages share one controller per browser session through
        `get_controller()`, which keeps it in `st.session_state`.
"""

from __future__ import annotations
import logging
import threading
from typing import Any, List, Optional, Protocol

import streamlit as st

from common.config import DashboardConfig, load_config
from controllers.data_controller import SheetsSource
from controllers.stats_controller import MatchStatsEngine

logger = logging.getLogger(__name__)

SESSION_KEY = "dashboard_controller"


class DataSource(Protocol):
    def fetch_values(self) -> List[List[Any]]: ...


class DashboardRenderer(Protocol):
    def render_setup(self, config: DashboardConfig) -> None: ...
    def render_error(self, message: str) -> None: ...
    def render_dashboard(self, engine: MatchStatsEngine, config: DashboardConfig) -> None: ...


class DashboardController:
    def __init__(self, config: DashboardConfig, source: DataSource,
                 renderer: Optional[DashboardRenderer] = None):
        self.config = config
        self.source = source
        self.renderer = renderer
        self._engine: Optional[MatchStatsEngine] = None
        self._error: Optional[str] = None
        self._refresh_lock = threading.Lock()

    @property
    def engine(self) -> Optional[MatchStatsEngine]:
        return self._engine

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_lock.locked()

    def refresh(self) -> bool:
        """Reload the whole match list. Returns True when a new snapshot was installed."""
        if not self._refresh_lock.acquire(blocking=False):
            logger.warning("Refresh already in progress; ignoring new request")
            return False
        try:
            engine = MatchStatsEngine.from_rows(self.source.fetch_values())
        except Exception as exc:
            logger.error("Refresh failed: %s", exc, exc_info=True)
            self._engine = None
            self._error = str(exc) or exc.__class__.__name__
            return False
        finally:
            self._refresh_lock.release()

        self._engine = engine
        self._error = None
        logger.info("Loaded %d matches", len(engine))
        return True

    def run(self, force_refresh: bool = False, renderer: Optional[DashboardRenderer] = None) -> None:
        renderer = renderer or self.renderer
        if renderer is None:
            raise ValueError("DashboardController.run() needs a renderer")

        if not self.config.is_configured:
            renderer.render_setup(self.config)
            return

        if force_refresh or (self._engine is None and self._error is None):
            self.refresh()

        if self._error is not None:
            renderer.render_error(self._error)
        elif self._engine is not None:
            renderer.render_dashboard(self._engine, self.config)


def get_controller() -> DashboardController:
    """Session-scoped controller; rebuilt when the configuration changes."""
    config = load_config()
    ctrl = st.session_state.get(SESSION_KEY)
    if not isinstance(ctrl, DashboardController) or ctrl.config != config:
        ctrl = DashboardController(config, SheetsSource(config))
        st.session_state[SESSION_KEY] = ctrl
    return ctrl
