"""Tests for the engine, the Sheets data source and the refresh lifecycle."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from common import utils
from common.config import DashboardConfig
from common.errors import FetchError, NoDataError
from controllers.dashboard_controller import DashboardController
from controllers.data_controller import SheetsSource
from controllers.stats_controller import MatchStatsEngine


HEADER = ["Timestamp", "Email", "Date", "Player 1", "Score 1", "Player 2", "Score 2"]
VALUES = [
    HEADER,
    ["1/1/2024 10:00:00", "a@b.com", "1/1/2024", "A", "6", "B", "2"],
    ["1/2/2024 10:00:00", "a@b.com", "1/2/2024", "A", "3", "B", "6"],
    ["1/3/2024 10:00:00", "a@b.com", "1/3/2024", "A", "7", "B", "5"],
]

CONFIG = DashboardConfig(api_key="key-123", spreadsheet_id="sheet-id", sheet_name="Form Responses 1")


class FakeSource:
    def __init__(self, values: Any = VALUES, error: Exception | None = None):
        self.values = values
        self.error = error
        self.calls = 0

    def fetch_values(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.values


class RecordingRenderer:
    def __init__(self):
        self.calls: list[tuple] = []

    def render_setup(self, config):
        self.calls.append(("setup", config))

    def render_error(self, message):
        self.calls.append(("error", message))

    def render_dashboard(self, engine, config):
        self.calls.append(("dashboard", engine))


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Any:
        return self._payload


# ---------- engine ----------
def test_engine_from_rows_end_to_end() -> None:
    engine = MatchStatsEngine.from_rows(VALUES)
    assert len(engine) == 3
    assert engine.matches[0].date == "1/3/2024"

    a = engine.player_stats("A")
    assert (a.wins, a.losses, a.win_pct, a.games_won, a.games_lost) == (2, 1, 66.7, 16, 13)

    h2h = engine.head_to_head("A", "B")
    assert (h2h.p1_wins, h2h.p2_wins) == (2, 1)
    assert len(engine.head_to_head_matches("A", "B")) == 3

    histories = engine.win_pct_over_time()
    assert set(histories) == {"A", "B"}
    assert [p.date for p in histories["A"].history] == ["1/1/2024", "1/2/2024", "1/3/2024"]


def test_engine_queries_do_not_mutate_snapshot() -> None:
    engine = MatchStatsEngine.from_rows(VALUES)
    before = engine.matches
    engine.leaderboard()
    engine.history_frame()
    engine.win_pct_over_time(["A"])
    assert engine.matches == before
    assert [s.name for s in engine.all_player_stats()] == engine.players()


# ---------- data source ----------
def test_sheets_source_builds_request(monkeypatch) -> None:
    seen: dict[str, Any] = {}

    def fake_get(url, params=None, timeout=None):
        seen["url"] = url
        seen["params"] = params
        return FakeResponse(payload={"range": "x", "values": VALUES})

    monkeypatch.setattr(utils.SESSION, "get", fake_get)
    rows = SheetsSource(CONFIG).fetch_values()

    assert rows == VALUES
    assert seen["url"] == (
        "https://sheets.googleapis.com/v4/spreadsheets/sheet-id/values/Form%20Responses%201"
    )
    assert seen["params"] == {"key": "key-123"}


def test_sheets_source_http_error(monkeypatch) -> None:
    monkeypatch.setattr(utils.SESSION, "get", lambda *a, **k: FakeResponse(status_code=403))
    with pytest.raises(FetchError, match="Failed to fetch data"):
        SheetsSource(CONFIG).fetch_values()


def test_sheets_source_network_error(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(utils.SESSION, "get", boom)
    with pytest.raises(FetchError):
        SheetsSource(CONFIG).fetch_values()


@pytest.mark.parametrize("payload", [{}, {"values": []}, {"values": [HEADER]}])
def test_sheets_source_no_data(monkeypatch, payload) -> None:
    monkeypatch.setattr(utils.SESSION, "get", lambda *a, **k: FakeResponse(payload=payload))
    with pytest.raises(NoDataError, match="No data found in sheet"):
        SheetsSource(CONFIG).fetch_values()


# ---------- controller ----------
def test_unconfigured_routes_to_setup_without_fetching() -> None:
    source, renderer = FakeSource(), RecordingRenderer()
    ctrl = DashboardController(DashboardConfig(), source, renderer)
    ctrl.run()
    assert renderer.calls[0][0] == "setup"
    assert source.calls == 0


def test_first_run_loads_and_renders_dashboard() -> None:
    source, renderer = FakeSource(), RecordingRenderer()
    ctrl = DashboardController(CONFIG, source, renderer)
    ctrl.run()
    ctrl.run()
    assert [c[0] for c in renderer.calls] == ["dashboard", "dashboard"]
    assert source.calls == 1


def test_force_refresh_replaces_engine_wholesale() -> None:
    source = FakeSource()
    ctrl = DashboardController(CONFIG, source, RecordingRenderer())
    ctrl.run()
    first = ctrl.engine
    source.values = VALUES + [["1/4/2024 10:00:00", "a@b.com", "1/4/2024", "A", "1", "C", "6"]]
    ctrl.run(force_refresh=True)
    assert ctrl.engine is not first
    assert len(first) == 3
    assert len(ctrl.engine) == 4


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (FetchError("Failed to fetch data. Check your API key and Spreadsheet ID."),
         "Failed to fetch data. Check your API key and Spreadsheet ID."),
        (NoDataError("No data found in sheet"), "No data found in sheet"),
        (ValueError("bad json"), "bad json"),
    ],
)
def test_any_failure_renders_single_error(error, message) -> None:
    renderer = RecordingRenderer()
    ctrl = DashboardController(CONFIG, FakeSource(error=error), renderer)
    ctrl.run()
    assert renderer.calls == [("error", message)]
    assert ctrl.engine is None


def test_failed_refresh_drops_previous_snapshot() -> None:
    source, renderer = FakeSource(), RecordingRenderer()
    ctrl = DashboardController(CONFIG, source, renderer)
    ctrl.run()
    source.error = FetchError("down")
    ctrl.run(force_refresh=True)
    assert renderer.calls[-1] == ("error", "down")
    assert ctrl.engine is None


def test_row_mapping_error_is_caught() -> None:
    renderer = RecordingRenderer()
    ctrl = DashboardController(CONFIG, FakeSource(values=[HEADER, None]), renderer)
    ctrl.run()
    assert renderer.calls[0][0] == "error"


def test_refresh_while_in_flight_is_ignored() -> None:
    ctrl: DashboardController

    class ReentrantSource(FakeSource):
        def fetch_values(self):
            # a second refresh triggered before the first one settles
            self.nested = ctrl.refresh()
            return super().fetch_values()

    source = ReentrantSource()
    ctrl = DashboardController(CONFIG, source, RecordingRenderer())
    assert ctrl.refresh() is True
    assert source.nested is False
    assert source.calls == 1
    assert not ctrl.is_refreshing


def test_run_requires_a_renderer() -> None:
    with pytest.raises(ValueError):
        DashboardController(CONFIG, FakeSource()).run()
