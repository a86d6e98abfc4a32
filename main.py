"""
Main application entry for the Tennis Dashboard Streamlit app.

This module defines the top-level Streamlit page that users see when they
open the app. It handles:
    - application configuration (`st.set_page_config`),
    - environment variable loading via `python-dotenv` and logging setup,
    - the sidebar (refresh button, "Add Score" toggle, page links) from
        `common.ui`,
    - handing control to the session's `DashboardController`, which decides
        between the setup instructions, the error panel and the dashboard.

This file only composes logic from helper modules; fetching, parsing and the
statistics live under `controllers/` and `common/`.

Notes:
    - Session state: the controller (and therefore the loaded match list) is
        kept in `st.session_state`, so switching pages does not refetch the
        sheet. Only the Refresh / Retry buttons do.
"""

# Import libraries
import streamlit as st
from dotenv import load_dotenv

from controllers.dashboard_controller import get_controller
from common.config import setup_logging
from common.ui import StreamlitRenderer, sidebar_header, pop_refresh_request

# Configure Streamlit page and load environment variables from `.env`.
st.set_page_config(page_title="Tennis Dashboard", page_icon="🎾", layout="wide")
load_dotenv(override=False)
setup_logging()

def main():
    controller = get_controller()
    sidebar_header(controller.config, show_custom_nav=True)

    with st.spinner("Loading matches..."):
        controller.run(force_refresh=pop_refresh_request(), renderer=StreamlitRenderer())

if __name__ == "__main__":
    main()
