import streamlit as st
from dotenv import load_dotenv

from controllers.dashboard_controller import get_controller
from common.config import setup_logging
from common.ui import HeadToHeadRenderer, sidebar_header, pop_refresh_request

st.set_page_config(page_title="Head to Head", page_icon="👥", layout="wide")
load_dotenv(override=False)
setup_logging()


def main():
    controller = get_controller()
    sidebar_header(controller.config, show_custom_nav=True)

    with st.spinner("Loading matches..."):
        controller.run(force_refresh=pop_refresh_request(), renderer=HeadToHeadRenderer())

if __name__ == "__main__":
    main()
