"""
Diversity group tickets
Group ticketing with diversity-based discounts
"""
import logging
import streamlit as st

from src.services.repository import InMemoryGroupRepository
from src.services.storage_service import load_repository_file
from src.ui.groups_page import render_groups_page
from src.ui.purchase_page import render_purchase_page
from src.utils.settings import get_data_file, get_log_level

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Diversity Group Tickets",
    page_icon="🎟️",
    layout="wide",
    initial_sidebar_state="collapsed"
)


@st.cache_resource
def get_repository() -> InMemoryGroupRepository:
    """Load the seed snapshot once per server process."""
    data_file = get_data_file()
    logger.info(f"Loading seed data from {data_file}")
    return load_repository_file(data_file)


def initialize_session_state():
    """Set session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "purchase"


def apply_custom_css():
    st.markdown("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #0f0c29 0%, #1a1a2e 50%, #16213e 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
            border: none;
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
        }

        .group-card {
            margin-top: 16px;
            margin-bottom: 8px;
        }
        </style>
    """, unsafe_allow_html=True)


def render_navigation():
    nav_col1, nav_col2 = st.columns(2, gap="small")

    with nav_col1:
        if st.button("🎟️ Buy tickets", use_container_width=True, key="nav_purchase"):
            st.session_state.current_page = "purchase"

    with nav_col2:
        if st.button("👥 Groups", use_container_width=True, key="nav_groups"):
            st.session_state.current_page = "groups"


def render_current_page():
    """Render the page selected in session state."""
    try:
        repository = get_repository()

        if st.session_state.current_page == "purchase":
            render_purchase_page(repository)

        elif st.session_state.current_page == "groups":
            render_groups_page(repository)

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back"):
                st.session_state.current_page = "purchase"
                st.rerun()

    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong, please try again")

        with st.expander("🔍 Error details"):
            st.code(str(e))


def main():
    initialize_session_state()
    apply_custom_css()
    render_navigation()
    render_current_page()


if __name__ == "__main__":
    main()
