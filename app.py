
import streamlit as st
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

st.set_page_config(
    page_title="Toxic Troops vs. Cheap Spells",
    page_icon="crossed_swords",
    layout="wide",
    initial_sidebar_state="expanded",
)

from arena_bins.ui_story import render_story_page
from arena_bins.ui_explorer import render_explorer_page

def main():
    st.sidebar.title("Navigation")

    # Sync with query param
    qp = st.query_params
    default_page = qp.get("page", "story")

    pages = ["Arena Story", "Bin Explorer"]
    page_to_idx = {"story": 0, "explorer": 1}
    idx = page_to_idx.get(default_page, 0)

    page = st.sidebar.radio("Go to", pages, index=idx)

    if page == "Arena Story":
        st.query_params["page"] = "story"
        render_story_page()
    elif page == "Bin Explorer":
        st.query_params["page"] = "explorer"
        render_explorer_page()

if __name__ == "__main__":
    main()
