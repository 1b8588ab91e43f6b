import streamlit as st

from arena_bins.config import STORY_ARENAS, BIN_TITLES
from arena_bins.models import ChartMode
from arena_bins.story import (
    NO_ARENA_DATA_MESSAGE, build_story_summaries, clamp_slide_index, next_slide_index,
    previous_slide_index, story_slides,
)
from arena_bins.ui_explorer import get_explorer, render_explorer_page
from arena_bins.utils import format_domain_note
from arena_bins.visualizations import create_echarts_bin_bars, create_echarts_gap_bar, display_chart

SLIDE_KEY = "story_slide"

def _go(index):
    st.session_state[SLIDE_KEY] = index

def _render_arena_slide(summary):
    st.subheader(summary.arena)
    if summary.is_empty:
        st.info(NO_ARENA_DATA_MESSAGE)
        return

    options = create_echarts_bin_bars(
        list(summary.data),
        summary.domain,
        ChartMode.WINS,
        toxic_mean=summary.toxic_mean,
        spell_mean=summary.spell_mean,
        titles=BIN_TITLES,
    )
    display_chart(options, height="380px")
    display_chart(create_echarts_gap_bar(summary.gap_bar, titles=BIN_TITLES), height="90px")
    st.caption(format_domain_note(summary.domain, ChartMode.WINS))

def render_story_page():
    slides = story_slides()
    count = len(slides)

    # Sync with query param
    qp = st.query_params
    if SLIDE_KEY not in st.session_state:
        try:
            st.session_state[SLIDE_KEY] = int(qp.get("slide", 0))
        except ValueError:
            st.session_state[SLIDE_KEY] = 0
    index = clamp_slide_index(st.session_state[SLIDE_KEY], count)
    st.session_state[SLIDE_KEY] = index
    st.query_params["slide"] = index

    nav = st.columns(count)
    for i, (col, name) in enumerate(zip(nav, slides)):
        with col:
            label = {"intro": "Intro", "explorer": "Explore"}.get(name, name)
            st.button(label, key=f"nav_{i}", type="primary" if i == index else "secondary",
                      on_click=_go, args=(i,))

    current = slides[index]
    if current == "intro":
        st.header("Toxic troops vs. cheap spells")
        st.markdown(
            "Do the cards players love to hate actually win more as you climb? "
            f"Follow the two bins through {len(STORY_ARENAS)} arenas, then build your own comparison."
        )
    elif current == "explorer":
        render_explorer_page()
    else:
        summaries = {s.arena: s for s in build_story_summaries(get_explorer())}
        _render_arena_slide(summaries[current])

    prev_col, _, next_col = st.columns([1, 4, 1])
    with prev_col:
        st.button("← Back", disabled=index == 0,
                  on_click=_go, args=(previous_slide_index(index, count),))
    with next_col:
        # No hint to advance on the final slide
        if index < count - 1:
            st.button("Next →", on_click=_go, args=(next_slide_index(index, count),))
