import logging

import streamlit as st

from arena_bins.data import load_catalog, load_arena_config
from arena_bins.engine import (
    AddToBin, Clear, RemoveFromBin, RenameBin, Reset, SelectArena, ToggleMode, UpdateFilter,
    EMPTY_BIN_MESSAGE, create_explorer, initial_state, dispatch, build_view, reconcile_state,
)
from arena_bins.models import BinTag, ChartMode
from arena_bins.search import facet_options
from arena_bins.visualizations import create_echarts_bin_bars, display_chart
from arena_bins.utils import format_wins

logger = logging.getLogger(__name__)

STATE_KEY = "explorer_state"

@st.cache_data(ttl=3600)
def _get_explorer_inputs():
    return load_catalog(), load_arena_config()

def get_explorer():
    catalog, arenas = _get_explorer_inputs()
    return create_explorer(catalog, arenas)

def _get_state(explorer):
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = initial_state(explorer)
    # The arena config is cached for an hour and may drop the selected arena
    state = reconcile_state(explorer, st.session_state[STATE_KEY])
    if state is not st.session_state[STATE_KEY]:
        st.session_state.pop("explorer_arena", None)
        st.session_state[STATE_KEY] = state
    return state

def _send(explorer, intent):
    st.session_state[STATE_KEY] = dispatch(explorer, st.session_state[STATE_KEY], intent)

def _on_arena_change(explorer):
    _send(explorer, SelectArena(st.session_state["explorer_arena"]))

def _on_mode_change(explorer):
    _send(explorer, ToggleMode(st.session_state["explorer_mode"]))

def _on_filter_change(explorer):
    ss = st.session_state
    _send(explorer, UpdateFilter(
        term=ss.get("explorer_term", ""),
        elixir=ss.get("explorer_elixir") or "",
        rarity=ss.get("explorer_rarity") or "",
        card_type=ss.get("explorer_type") or "",
    ))

def _on_rename(explorer, tag):
    _send(explorer, RenameBin(tag, st.session_state[f"explorer_title_{tag.value}"]))

def render_explorer_page():
    st.header("Build your own comparison")
    st.markdown("Pick an arena, sort cards into the two bins, and see how their wins or win rates compare.")

    explorer = get_explorer()
    if explorer.is_inert:
        st.warning("Card data is not available. Check the catalog and arena configuration files.")
        return

    state = _get_state(explorer)
    facets = facet_options(explorer.catalog)

    with st.expander("Controls", expanded=True):
        col1, col2 = st.columns([1, 2])

        with col1:
            st.markdown("**1. Choose an arena**")
            st.selectbox(
                "Arena",
                options=list(explorer.arenas),
                index=list(explorer.arenas).index(state.arena),
                key="explorer_arena",
                on_change=_on_arena_change,
                args=(explorer,),
            )

        with col2:
            st.markdown("**2. Search & filter cards**")
            st.text_input(
                "Search",
                value=state.filters.term,
                placeholder="Search by name or keyword (e.g. 'Mega', 'spell', 'zap')",
                key="explorer_term",
                on_change=_on_filter_change,
                args=(explorer,),
            )
            f1, f2, f3 = st.columns(3)
            with f1:
                st.selectbox("Elixir", options=[""] + [str(e) for e in facets["elixir"]],
                             format_func=lambda v: f"{v} elixir" if v else "Any elixir",
                             key="explorer_elixir", on_change=_on_filter_change, args=(explorer,))
            with f2:
                st.selectbox("Rarity", options=[""] + facets["rarity"],
                             format_func=lambda v: v or "Any rarity",
                             key="explorer_rarity", on_change=_on_filter_change, args=(explorer,))
            with f3:
                st.selectbox("Type", options=[""] + facets["card_type"],
                             format_func=lambda v: v or "Any type",
                             key="explorer_type", on_change=_on_filter_change, args=(explorer,))

    view = build_view(explorer, st.session_state[STATE_KEY])

    st.subheader("Search results")
    if view.search_message:
        st.info(view.search_message)
    for row in view.search_results:
        c_info, c_toxic, c_spell = st.columns([4, 1, 1])
        with c_info:
            st.markdown(f"**{row['card_name']}** · {format_wins(row['wins'])} wins  \n{row['meta']}")
        with c_toxic:
            in_toxic = row["bin"] == BinTag.TOXIC.value
            st.button(
                "In toxic bin" if in_toxic else "Add to toxic",
                key=f"add_toxic_{row['card_name']}",
                disabled=in_toxic,
                on_click=_send,
                args=(explorer, AddToBin(BinTag.TOXIC, row["card_name"])),
            )
        with c_spell:
            in_spell = row["bin"] == BinTag.SPELL.value
            st.button(
                "In fair bin" if in_spell else "Add to cheap",
                key=f"add_spell_{row['card_name']}",
                disabled=in_spell,
                on_click=_send,
                args=(explorer, AddToBin(BinTag.SPELL, row["card_name"])),
            )

    st.subheader("3. Build your two bins")
    bin_cols = st.columns(2)
    for col, tag in zip(bin_cols, BinTag):
        with col:
            st.text_input(
                "Bin title",
                value=view.bin_titles[tag.value],
                key=f"explorer_title_{tag.value}",
                on_change=_on_rename,
                args=(explorer, tag),
            )
            members = view.bin_listings[tag.value]
            if not members:
                st.caption(EMPTY_BIN_MESSAGE)
            for name in members:
                st.button(
                    f"{name} ×",
                    key=f"remove_{tag.value}_{name}",
                    on_click=_send,
                    args=(explorer, RemoveFromBin(tag, name)),
                )

    r1, r2, _ = st.columns([1, 1, 3])
    with r1:
        st.button("Reset to default bins", on_click=_send, args=(explorer, Reset()))
    with r2:
        st.button("Clear both bins", on_click=_send, args=(explorer, Clear()))

    st.divider()
    st.radio(
        "Chart",
        options=[m.value for m in ChartMode],
        index=[m.value for m in ChartMode].index(view.mode.value),
        format_func=lambda v: "Win Rate" if v == ChartMode.WINRATE.value else "Wins",
        horizontal=True,
        key="explorer_mode",
        on_change=_on_mode_change,
        args=(explorer,),
    )

    if view.chart_message:
        st.info(view.chart_message)
        return

    options = create_echarts_bin_bars(
        view.data,
        view.domain,
        view.mode,
        toxic_mean=view.toxic_mean,
        spell_mean=view.spell_mean,
        baseline=view.baseline,
        titles=view.bin_titles,
    )
    display_chart(options, height="420px")
    st.caption(view.domain_note)
