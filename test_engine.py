import pytest

from arena_bins.engine import (
    AddToBin, Clear, RemoveFromBin, RenameBin, Reset, SelectArena, ToggleMode, UpdateFilter,
    EMPTY_CHART_MESSAGE, EMPTY_SEARCH_MESSAGE, NO_DATA_MESSAGE,
    build_view, create_explorer, dispatch, initial_state, reconcile_state,
)
from arena_bins.models import BinTag, ChartMode, GapLabel

@pytest.fixture
def explorer(catalog, arenas):
    return create_explorer(catalog, arenas)

@pytest.fixture
def state(explorer):
    return initial_state(explorer)

def test_initial_state_defaults_to_highest_arena(explorer, state):
    assert explorer.default_arena == "Arena Two"
    assert state.arena == "Arena Two"
    assert state.mode is ChartMode.WINS
    assert state.bins.toxic == ("Alpha Knight", "Crusher")

def test_view_for_default_state(explorer, state):
    view = build_view(explorer, state)
    assert [d.card_name for d in view.data] == ["Bolt", "Alpha Knight", "Crusher", "Dart"]
    assert view.toxic_mean == 45
    assert view.spell_mean == 50
    assert view.gap_bar.label is GapLabel.SPELL_HIGHER
    assert view.bin_listings == {"toxic": ["Alpha Knight", "Crusher"], "spell": ["Bolt", "Dart"]}
    assert view.bin_titles == {"toxic": "Toxic troop", "spell": "Cheap spell"}
    assert view.chart_message is None
    assert view.domain_note.endswith("wins")
    assert not view.baseline

def test_select_arena(explorer, state):
    state = dispatch(explorer, state, SelectArena("Arena One"))
    assert state.arena == "Arena One"
    assert dispatch(explorer, state, SelectArena("Nowhere")) == state

def test_toggle_mode_accepts_strings(explorer, state):
    state = dispatch(explorer, state, ToggleMode("winrate"))
    assert state.mode is ChartMode.WINRATE
    view = build_view(explorer, state)
    assert [d.card_name for d in view.data] == ["Alpha Knight", "Bolt", "Dart", "Crusher"]
    assert view.baseline
    assert view.domain_note.startswith("Zoomed scale:")

def test_add_and_remove_recompute_everything(explorer, state):
    state = dispatch(explorer, state, AddToBin(BinTag.SPELL, "Alpha Knight"))
    view = build_view(explorer, state)
    assert "Alpha Knight" in view.bin_listings["spell"]
    assert "Alpha Knight" not in view.bin_listings["toxic"]
    assert next(d for d in view.data if d.card_name == "Alpha Knight").bin_tag is BinTag.SPELL
    row = next(r for r in view.search_results if r["card_name"] == "Alpha Knight")
    assert row["bin"] == "spell"

    state = dispatch(explorer, state, RemoveFromBin(BinTag.SPELL, "Alpha Knight"))
    view = build_view(explorer, state)
    assert "Alpha Knight" not in view.bin_listings["spell"]
    assert all(d.card_name != "Alpha Knight" for d in view.data)

def test_unknown_bin_member_is_listed_but_not_charted(explorer, state):
    state = dispatch(explorer, state, AddToBin(BinTag.TOXIC, "Ghost"))
    view = build_view(explorer, state)
    assert "Ghost" in view.bin_listings["toxic"]
    assert all(d.card_name != "Ghost" for d in view.data)

def test_clear_then_reset(explorer, state):
    cleared = dispatch(explorer, state, Clear())
    view = build_view(explorer, cleared)
    assert view.data == []
    assert view.toxic_mean is None
    assert view.gap_bar is None
    assert view.chart_message == EMPTY_CHART_MESSAGE

    restored = dispatch(explorer, cleared, Reset())
    assert restored.bins == state.bins

def test_empty_toxic_bin_omits_gap_bar(explorer, state):
    for name in state.bins.toxic:
        state = dispatch(explorer, state, RemoveFromBin(BinTag.TOXIC, name))
    view = build_view(explorer, state)
    assert view.toxic_mean is None
    assert view.spell_mean == 50
    assert view.gap_bar is None

def test_update_filter(explorer, state):
    state = dispatch(explorer, state, UpdateFilter(term="spell"))
    view = build_view(explorer, state)
    assert [r["card_name"] for r in view.search_results] == ["Bolt", "Dart"]

    state = dispatch(explorer, state, UpdateFilter(term="zzz"))
    view = build_view(explorer, state)
    assert view.search_results == []
    assert view.search_message == EMPTY_SEARCH_MESSAGE

def test_rename_bin(explorer, state):
    state = dispatch(explorer, state, RenameBin(BinTag.TOXIC, "Annoying cards"))
    assert build_view(explorer, state).bin_titles["toxic"] == "Annoying cards"
    state = dispatch(explorer, state, RenameBin(BinTag.TOXIC, "   "))
    assert build_view(explorer, state).bin_titles["toxic"] == "Toxic troop"

def test_dispatch_does_not_mutate(explorer, state):
    before = state
    dispatch(explorer, state, Clear())
    assert state == before
    assert state.bins.toxic == ("Alpha Knight", "Crusher")

def test_unknown_intent_is_rejected(explorer, state):
    with pytest.raises(TypeError):
        dispatch(explorer, state, "reset")

@pytest.mark.parametrize("intent", [
    ToggleMode("bogus"),
    AddToBin("bogus", "Ember"),
    RemoveFromBin("bogus", "Alpha Knight"),
    RenameBin("bogus", "Whatever"),
])
def test_unknown_mode_or_tag_leaves_state_unchanged(explorer, state, intent):
    assert dispatch(explorer, state, intent) is state

def test_string_tags_are_accepted(explorer, state):
    state = dispatch(explorer, state, AddToBin("spell", "Ember"))
    assert "Ember" in state.bins.spell

def test_reconcile_state_after_arena_removed(catalog, arenas, state):
    assert state.arena == "Arena Two"
    shrunk = create_explorer(catalog, arenas[:1])
    fixed = reconcile_state(shrunk, state)
    assert fixed.arena == "Arena One"
    assert fixed.bins == state.bins
    assert reconcile_state(shrunk, fixed) is fixed

@pytest.mark.parametrize("catalog_rows,arena_list", [([], [{"name": "Arena One"}]), (None, None)])
def test_missing_inputs_leave_explorer_inert(catalog_rows, arena_list):
    explorer = create_explorer(catalog_rows, arena_list)
    state = initial_state(explorer)
    assert explorer.is_inert
    view = build_view(explorer, state)
    assert view.search_results == []
    assert view.data == []
    assert view.gap_bar is None
    assert view.chart_message == NO_DATA_MESSAGE

def test_catalog_without_arenas_is_inert(catalog):
    explorer = create_explorer(catalog, [])
    state = initial_state(explorer)
    assert state.arena is None
    view = build_view(explorer, state)
    assert view.search_results == []
    assert view.data == []
