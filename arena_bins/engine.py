"""
Explorer state and the intents that change it.

The state is an immutable value; every user action is an intent passed to
`dispatch`, which returns the next state. `build_view` recomputes everything the
page shows from a state in one pass, so bin listings, search results and the
chart can never disagree.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from arena_bins import bins as bin_ops
from arena_bins.aggregate import (
    bin_means, build_comparison_data, dataset_domain, gap_bar_summary, show_baseline,
)
from arena_bins.bins import Bins
from arena_bins.config import BIN_TITLES
from arena_bins.data import index_catalog, select_win_rate_source
from arena_bins.models import BinTag, ChartDomain, ChartMode, ComparisonDatum, GapBar
from arena_bins.search import filtered_cards, search_rows, top_search_results
from arena_bins.utils import format_domain_note

logger = logging.getLogger(__name__)

EMPTY_SEARCH_MESSAGE = "No cards match these filters in this arena."
EMPTY_CHART_MESSAGE = "No cards in your bins have wins in this arena. Add cards or switch arenas."
EMPTY_BIN_MESSAGE = "No cards yet. Add from the search results."
NO_DATA_MESSAGE = "Card data is not available."


@dataclass(frozen=True)
class Explorer:
    """Read-only context built once from the loaded catalog and arena config."""
    catalog: Tuple[Any, ...]
    arenas: Tuple[str, ...]
    records_by_name: Dict[str, Any]
    rate_source: Any

    @property
    def is_inert(self):
        return not self.catalog or not self.arenas

    @property
    def default_arena(self):
        return self.arenas[-1] if self.arenas else None


@dataclass(frozen=True)
class SearchFilters:
    term: str = ""
    elixir: str = ""
    rarity: str = ""
    card_type: str = ""


@dataclass(frozen=True)
class ExplorerState:
    bins: Bins = field(default_factory=Bins)
    arena: Optional[str] = None
    mode: ChartMode = ChartMode.WINS
    filters: SearchFilters = field(default_factory=SearchFilters)
    bin_titles: Tuple[Tuple[str, str], ...] = tuple(BIN_TITLES.items())

    def title(self, tag):
        return dict(self.bin_titles).get(BinTag(tag).value, "")


# Intents

@dataclass(frozen=True)
class SelectArena:
    name: str

@dataclass(frozen=True)
class ToggleMode:
    mode: ChartMode

@dataclass(frozen=True)
class AddToBin:
    tag: BinTag
    card_name: str

@dataclass(frozen=True)
class RemoveFromBin:
    tag: BinTag
    card_name: str

@dataclass(frozen=True)
class Reset:
    pass

@dataclass(frozen=True)
class Clear:
    pass

@dataclass(frozen=True)
class UpdateFilter:
    term: str = ""
    elixir: str = ""
    rarity: str = ""
    card_type: str = ""

@dataclass(frozen=True)
class RenameBin:
    tag: BinTag
    title: str


@dataclass
class ExplorerView:
    arena: Optional[str]
    mode: ChartMode
    search_results: List[Dict[str, Any]]
    bin_listings: Dict[str, List[str]]
    bin_titles: Dict[str, str]
    data: List[ComparisonDatum]
    domain: ChartDomain
    toxic_mean: Optional[float]
    spell_mean: Optional[float]
    gap_bar: Optional[GapBar]
    baseline: bool
    domain_note: str
    search_message: Optional[str] = None
    chart_message: Optional[str] = None


def create_explorer(catalog, arenas):
    """`arenas` may be config dicts ({"name": ...}) or plain names."""
    catalog = tuple(catalog or ())
    names = []
    for arena in arenas or ():
        name = arena.get("name") if isinstance(arena, dict) else arena
        if name:
            names.append(name)

    if not catalog or not names:
        logger.warning("Explorer has no catalog or no arenas configured, staying empty")

    return Explorer(
        catalog=catalog,
        arenas=tuple(names),
        records_by_name=index_catalog(catalog),
        rate_source=select_win_rate_source(catalog),
    )


def initial_state(explorer):
    return ExplorerState(
        bins=bin_ops.seed_bins(explorer.catalog),
        arena=explorer.default_arena,
    )


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Ignoring unknown {enum_cls.__name__} value: {value!r}")
        return None


def reconcile_state(explorer, state):
    """Point a state whose arena is no longer configured back at the default arena."""
    if state.arena is None or state.arena in explorer.arenas:
        return state
    logger.warning(f"Arena {state.arena} is no longer configured, switching to {explorer.default_arena}")
    return replace(state, arena=explorer.default_arena)


def dispatch(explorer, state, intent):
    """Apply one intent and return the new state. Unknown arenas, modes and bin tags leave it unchanged."""
    if isinstance(intent, SelectArena):
        if intent.name not in explorer.arenas:
            logger.warning(f"Ignoring unknown arena: {intent.name}")
            return state
        return replace(state, arena=intent.name)

    if isinstance(intent, ToggleMode):
        mode = _coerce(ChartMode, intent.mode)
        if mode is None:
            return state
        return replace(state, mode=mode)

    if isinstance(intent, AddToBin):
        tag = _coerce(BinTag, intent.tag)
        if tag is None:
            return state
        return replace(state, bins=bin_ops.add_to_bin(state.bins, tag, intent.card_name))

    if isinstance(intent, RemoveFromBin):
        tag = _coerce(BinTag, intent.tag)
        if tag is None:
            return state
        return replace(state, bins=bin_ops.remove_from_bin(state.bins, tag, intent.card_name))

    if isinstance(intent, Reset):
        return replace(state, bins=bin_ops.reset_to_default(explorer.catalog))

    if isinstance(intent, Clear):
        return replace(state, bins=bin_ops.clear_all())

    if isinstance(intent, UpdateFilter):
        return replace(state, filters=SearchFilters(
            term=intent.term or "",
            elixir="" if intent.elixir is None else str(intent.elixir),
            rarity=intent.rarity or "",
            card_type=intent.card_type or "",
        ))

    if isinstance(intent, RenameBin):
        tag = _coerce(BinTag, intent.tag)
        if tag is None:
            return state
        titles = dict(state.bin_titles)
        titles[tag.value] = intent.title.strip() or BIN_TITLES[tag.value]
        return replace(state, bin_titles=tuple(titles.items()))

    raise TypeError(f"Unknown intent: {intent!r}")


def build_view(explorer, state):
    f = state.filters
    cards = filtered_cards(explorer.catalog, f.term, f.elixir, f.rarity, f.card_type, state.arena)
    results = search_rows(top_search_results(cards), state.bins, state.arena)

    data = build_comparison_data(
        explorer.records_by_name, state.bins, state.arena, state.mode, explorer.rate_source
    )
    domain = dataset_domain(data, state.mode)
    toxic_mean, spell_mean = bin_means(data, state.mode)

    if explorer.is_inert:
        chart_message = NO_DATA_MESSAGE
    elif not data:
        chart_message = EMPTY_CHART_MESSAGE
    else:
        chart_message = None

    return ExplorerView(
        arena=state.arena,
        mode=state.mode,
        search_results=results,
        bin_listings={tag.value: bin_ops.bin_listing(state.bins, tag) for tag in BinTag},
        bin_titles={tag.value: state.title(tag) for tag in BinTag},
        data=data,
        domain=domain,
        toxic_mean=toxic_mean,
        spell_mean=spell_mean,
        gap_bar=gap_bar_summary(toxic_mean, spell_mean),
        baseline=state.mode is ChartMode.WINRATE and show_baseline(domain),
        domain_note=format_domain_note(domain, state.mode),
        search_message=None if results else EMPTY_SEARCH_MESSAGE,
        chart_message=chart_message,
    )
