import pandas as pd

from arena_bins.bins import bin_of
from arena_bins.config import SEARCH_RESULT_LIMIT
from arena_bins.data import get_wins_for_arena

def _is_set(value):
    return value is not None and str(value) != ""

def _matches_term(record, term):
    name = record.card_name.lower()
    card_type = (record.card_type or "").lower()
    rarity = (record.rarity or "").lower()
    return term in name or term in card_type or term in rarity

def filtered_cards(catalog, term="", elixir="", rarity="", card_type="", arena=None):
    """
    Cards with wins in `arena`, narrowed by the search term and facets, sorted by
    wins (descending). Ties keep catalog order.
    """
    if not arena:
        return []

    filtered = [r for r in catalog if get_wins_for_arena(r, arena) > 0]

    term = (term or "").lower()
    if term:
        filtered = [r for r in filtered if _matches_term(r, term)]

    if _is_set(elixir):
        wanted = pd.to_numeric(str(elixir), errors="coerce")
        filtered = [r for r in filtered if r.elixir is not None and r.elixir == wanted]

    if _is_set(rarity):
        filtered = [r for r in filtered if r.rarity == rarity]

    if _is_set(card_type):
        filtered = [r for r in filtered if r.card_type == card_type]

    # sorted() is stable
    return sorted(filtered, key=lambda r: get_wins_for_arena(r, arena), reverse=True)

def top_search_results(cards, limit=SEARCH_RESULT_LIMIT):
    return cards[:limit]

def facet_options(catalog):
    """Sorted unique values for the elixir, rarity and type dropdowns."""
    elixirs = sorted({r.elixir for r in catalog if r.elixir is not None})
    rarities = sorted({r.rarity for r in catalog if r.rarity})
    types = sorted({r.card_type for r in catalog if r.card_type})
    return {"elixir": elixirs, "rarity": rarities, "card_type": types}

def search_rows(cards, bins, arena):
    """Result rows for display, with current bin membership for the add buttons."""
    rows = []
    for record in cards:
        tag = bin_of(bins, record.card_name)
        meta = [p for p in (record.card_type, record.rarity) if p]
        if record.elixir is not None:
            meta.append(f"{record.elixir} elixir")
        rows.append({
            "card_name": record.card_name,
            "wins": get_wins_for_arena(record, arena),
            "meta": " · ".join(meta),
            "bin": tag.value if tag else None,
        })
    return rows
