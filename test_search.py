from arena_bins.bins import seed_bins
from arena_bins.data import get_wins_for_arena
from arena_bins.search import facet_options, filtered_cards, search_rows, top_search_results

def _names(cards):
    return [c.card_name for c in cards]

def test_cards_without_wins_are_hidden(catalog):
    cards = filtered_cards(catalog, arena="Arena One")
    assert "Crusher" not in _names(cards)
    cards = filtered_cards(catalog, arena="Arena Two")
    assert "Fog" not in _names(cards)

def test_sorted_by_wins_with_stable_ties(catalog):
    cards = filtered_cards(catalog, arena="Arena One")
    # Bolt and Dart tie on 40 wins and keep catalog order
    assert _names(cards) == ["Alpha Knight", "Ember", "Bolt", "Dart", "Fog"]
    wins = [get_wins_for_arena(c, "Arena One") for c in cards]
    assert wins == sorted(wins, reverse=True)

def test_term_matches_name_type_or_rarity(catalog):
    assert _names(filtered_cards(catalog, term="kni", arena="Arena One")) == ["Alpha Knight"]
    assert _names(filtered_cards(catalog, term="spell", arena="Arena One")) == ["Bolt", "Dart", "Fog"]
    assert _names(filtered_cards(catalog, term="EPIC", arena="Arena One")) == ["Ember", "Fog"]

def test_facets_are_exact_matches(catalog):
    assert _names(filtered_cards(catalog, elixir="2", arena="Arena One")) == ["Bolt", "Dart"]
    assert _names(filtered_cards(catalog, elixir=3, arena="Arena One")) == ["Ember"]
    assert _names(filtered_cards(catalog, rarity="Common", arena="Arena One")) == ["Bolt", "Dart"]
    assert _names(filtered_cards(catalog, card_type="Building", arena="Arena One")) == ["Ember"]
    assert filtered_cards(catalog, rarity="common", arena="Arena One") == []

def test_adding_facets_never_grows_results(catalog):
    base = filtered_cards(catalog, arena="Arena One")
    with_type = filtered_cards(catalog, card_type="Spell", arena="Arena One")
    with_type_and_elixir = filtered_cards(catalog, card_type="Spell", elixir="2", arena="Arena One")
    assert len(base) >= len(with_type) >= len(with_type_and_elixir)

def test_no_arena_means_no_results(catalog):
    assert filtered_cards(catalog, arena=None) == []
    assert filtered_cards([], arena="Arena One") == []

def test_truncation_keeps_prefix(catalog):
    cards = filtered_cards(catalog, arena="Arena One")
    assert top_search_results(cards, limit=2) == cards[:2]

def test_facet_options(catalog):
    options = facet_options(catalog)
    assert options["elixir"] == [2, 3, 4, 5]
    assert options["rarity"] == ["Common", "Epic", "Legendary", "Rare"]
    assert options["card_type"] == ["Building", "Spell", "Troop"]

def test_search_rows_report_bin_membership(catalog):
    rows = search_rows(filtered_cards(catalog, arena="Arena One"), seed_bins(catalog), "Arena One")
    by_name = {r["card_name"]: r for r in rows}
    assert by_name["Alpha Knight"]["bin"] == "toxic"
    assert by_name["Bolt"]["bin"] == "spell"
    assert by_name["Ember"]["bin"] is None
    assert by_name["Bolt"]["meta"] == "Spell · Common · 2 elixir"
    assert by_name["Fog"]["meta"] == "Spell · Epic"
