import pytest

from arena_bins.data import rows_to_catalog

ARENAS = [{"name": "Arena One"}, {"name": "Arena Two"}]

CARD_ROWS = [
    {"card_name": "Alpha Knight", "elixir": 5, "rarity": "Legendary", "card_type": "Troop", "bin": "toxic_troop",
     "overall_count": 400, "wins_arena_one": 100, "wins_arena_two": 60, "rwin_arena_one": 0.55, "rwin_arena_two": 0.52},
    {"card_name": "Bolt", "elixir": 2, "rarity": "Common", "card_type": "Spell", "bin": "cheap_spell",
     "overall_count": 200, "wins_arena_one": 40, "wins_arena_two": 80, "rwin_arena_one": 0.48, "rwin_arena_two": 0.50},
    {"card_name": "Crusher", "elixir": 4, "rarity": "Rare", "card_type": "Troop", "bin": "toxic_troop",
     "overall_count": 300, "wins_arena_one": 0, "wins_arena_two": 30, "rwin_arena_one": 0, "rwin_arena_two": 0.45},
    {"card_name": "Dart", "elixir": 2, "rarity": "Common", "card_type": "Spell", "bin": "cheap_spell",
     "overall_count": 100, "wins_arena_one": 40, "wins_arena_two": 20, "rwin_arena_one": 0.51, "rwin_arena_two": 0.49},
    {"card_name": "Ember", "elixir": 3, "rarity": "Epic", "card_type": "Building", "bin": None,
     "overall_count": 250, "wins_arena_one": 70, "wins_arena_two": 10, "rwin_arena_one": 0.50, "rwin_arena_two": 0.50},
    {"card_name": "Fog", "elixir": None, "rarity": "Epic", "card_type": "Spell", "bin": None,
     "overall_count": 50, "wins_arena_one": 5, "wins_arena_two": 0, "rwin_arena_one": 0.40, "rwin_arena_two": 0},
]

@pytest.fixture
def catalog():
    return rows_to_catalog(CARD_ROWS)

@pytest.fixture
def catalog_without_rates():
    rows = [{k: v for k, v in row.items() if not k.startswith("rwin_")} for row in CARD_ROWS]
    return rows_to_catalog(rows)

@pytest.fixture
def arenas():
    return list(ARENAS)
