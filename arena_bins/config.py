import os

DATA_DIR = os.environ.get("ARENA_BINS_DATA_DIR", os.path.join(os.getcwd(), "data"))
CARDS_FILE = os.path.join(DATA_DIR, "cards.csv")
ARENAS_FILE = os.path.join(DATA_DIR, "arenas.json")

# Catalog classification -> bin
DEFAULT_BIN_VALUES = {
    "toxic_troop": "toxic",
    "cheap_spell": "spell",
}

BIN_TITLES = {
    "toxic": "Toxic troop",
    "spell": "Cheap spell",
}

# Chart Configuration
CHART_COLORS = {
    'toxic': '#d62728',
    'spell': '#1f77b4',
    'baseline': '#888888',
    'note': '#555555',
}

ECHARTS_CONFIG = {
    'grid': {'left': '3%', 'right': '4%', 'bottom': '3%', 'top': '14%', 'containLabel': True},
    'axis_label_color': '#aaa',
    'split_line_color': '#333',
}

# Domain scaling
DOMAIN_PAD_RATIO = 0.1
WINRATE_EMPTY_MAX = 0.5
MIN_WINRATE_SPAN = 0.05
MEAN_EPSILON = 1e-6

SEARCH_RESULT_LIMIT = 40

STORY_ARENAS = [
    "Spooky Town",
    "Rascal's Hideout",
    "Serenity Peak",
    "Miner's Mine",
    "Legendary Arena",
]
