import json
import logging
import math
import os
import re

import pandas as pd

from arena_bins.config import CARDS_FILE, ARENAS_FILE
from arena_bins.models import CardRecord

logger = logging.getLogger(__name__)

WINS_PREFIX = "wins_"
RATE_PREFIX = "rwin_"

_CATALOG_CACHE = None
_ARENAS_CACHE = None

def arena_slug(arena_name):
    """'Rascal's Hideout' -> 'rascal_s_hideout'"""
    return re.sub(r"[^a-z0-9]+", "_", (arena_name or "").lower()).strip("_")

def _number(value):
    """Coerce a catalog cell to a non-negative float. Blank, NaN and junk read as 0."""
    if value is None:
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(num) or num < 0:
        return 0.0
    return num

def _text(value):
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    value = str(value).strip()
    return value or None

def _elixir(value):
    if value is None:
        return None
    num = pd.to_numeric(value, errors="coerce")
    if pd.isna(num):
        return None
    if not float(num).is_integer():
        logger.warning(f"Ignoring non-integral elixir cost: {value}")
        return None
    return int(num)

def rows_to_catalog(rows):
    """
    Build CardRecords from raw catalog rows (dicts keyed by CSV column).

    Rows without a card name are dropped; for duplicate names the first row wins.
    """
    catalog = []
    seen = set()
    for row in rows:
        name = _text(row.get("card_name"))
        if not name:
            logger.warning(f"Skipping catalog row without card_name: {row}")
            continue
        if name in seen:
            logger.warning(f"Duplicate catalog entry for {name}, keeping the first one")
            continue
        seen.add(name)

        stats = {
            col: _number(val)
            for col, val in row.items()
            if isinstance(col, str) and (col.startswith(WINS_PREFIX) or col.startswith(RATE_PREFIX))
        }
        catalog.append(CardRecord(
            card_name=name,
            elixir=_elixir(row.get("elixir")),
            rarity=_text(row.get("rarity")),
            card_type=_text(row.get("card_type")),
            default_bin=_text(row.get("bin")),
            overall_count=_number(row.get("overall_count")),
            stats=stats,
        ))
    return catalog

def load_catalog(path=None, force_refresh=False):
    """Load the card catalog CSV. Returns [] (and logs) if it is missing or unreadable."""
    global _CATALOG_CACHE
    use_cache = path is None
    if use_cache and _CATALOG_CACHE is not None and not force_refresh:
        return _CATALOG_CACHE

    path = path or CARDS_FILE
    if not os.path.exists(path):
        logger.error(f"Card catalog not found at {path}")
        return []

    try:
        df = pd.read_csv(path)
    except Exception as e:
        logger.error(f"Error loading card catalog: {e}")
        return []

    catalog = rows_to_catalog(df.to_dict(orient="records"))
    logger.info(f"Loaded {len(catalog)} cards from {path}")
    if use_cache:
        _CATALOG_CACHE = catalog
    return catalog

def load_arena_config(path=None, force_refresh=False):
    """Load the ordered arena list (lowest to highest). Returns [] on any problem."""
    global _ARENAS_CACHE
    use_cache = path is None
    if use_cache and _ARENAS_CACHE is not None and not force_refresh:
        return _ARENAS_CACHE

    path = path or ARENAS_FILE
    if not os.path.exists(path):
        logger.error(f"Arena configuration not found at {path}")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception as e:
        logger.error(f"Error loading arena configuration: {e}")
        return []

    arenas = []
    for entry in data if isinstance(data, list) else []:
        name = entry.get("name") if isinstance(entry, dict) else None
        if name:
            arenas.append({"name": name})
    if use_cache:
        _ARENAS_CACHE = arenas
    return arenas

def index_catalog(catalog):
    return {record.card_name: record for record in catalog}

def get_wins_for_arena(record, arena_name):
    if record is None or not arena_name:
        return 0.0
    return record.stats.get(WINS_PREFIX + arena_slug(arena_name), 0.0)

class ColumnWinRateSource:
    """Win rate read straight from the catalog's rwin_<arena> columns."""

    def rate(self, record, arena_name, wins):
        value = record.stats.get(RATE_PREFIX + arena_slug(arena_name), 0.0)
        return min(value, 1.0)

class DerivedWinRateSource:
    """Fallback for older catalogs without rwin_ columns: wins / overall_count."""

    def rate(self, record, arena_name, wins):
        total = record.overall_count or 0
        return wins / total if total else 0.0

def select_win_rate_source(catalog):
    has_rates = any(
        col.startswith(RATE_PREFIX) for record in catalog for col in record.stats
    )
    if has_rates:
        return ColumnWinRateSource()
    logger.info("Catalog has no rwin_ columns, deriving win rates from overall counts")
    return DerivedWinRateSource()
