from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class BinTag(str, Enum):
    TOXIC = "toxic"
    SPELL = "spell"

    @property
    def other(self):
        return BinTag.SPELL if self is BinTag.TOXIC else BinTag.TOXIC


class ChartMode(str, Enum):
    WINS = "wins"
    WINRATE = "winrate"


class GapLabel(str, Enum):
    NEGLIGIBLE = "Difference between mean lines: very small in this arena"
    TOXIC_HIGHER = "Difference between mean lines: toxic troops higher in this arena"
    SPELL_HIGHER = "Difference between mean lines: cheap spells higher in this arena"


@dataclass(frozen=True)
class CardRecord:
    card_name: str
    elixir: Optional[int] = None
    rarity: Optional[str] = None
    card_type: Optional[str] = None
    default_bin: Optional[str] = None
    overall_count: float = 0
    # Per-arena columns (wins_<slug>, rwin_<slug>), read through data.get_wins_for_arena
    stats: Dict[str, float] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class ComparisonDatum:
    card_name: str
    wins: float
    win_rate: float
    bin_tag: BinTag

    def metric(self, mode):
        return self.win_rate if ChartMode(mode) is ChartMode.WINRATE else self.wins


@dataclass(frozen=True)
class ChartDomain:
    min: float
    max: float

    @property
    def span(self):
        return self.max - self.min


@dataclass(frozen=True)
class GapBar:
    toxic_share: float
    label: GapLabel
    previous_share: Optional[float] = None

    @property
    def spell_share(self):
        return 1.0 - self.toxic_share


@dataclass(frozen=True)
class ArenaSummary:
    arena: str
    data: Tuple[ComparisonDatum, ...]
    domain: ChartDomain
    toxic_mean: Optional[float]
    spell_mean: Optional[float]
    gap_bar: Optional[GapBar]

    @property
    def is_empty(self):
        return not self.data
