import logging

from arena_bins.config import (
    DOMAIN_PAD_RATIO, WINRATE_EMPTY_MAX, MIN_WINRATE_SPAN, MEAN_EPSILON,
)
from arena_bins.data import get_wins_for_arena
from arena_bins.models import (
    ArenaSummary, BinTag, ChartDomain, ChartMode, ComparisonDatum, GapBar, GapLabel,
)

logger = logging.getLogger(__name__)

def build_comparison_data(records_by_name, bins, arena, mode, rate_source):
    """
    One ComparisonDatum per binned card with wins in `arena`, toxic bin first.

    Cards missing from the catalog or without wins in the arena are skipped, so a
    non-empty bin can legitimately produce an empty dataset.
    """
    if not arena:
        return []

    combined = []
    for tag in (BinTag.TOXIC, BinTag.SPELL):
        for name in bins.members(tag):
            record = records_by_name.get(name)
            if record is None:
                continue
            wins = get_wins_for_arena(record, arena)
            if wins <= 0:
                continue
            combined.append(ComparisonDatum(
                card_name=name,
                wins=wins,
                win_rate=rate_source.rate(record, arena, wins) or 0.0,
                bin_tag=tag,
            ))

    mode = ChartMode(mode)
    combined.sort(key=lambda d: d.metric(mode), reverse=True)
    return combined

def _wins_domain(values):
    min_v = min(values) if values else 0
    max_v = max(values) if values else 0

    pad = (max_v - min_v) * DOMAIN_PAD_RATIO
    if pad == 0:
        pad = max(max_v, 1) * DOMAIN_PAD_RATIO

    lo = max(0, min_v - pad)
    hi = max_v + pad
    if hi <= lo:
        lo, hi = 0, max(max_v, 1)
    return ChartDomain(lo, hi)

def _winrate_domain(values):
    values = [min(max(v, 0.0), 1.0) for v in values]
    min_v = min(values) if values else 0
    max_v = max(values) if values else WINRATE_EMPTY_MAX

    pad = (max_v - min_v) * DOMAIN_PAD_RATIO
    if pad == 0:
        pad = max(max_v, 1) * DOMAIN_PAD_RATIO

    lo = max(0, min_v - pad)
    hi = min(1, max_v + pad)

    # Keep a minimum visible band when the rates are nearly identical. Near 0 or 1
    # the band is clamped, not shifted, so it can come out narrower than the minimum.
    if hi - lo < MIN_WINRATE_SPAN:
        mid = (hi + lo) / 2
        lo = max(0, mid - MIN_WINRATE_SPAN / 2)
        hi = min(1, mid + MIN_WINRATE_SPAN / 2)
    return ChartDomain(lo, hi)

def compute_chart_domain(values, mode):
    """Padded [min, max] axis range for the metric values of the rendered dataset."""
    values = list(values)
    if ChartMode(mode) is ChartMode.WINRATE:
        return _winrate_domain(values)
    return _wins_domain(values)

def dataset_domain(data, mode):
    return compute_chart_domain([d.metric(mode) for d in data], mode)

def bin_mean(data, tag, mode):
    """Mean metric of the points in bin `tag`, or None if that bin has no points."""
    tag = BinTag(tag)
    values = [d.metric(mode) for d in data if d.bin_tag is tag]
    if not values:
        return None
    return sum(values) / len(values)

def bin_means(data, mode):
    return bin_mean(data, BinTag.TOXIC, mode), bin_mean(data, BinTag.SPELL, mode)

def toxic_share(toxic_mean, spell_mean):
    if toxic_mean is None or spell_mean is None:
        return None
    total = toxic_mean + spell_mean
    if total <= 0:
        return None
    return toxic_mean / total

def gap_label(toxic_mean, spell_mean):
    if abs(toxic_mean - spell_mean) < MEAN_EPSILON:
        return GapLabel.NEGLIGIBLE
    if toxic_mean > spell_mean:
        return GapLabel.TOXIC_HIGHER
    return GapLabel.SPELL_HIGHER

def previous_arena_tick(prev_toxic_mean, prev_spell_mean, bar_width=1.0):
    """Marker position for the previous arena's split, or None if it has no valid split."""
    share = toxic_share(prev_toxic_mean, prev_spell_mean)
    if share is None:
        return None
    return share * bar_width

def gap_bar_summary(toxic_mean, spell_mean, previous_means=None):
    """
    Two-segment ratio bar for the bin means. Omitted (None) unless both means exist
    and sum to a positive total. `previous_means` is the (toxic, spell) pair of the
    previous arena, used for the tick.
    """
    share = toxic_share(toxic_mean, spell_mean)
    if share is None:
        return None

    previous_share = None
    if previous_means is not None:
        previous_share = previous_arena_tick(*previous_means)

    return GapBar(
        toxic_share=share,
        label=gap_label(toxic_mean, spell_mean),
        previous_share=previous_share,
    )

def show_baseline(domain):
    """The 50% reference line only makes sense inside the visible range."""
    return domain.min < 0.5 < domain.max

def summarize_arena(records_by_name, bins, arena, rate_source, mode=ChartMode.WINS, previous_arena=None):
    data = build_comparison_data(records_by_name, bins, arena, mode, rate_source)
    toxic_mean, spell_mean = bin_means(data, mode)

    previous_means = None
    if previous_arena:
        prev_data = build_comparison_data(records_by_name, bins, previous_arena, mode, rate_source)
        previous_means = bin_means(prev_data, mode)

    return ArenaSummary(
        arena=arena,
        data=tuple(data),
        domain=dataset_domain(data, mode),
        toxic_mean=toxic_mean,
        spell_mean=spell_mean,
        gap_bar=gap_bar_summary(toxic_mean, spell_mean, previous_means),
    )
