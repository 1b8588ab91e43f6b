import logging

from arena_bins.aggregate import summarize_arena
from arena_bins.bins import seed_bins
from arena_bins.config import STORY_ARENAS
from arena_bins.models import ChartMode

logger = logging.getLogger(__name__)

NO_ARENA_DATA_MESSAGE = "No data available for this arena yet."

def story_slides(arenas=STORY_ARENAS):
    """Intro, one slide per story arena, then the explorer."""
    return ["intro"] + list(arenas) + ["explorer"]

def clamp_slide_index(index, count):
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))

def next_slide_index(index, count):
    # The last slide does not wrap around
    if index < count - 1:
        return clamp_slide_index(index + 1, count)
    return clamp_slide_index(index, count)

def previous_slide_index(index, count):
    return clamp_slide_index(index - 1, count)

def build_story_summaries(explorer, arenas=STORY_ARENAS):
    """
    Wins comparison for each fixed story arena using the default bins. Each arena
    after the first carries a tick for the previous story arena's split.
    """
    bins = seed_bins(explorer.catalog)
    summaries = []
    for idx, arena in enumerate(arenas):
        if arena not in explorer.arenas:
            logger.warning(f"Story arena {arena} is not in the arena configuration")
        previous = arenas[idx - 1] if idx > 0 else None
        summaries.append(summarize_arena(
            explorer.records_by_name,
            bins,
            arena,
            explorer.rate_source,
            mode=ChartMode.WINS,
            previous_arena=previous,
        ))
    return summaries
