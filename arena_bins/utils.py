from arena_bins.models import ChartMode

def format_wins(val):
    return f"{round(val):,}"

def format_percentage(val):
    """0.475 -> '48%'"""
    return f"{val * 100:.0f}%"

def format_metric(val, mode):
    if ChartMode(mode) is ChartMode.WINRATE:
        return f"{val * 100:.1f}%"
    return format_wins(val)

def format_domain_note(domain, mode):
    """Caption telling the reader the axis does not start at zero."""
    if ChartMode(mode) is ChartMode.WINRATE:
        return f"Zoomed scale: {format_percentage(domain.min)}–{format_percentage(domain.max)}"
    return f"Zoomed scale: {format_wins(domain.min)}–{format_wins(domain.max)} wins"
