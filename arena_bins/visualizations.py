from streamlit_echarts import st_echarts

from arena_bins.config import CHART_COLORS, ECHARTS_CONFIG
from arena_bins.models import BinTag, ChartMode
from arena_bins.utils import format_metric

def _scale(val, mode):
    # ECharts axes show win rates as 0-100
    if ChartMode(mode) is ChartMode.WINRATE:
        return round(val * 100, 2)
    return val

def _mean_line(value, mode, color, label):
    return {
        "name": label,
        "yAxis": _scale(value, mode),
        "lineStyle": {"color": color, "type": "dashed", "width": 2},
        "label": {"formatter": label, "position": "insideEndTop", "color": color},
    }

def create_echarts_bin_bars(data, domain, mode, toxic_mean=None, spell_mean=None, baseline=False, titles=None):
    """
    Bar chart of the comparison dataset, one bar per card colored by bin, with a
    dashed mean line per bin and an optional 50% reference line.
    """
    if not data:
        return None

    mode = ChartMode(mode)
    titles = titles or {}
    is_rate = mode is ChartMode.WINRATE

    bars = []
    for d in data:
        color = CHART_COLORS[d.bin_tag.value]
        bars.append({
            "value": _scale(d.metric(mode), mode),
            "itemStyle": {"color": color},
            "tooltip": {"formatter": f"{d.card_name}<br/>{format_metric(d.metric(mode), mode)}"},
        })

    mark_lines = []
    if toxic_mean is not None:
        label = f"{titles.get(BinTag.TOXIC.value, 'Toxic troop')} mean"
        mark_lines.append(_mean_line(toxic_mean, mode, CHART_COLORS["toxic"], label))
    if spell_mean is not None:
        label = f"{titles.get(BinTag.SPELL.value, 'Cheap spell')} mean"
        mark_lines.append(_mean_line(spell_mean, mode, CHART_COLORS["spell"], label))
    if is_rate and baseline:
        mark_lines.append({
            "yAxis": 50,
            "lineStyle": {"color": CHART_COLORS["baseline"], "type": "solid", "width": 1},
            "label": {"show": False},
        })

    series = {
        "name": "Win Rate by Card" if is_rate else "Wins by Card",
        "type": "bar",
        "data": bars,
        "barCategoryGap": "20%",
    }
    if mark_lines:
        series["markLine"] = {"symbol": "none", "silent": True, "data": mark_lines}

    options = {
        "title": {
            "text": series["name"],
            "textStyle": {"fontSize": 14, "fontWeight": 600},
        },
        "tooltip": {"trigger": "item"},
        "grid": ECHARTS_CONFIG["grid"],
        "xAxis": {
            "type": "category",
            "data": [d.card_name for d in data],
            "name": "Cards",
            "nameLocation": "middle",
            "nameGap": 60,
            "axisLabel": {"rotate": 35, "color": ECHARTS_CONFIG["axis_label_color"]},
        },
        "yAxis": {
            "type": "value",
            "min": _scale(domain.min, mode),
            "max": _scale(domain.max, mode),
            "name": "Win Rate (%)" if is_rate else "Total Wins",
            "axisLabel": {
                "formatter": "{value}%" if is_rate else "{value}",
                "color": ECHARTS_CONFIG["axis_label_color"],
            },
            "splitLine": {"lineStyle": {"color": ECHARTS_CONFIG["split_line_color"]}},
        },
        "series": [series],
    }
    return options

def create_echarts_gap_bar(gap_bar, titles=None):
    """
    Horizontal 0-1 bar split by each bin's share of the summed means, with a tick
    where the split stood in the previous arena.
    """
    if gap_bar is None:
        return None

    titles = titles or {}
    toxic = {
        "name": titles.get(BinTag.TOXIC.value, "Toxic troop"),
        "type": "bar",
        "stack": "gap",
        "data": [round(gap_bar.toxic_share, 4)],
        "itemStyle": {"color": CHART_COLORS["toxic"]},
        "barWidth": 10,
    }
    spell = {
        "name": titles.get(BinTag.SPELL.value, "Cheap spell"),
        "type": "bar",
        "stack": "gap",
        "data": [round(gap_bar.spell_share, 4)],
        "itemStyle": {"color": CHART_COLORS["spell"]},
        "barWidth": 10,
    }
    if gap_bar.previous_share is not None:
        spell["markLine"] = {
            "symbol": "none",
            "silent": True,
            "data": [{"xAxis": round(gap_bar.previous_share, 4)}],
            "lineStyle": {"color": CHART_COLORS["note"], "type": "solid", "width": 2},
            "label": {"formatter": "Previous arena split", "position": "end"},
        }

    return {
        "title": {
            "text": gap_bar.label.value,
            "left": "center",
            "textStyle": {"fontSize": 12, "fontWeight": "normal"},
        },
        "tooltip": {"trigger": "item"},
        "grid": {"left": "3%", "right": "4%", "top": 30, "bottom": 20},
        "xAxis": {"type": "value", "min": 0, "max": 1, "show": False},
        "yAxis": {"type": "category", "data": [""], "show": False},
        "series": [toxic, spell],
    }

def display_chart(options, height="400px", events=None):
    if options:
        return st_echarts(options=options, height=height, events=events)
    return None
