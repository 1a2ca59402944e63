"""Interactive Plotly range lookup for a single scenario.

Two public functions:

    build_range_lookup_figure(table, title, highlight)
        — 13×13 heatmap coloured by action; hover shows hand, action,
          mixing frequency and combo count.
    save_lookup_html(fig, path)
        — Export any figure to a self-contained HTML file.

The dashboard embeds these figures with ``st.plotly_chart``.
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from preflop.analysis.range_grid import ACTION_COLORS, build_range_grid_data
from preflop.engine.cards import RANKS_BY_STRENGTH
from preflop.engine.hand_keys import (
    GRID_SIZE,
    grid_index_to_range_key,
    range_key_combos,
    range_key_to_grid_index,
)
from preflop.engine.ranges import Action, RangeTable

# ─── Constants ────────────────────────────────────────────────────────────────

# Three flat bands: FOLD (0.0), CALL (0.5), RAISE (1.0).
_ACTION_COLORSCALE: list[list] = [
    [0.0, ACTION_COLORS[Action.FOLD]],
    [0.333, ACTION_COLORS[Action.FOLD]],
    [0.334, ACTION_COLORS[Action.CALL]],
    [0.666, ACTION_COLORS[Action.CALL]],
    [0.667, ACTION_COLORS[Action.RAISE]],
    [1.0, ACTION_COLORS[Action.RAISE]],
]


# ─── Hover text ───────────────────────────────────────────────────────────────


def _build_hover(table: RangeTable | None) -> list[list[str]]:
    """Return a 13×13 list of HTML hover strings."""
    rows: list[list[str]] = []
    for r in range(GRID_SIZE):
        row: list[str] = []
        for c in range(GRID_SIZE):
            key = grid_index_to_range_key(r, c)
            entry = table.get(key) if table is not None else None
            lines = [f"Hand: <b>{key}</b>", f"Combos: {range_key_combos(key)}"]
            if entry is None:
                lines.append("Action: N/A")
            else:
                action = Action.from_code(entry.code)
                label = action.name if action is not None else f"unknown ({entry.code})"
                lines.append(f"Action: <b>{label}</b>")
                if entry.frequency is not None:
                    lines.append(f"Frequency: {entry.frequency:.2f}")
            row.append("<br>".join(lines))
        rows.append(row)
    return rows


# ─── Public figure builder ────────────────────────────────────────────────────


def build_range_lookup_figure(
    table: RangeTable | None,
    title: str,
    *,
    highlight: str | None = None,
) -> go.Figure:
    """Build an interactive Plotly figure for one scenario's range.

    Args:
        table:     Scenario table from get_range_table(); None gives a blank grid.
        title:     Figure title.
        highlight: Optional range key to outline.

    Returns:
        go.Figure with one heatmap trace (plus an outline shape when highlighting).
    """
    data = build_range_grid_data(table)
    z = [[None if np.isnan(v) else v for v in row] for row in data.tolist()]
    keys = [[grid_index_to_range_key(r, c) for c in range(GRID_SIZE)] for r in range(GRID_SIZE)]

    fig = go.Figure(
        go.Heatmap(
            z=z,
            x=RANKS_BY_STRENGTH,
            y=RANKS_BY_STRENGTH,
            colorscale=_ACTION_COLORSCALE,
            zmin=0.0,
            zmax=1.0,
            text=_build_hover(table),
            hovertemplate="%{text}<extra></extra>",
            showscale=False,
            xgap=1,
            ygap=1,
            name="Range",
        )
    )

    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            fig.add_annotation(
                x=RANKS_BY_STRENGTH[c],
                y=RANKS_BY_STRENGTH[r],
                text=keys[r][c],
                showarrow=False,
                font={"size": 10, "color": "white" if z[r][c] is not None else "#333333"},
            )

    if highlight is not None:
        r, c = range_key_to_grid_index(highlight)
        fig.add_shape(
            type="rect",
            x0=c - 0.5,
            x1=c + 0.5,
            y0=r - 0.5,
            y1=r + 0.5,
            line={"color": "#ffd700", "width": 3},
        )

    fig.update_layout(
        title_text=title,
        title_font_size=15,
        height=620,
        width=620,
    )
    fig.update_yaxes(autorange="reversed", type="category")
    fig.update_xaxes(side="top", type="category")
    return fig


# ─── HTML export ───────────────────────────────────────────────────────────────


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to a self-contained HTML file (Plotly JS from CDN)."""
    fig.write_html(path, include_plotlyjs="cdn")
