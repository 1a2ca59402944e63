"""13×13 range grids for a single scenario.

Data builders return plain NumPy / list structures usable without a display:

    build_range_grid_data(table)    — (13, 13) action matrix
    build_range_grid_labels(table)  — 13×13 cell labels (hand key + mix %)

One plot function renders a matplotlib figure:

    plot_range_grid(table, title, ...)

Matrix convention:
    Shape  : (13, 13) — rows/cols ordered A, K, Q, ..., 2
             diagonal = pairs, upper triangle = suited, lower = offsuit
    Values : 1.0 = RAISE, 0.5 = CALL, 0.0 = FOLD
             np.nan = hand absent from the table (or unknown action code)
"""

from __future__ import annotations

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.patches
import matplotlib.pyplot as plt
import numpy as np

from preflop.engine.cards import RANKS_BY_STRENGTH
from preflop.engine.hand_keys import GRID_SIZE, grid_index_to_range_key, range_key_to_grid_index
from preflop.engine.ranges import Action, RangeTable

# ─── Constants ────────────────────────────────────────────────────────────────

ACTION_VALUES: dict[Action, float] = {
    Action.FOLD: 0.0,
    Action.CALL: 0.5,
    Action.RAISE: 1.0,
}

ACTION_COLORS: dict[Action, str] = {
    Action.FOLD: "#6baed6",
    Action.CALL: "#2ca02c",
    Action.RAISE: "#d62728",
}

_NAN_COLOR: str = "#dddddd"
_HIGHLIGHT_COLOR: str = "#ffd700"


def _make_action_cmap() -> matplotlib.colors.ListedColormap:
    """Blue=FOLD (0), green=CALL (0.5), red=RAISE (1), grey=absent (NaN)."""
    cmap = matplotlib.colors.ListedColormap(
        [ACTION_COLORS[Action.FOLD], ACTION_COLORS[Action.CALL], ACTION_COLORS[Action.RAISE]]
    )
    return cmap.with_extremes(bad=_NAN_COLOR)


_ACTION_CMAP: matplotlib.colors.Colormap = _make_action_cmap()


# ─── Data builders ────────────────────────────────────────────────────────────


def build_range_grid_data(table: RangeTable | None) -> np.ndarray:
    """Return the (13, 13) action matrix for a scenario table.

    A None table (scenario not found) gives an all-NaN matrix.
    """
    grid = np.full((GRID_SIZE, GRID_SIZE), np.nan)
    if table is None:
        return grid

    for key, entry in table.items():
        action = Action.from_code(entry.code)
        if action is None:
            continue
        try:
            r, c = range_key_to_grid_index(key)
        except ValueError:
            continue
        grid[r, c] = ACTION_VALUES[action]
    return grid


def build_range_grid_labels(table: RangeTable | None) -> list[list[str]]:
    """Return 13×13 cell labels: the hand key, plus the mix % when present."""
    labels: list[list[str]] = []
    for r in range(GRID_SIZE):
        row: list[str] = []
        for c in range(GRID_SIZE):
            key = grid_index_to_range_key(r, c)
            entry = table.get(key) if table is not None else None
            if entry is not None and entry.frequency is not None:
                row.append(f"{key}\n{entry.frequency:.0%}")
            else:
                row.append(key)
        labels.append(row)
    return labels


# ─── Rendering ────────────────────────────────────────────────────────────────


def _render_grid(
    ax: matplotlib.axes.Axes,
    data: np.ndarray,
    labels: list[list[str]],
    highlight: str | None,
) -> matplotlib.image.AxesImage:
    """Render one range grid onto *ax* and return the AxesImage."""
    masked = np.ma.masked_invalid(data)
    im = ax.imshow(masked, cmap=_ACTION_CMAP, vmin=0.0, vmax=1.0, aspect="equal")

    ax.set_xticks(range(GRID_SIZE))
    ax.set_xticklabels(RANKS_BY_STRENGTH, fontsize=9)
    ax.set_yticks(range(GRID_SIZE))
    ax.set_yticklabels(RANKS_BY_STRENGTH, fontsize=9)
    ax.tick_params(top=True, labeltop=True, bottom=False, labelbottom=False)

    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            text_color = "#333333" if np.isnan(data[r, c]) else "white"
            ax.text(c, r, labels[r][c], ha="center", va="center", fontsize=6, color=text_color)

    if highlight is not None:
        r, c = range_key_to_grid_index(highlight)
        ax.add_patch(
            matplotlib.patches.Rectangle(
                (c - 0.5, r - 0.5), 1, 1, fill=False, edgecolor=_HIGHLIGHT_COLOR, linewidth=2.5
            )
        )

    return im


def plot_range_grid(
    table: RangeTable | None,
    title: str,
    *,
    highlight: str | None = None,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot a scenario's 13×13 range grid.

    Args:
        table:     Scenario table from get_range_table(); None draws an empty grid.
        title:     Figure title.
        highlight: Optional range key to outline (e.g. the hand just dealt).
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    data = build_range_grid_data(table)
    labels = build_range_grid_labels(table)

    fig, ax = plt.subplots(figsize=(8, 8.6))
    fig.suptitle(title, fontsize=13, fontweight="bold")
    _render_grid(ax, data, labels, highlight)

    handles = [
        matplotlib.patches.Patch(color=ACTION_COLORS[a], label=a.name.title())
        for a in (Action.RAISE, Action.CALL, Action.FOLD)
    ]
    handles.append(matplotlib.patches.Patch(color=_NAN_COLOR, label="N/A"))
    ax.legend(handles=handles, loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=4, frameon=False)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    from preflop import config
    from preflop.engine.ranges import get_range_table

    opener = sys.argv[1] if len(sys.argv) > 1 else config.DEFAULT_OPENER
    defender = sys.argv[2] if len(sys.argv) > 2 else config.DEFAULT_DEFENDER
    stack = int(sys.argv[3]) if len(sys.argv) > 3 else config.DEFAULT_STACK

    table = get_range_table(stack, opener, defender)
    if table is None:
        sys.exit(f"No range for {defender} vs {opener} @ {stack}bb")

    out = f"range_{defender}_vs_{opener}_{stack}bb.png".replace("+", "p")
    plot_range_grid(table, f"{defender} vs {opener} open ({stack}bb)", show=False, save_path=out)
    print(f"Saved: {out}")
