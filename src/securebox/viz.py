import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle


def show_grid(
    state,
    toggles=(),
    ax=None,
    toggle_color="red",
    title=None,
    cmap="Greys",
):
    """
    Show a box state as a heatmap, outlining the cells of a toggle plan.

    Parameters
    ----------
    state : array-like of shape (rows, columns)
        Cell values, truthy = locked.
    toggles : iterable[(int, int)]
        (row, col) coordinates to outline.
    """
    grid = np.asarray(state, dtype=float)
    rows, columns = grid.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(0.5 * columns + 1.5, 0.5 * rows + 1.5))
    ax.imshow(grid, cmap=cmap, vmin=0.0, vmax=1.0)
    for r, c in toggles:
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=toggle_color,
                facecolor="none",
                linewidth=2,
            )
        )
    ax.set_xticks(range(columns))
    ax.set_yticks(range(rows))
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    if title is not None:
        ax.set_title(title)
    return ax


def plot_scaling(sizes, seconds, exponent=None, ax=None):
    """Log-log plot of solve time against linear grid size."""
    sizes = np.asarray(sizes, dtype=float)
    seconds = np.asarray(seconds, dtype=float)
    if ax is None:
        _, ax = plt.subplots(figsize=(4.5, 3.5))
    ax.loglog(sizes, seconds, "o-", label="measured")
    if exponent is not None and len(sizes) > 0:
        # reference line through the last point
        ref = seconds[-1] * (sizes / sizes[-1]) ** exponent
        ax.loglog(sizes, ref, "--", color="gray", label=f"~ n^{exponent:.2f}")
        ax.legend()
    ax.set_xlabel("n (grid side)")
    ax.set_ylabel("solve time [s]")
    return ax
