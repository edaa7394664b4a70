import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from securebox.algebra import apply_effect


def _combined_effect(y, x, toggles):
    """
    Cells flipped by applying the given flat toggle indices to an open box.
    A toggle listed twice cancels out.
    """
    X = np.zeros(y * x, dtype=np.uint8)
    for t in toggles:
        X[t] ^= 1
    return apply_effect(np.zeros((y, x), dtype=bool), X).astype(np.uint8)


def _outline(ax, toggles, x, color):
    for t in toggles:
        r, c = divmod(int(t), x)
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=color,
                facecolor="none",
                linewidth=2,
            )
        )


def _label_axes(ax, y, x):
    ax.set_xticks(range(x))
    ax.set_yticks(range(y))
    ax.set_xlabel("col")
    ax.set_ylabel("row")


def show_box(state, ax=None, cmap="Greys", title="Box state"):
    """Heatmap of a box snapshot: dark = locked, light = unlocked."""
    state = np.asarray(state, dtype=float)
    y, x = state.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    ax.imshow(state, cmap=cmap, vmin=0.0, vmax=1.0)
    _label_axes(ax, y, x)
    ax.set_title(f"{title} ({int(state.sum())} locked)")
    return ax


def show_toggle_effect(
    y: int,
    x: int,
    toggles,
    ax=None,
    toggled_color="red",
    cmap="viridis",
):
    """
    Show which cells flip when the given toggles are applied together.

    Parameters
    ----------
    y, x : int
        Box size.
    toggles : int or iterable[int]
        One or more flat toggle indices (row * x + col). Combined via XOR.
    """
    toggles = np.atleast_1d(toggles).astype(int)
    data = _combined_effect(y, x, toggles)
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    im = ax.imshow(data, cmap=cmap, vmin=0.0, vmax=1.0)
    _outline(ax, toggles, x, toggled_color)
    _label_axes(ax, y, x)
    ax.set_title("Toggle effect")
    plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label="flips")
    return ax
