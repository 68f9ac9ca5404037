"""Horizontal cross-correlation sweep for the convolution widget.

The kernel slides left-to-right along the top rows of a binary glyph grid,
either supplied directly or rasterized from a sentence by sentence_to_grid;
each position's response is the sum of element-wise products.
"""

from __future__ import annotations

import numpy as np

# 7x7 "S" glyph
S_KERNEL: list[list[float]] = [
    [0, 0, 1, 1, 1, 1, 0],
    [0, 1, 0, 0, 0, 0, 0],
    [1, 0, 0, 0, 0, 0, 0],
    [0, 1, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 1],
    [0, 0, 0, 0, 0, 1, 0],
    [1, 1, 1, 1, 1, 0, 0],
]

DEFAULT_SENTENCE = "ALL YOUR BASE"

GLYPH_SIZE = 7

# 7x7 bitmaps for the letters of DEFAULT_SENTENCE
GLYPHS: dict[str, list[list[float]]] = {
    "A": [
        [0, 0, 1, 1, 1, 0, 0],
        [0, 1, 0, 0, 0, 1, 0],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
    ],
    "L": [
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 1, 1, 1, 1, 1, 1],
    ],
    "Y": [
        [1, 0, 0, 0, 0, 0, 1],
        [0, 1, 0, 0, 0, 1, 0],
        [0, 0, 1, 0, 1, 0, 0],
        [0, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0],
    ],
    "O": [
        [0, 0, 1, 1, 1, 0, 0],
        [0, 1, 0, 0, 0, 1, 0],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [0, 1, 0, 0, 0, 1, 0],
        [0, 0, 1, 1, 1, 0, 0],
    ],
    "U": [
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [0, 1, 0, 0, 0, 1, 0],
        [0, 0, 1, 1, 1, 0, 0],
    ],
    "R": [
        [1, 1, 1, 1, 1, 0, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 1, 1, 1, 1, 0, 0],
        [1, 0, 0, 1, 0, 0, 0],
        [1, 0, 0, 0, 1, 0, 0],
        [1, 0, 0, 0, 0, 1, 0],
    ],
    "B": [
        [1, 1, 1, 1, 1, 0, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 1, 1, 1, 1, 0, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 0, 0, 0, 0, 1, 0],
        [1, 1, 1, 1, 1, 0, 0],
    ],
    "S": S_KERNEL,
    "E": [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 1, 1, 1, 1, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0],
        [1, 1, 1, 1, 1, 1, 1],
    ],
}


def as_matrix(rows: list[list[float]], name: str) -> np.ndarray:
    """Convert nested lists to a 2-D array, rejecting empty or ragged input."""
    if not rows or not rows[0]:
        raise ValueError(f"{name} must be a non-empty 2-D array")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError(f"{name} rows must all have the same length")
    return np.asarray(rows, dtype=float)


def cross_correlation(grid: np.ndarray, kernel: np.ndarray, position: int) -> float:
    """Response with the kernel's left edge at column *position*.

    Returns 0 when the kernel would overhang the grid's right edge or the
    position is negative. Kernel rows past the grid's last row are ignored.
    """
    k_rows, k_cols = kernel.shape
    if position < 0 or position + k_cols > grid.shape[1]:
        return 0.0
    rows = min(k_rows, grid.shape[0])
    window = grid[:rows, position:position + k_cols]
    return float(np.sum(window * kernel[:rows]))


def cross_correlation_sweep(grid: np.ndarray, kernel: np.ndarray) -> list[float]:
    """Response at every position where the kernel fits horizontally."""
    positions = range(grid.shape[1] - kernel.shape[1] + 1)
    return [cross_correlation(grid, kernel, p) for p in positions]


def sentence_to_grid(sentence: str) -> np.ndarray:
    """Rasterize *sentence* into a 7-row binary grid.

    Letters are placed edge to edge as 7x7 glyphs and a space is a single
    blank column. Characters without a glyph render as a blank 7x7 cell.
    """
    blank = np.zeros((GLYPH_SIZE, GLYPH_SIZE))
    space = np.zeros((GLYPH_SIZE, 1))
    blocks = [
        space if char == " " else np.asarray(GLYPHS.get(char, blank), dtype=float)
        for char in sentence
    ]
    if not blocks:
        raise ValueError("sentence must not be empty")
    return np.hstack(blocks)
