"""Shape canonicalisation for building footprints.

A pattern is a sequence of ``ShapeCell`` values: a colour tag plus a relative
``(row, col)`` offset. Canonical form puts the minimum row and column at zero
and orders cells row-major, so two footprints match exactly when their
canonical forms are equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class ShapeCell:
    color: Optional[str]
    row: int
    col: int


Pattern = Tuple[ShapeCell, ...]


# (row, col) -> (col, -row): quarter turn clockwise about the origin
_ROT90 = np.array([[0, 1], [-1, 0]], dtype=np.int64)
# (row, col) -> (row, -col)
_FLIP_H = np.array([[1, 0], [0, -1]], dtype=np.int64)


def _coords(pattern: Sequence[ShapeCell]) -> np.ndarray:
    return np.array([[cell.row, cell.col] for cell in pattern], dtype=np.int64).reshape(-1, 2)


def _transform(pattern: Sequence[ShapeCell], matrix: np.ndarray) -> Pattern:
    moved = _coords(pattern) @ matrix.T
    # Plain ints: no signed zero survives into equality checks
    return tuple(
        ShapeCell(cell.color, int(r), int(c))
        for cell, (r, c) in zip(pattern, moved)
    )


def normalize(pattern: Sequence[ShapeCell]) -> Pattern:
    """Shift a pattern to the origin and sort it by (row, col).

    Raises ValueError for an empty pattern, which has no origin.
    """
    if len(pattern) == 0:
        raise ValueError("Cannot normalize an empty pattern")
    coords = _coords(pattern)
    min_row, min_col = coords.min(axis=0)
    shifted = [
        ShapeCell(cell.color, int(cell.row - min_row), int(cell.col - min_col))
        for cell in pattern
    ]
    shifted.sort(key=lambda cell: (cell.row, cell.col))
    return tuple(shifted)


def rotate90(pattern: Sequence[ShapeCell]) -> Pattern:
    """Rotate 90 degrees clockwise. The result must be renormalized by the caller."""
    return _transform(pattern, _ROT90)


def flip_horizontal(pattern: Sequence[ShapeCell]) -> Pattern:
    """Mirror across the vertical axis. The result must be renormalized by the caller."""
    return _transform(pattern, _FLIP_H)


def enumerate_orientations(base: Sequence[ShapeCell]) -> List[Pattern]:
    """All 8 dihedral orientations of ``base``, each normalized.

    Order: identity, three clockwise quarter turns, then the horizontal flip
    and its three quarter turns. Symmetric shapes produce duplicates; they
    are not removed.
    """
    orientations: List[Pattern] = []
    for start in (normalize(base), normalize(flip_horizontal(normalize(base)))):
        current = start
        orientations.append(current)
        for _ in range(3):
            current = normalize(rotate90(current))
            orientations.append(current)
    return orientations


def patterns_equal(a: Sequence[ShapeCell], b: Sequence[ShapeCell]) -> bool:
    """Element-wise comparison of two patterns normalized the same way."""
    if len(a) != len(b):
        return False
    return all(
        x.color == y.color and x.row == y.row and x.col == y.col
        for x, y in zip(a, b)
    )
