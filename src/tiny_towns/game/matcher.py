from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Set, FrozenSet, Tuple, Union

from .buildings import get_building
from .grid import CellValue, TownGrid
from .shapes import ShapeCell, enumerate_orientations, normalize, patterns_equal
from .tiles import Building, color_of


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    cells_to_clear: Tuple[int, ...] = field(default_factory=tuple)


NO_MATCH = MatchResult(False, ())


def selection_pattern(grid: TownGrid, selected: Sequence[int]) -> List[ShapeCell]:
    """Map flat indices to shape cells coloured by the resource they hold.

    Empty cells and buildings carry no colour and so never match a template.
    """
    cells: List[ShapeCell] = []
    for idx in selected:
        row, col = grid.coord(idx)
        tile = grid.tile_at(idx) if 0 <= idx < grid.size else None
        cells.append(ShapeCell(color_of(tile), row, col))
    return cells


def match_building(
    grid: Union[TownGrid, Sequence[CellValue]],
    selected: Sequence[int],
    building_name: Union[str, Building],
    columns: int = 4,
) -> MatchResult:
    """Check whether the selected cells form any orientation of a building.

    On success ``cells_to_clear`` is the selection in the caller's order.
    Unknown buildings and empty selections are simply "no match".
    """
    template = get_building(building_name)
    if template is None or len(selected) == 0:
        return NO_MATCH
    town = TownGrid.coerce(grid, columns)
    player = normalize(selection_pattern(town, selected))
    for base in template.patterns:
        if any(patterns_equal(player, o) for o in enumerate_orientations(base)):
            return MatchResult(True, tuple(selected))
    return NO_MATCH


def find_placements(
    grid: Union[TownGrid, Sequence[CellValue]],
    building_name: Union[str, Building],
    columns: int = 4,
) -> List[Tuple[int, ...]]:
    """Every distinct set of cells that currently satisfies a building.

    Each placement lists grid indices in row-major order. Orientations that
    coincide for symmetric footprints are reported once.
    """
    template = get_building(building_name)
    if template is None:
        return []
    town = TownGrid.coerce(grid, columns)
    seen: Set[FrozenSet[int]] = set()
    placements: List[Tuple[int, ...]] = []
    for base in template.patterns:
        for orientation in enumerate_orientations(base):
            height = max(c.row for c in orientation) + 1
            width = max(c.col for c in orientation) + 1
            for top in range(town.rows - height + 1):
                for left in range(town.cols - width + 1):
                    indices = tuple(town.index(top + c.row, left + c.col) for c in orientation)
                    if all(color_of(town.tile_at(i)) == c.color for i, c in zip(indices, orientation)):
                        key = frozenset(indices)
                        if key not in seen:
                            seen.add(key)
                            placements.append(tuple(sorted(indices)))
    return placements
