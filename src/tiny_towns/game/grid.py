from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .tiles import EMPTY, Building, Resource, Tile, parse_tile, tile_from_code


Coordinate = Tuple[int, int]
CellValue = Union[Tile, str, None]


class TownGrid:
    """Rectangular town board addressed by flat index.

    The grid stores 0 for empty cells and the integer code of the resource or
    building otherwise. Flat index ``i`` lives at ``(i // cols, i % cols)``.
    """

    def __init__(self, rows: int = 4, cols: int = 4) -> None:
        self.rows = int(rows)
        self.cols = int(cols)
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    @classmethod
    def from_cells(cls, cells: Sequence[CellValue], columns: int = 4) -> "TownGrid":
        cells = list(cells)
        columns = int(columns)
        if columns <= 0 or not cells or len(cells) % columns != 0:
            raise ValueError(f"{len(cells)} cells do not fill rows of {columns} columns")
        grid = cls(len(cells) // columns, columns)
        for i, value in enumerate(cells):
            tile = parse_tile(value)
            if tile is not None:
                grid.set_tile(i, tile)
        return grid

    @classmethod
    def coerce(cls, cells: Union["TownGrid", Sequence[CellValue]], columns: int = 4) -> "TownGrid":
        if isinstance(cells, TownGrid):
            return cells
        return cls.from_cells(cells, columns)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def coord(self, index: int) -> Coordinate:
        return index // self.cols, index % self.cols

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def tile_at(self, index: int) -> Optional[Tile]:
        if not 0 <= index < self.size:
            raise IndexError(f"Cell {index} outside a grid of {self.size} cells")
        row, col = self.coord(index)
        return tile_from_code(self.grid[row, col])

    def set_tile(self, index: int, tile: Optional[Tile]) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"Cell {index} outside a grid of {self.size} cells")
        row, col = self.coord(index)
        self.grid[row, col] = EMPTY if tile is None else int(tile)

    def is_empty(self, index: int) -> bool:
        return self.tile_at(index) is None

    def neighbors(self, index: int) -> List[int]:
        """Orthogonal neighbours of ``index`` that lie on the board."""
        row, col = self.coord(index)
        result: List[int] = []
        for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
            r, c = row + dr, col + dc
            if self.is_inside(r, c):
                result.append(self.index(r, c))
        return result

    def row_tiles(self, row: int) -> List[Optional[Tile]]:
        return [tile_from_code(v) for v in self.grid[row, :]]

    def col_tiles(self, col: int) -> List[Optional[Tile]]:
        return [tile_from_code(v) for v in self.grid[:, col]]

    def count(self, tile: Tile) -> int:
        return int(np.count_nonzero(self.grid == int(tile)))

    def indices_of(self, tile: Tile) -> List[int]:
        return [int(i) for i in np.flatnonzero(self.grid == int(tile))]

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.grid == EMPTY))

    def is_full(self) -> bool:
        return self.empty_count() == 0

    def cells(self) -> List[Optional[Tile]]:
        return [tile_from_code(v) for v in self.grid.reshape(-1)]

    def clone(self) -> "TownGrid":
        new_grid = TownGrid(self.rows, self.cols)
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


_SYMBOLS = {
    Resource.WHEAT: "w",
    Resource.BRICK: "b",
    Resource.GLASS: "g",
    Resource.WOOD: "o",
    Resource.STONE: "s",
    Building.COTTAGE: "C",
    Building.FARM: "F",
    Building.CHAPEL: "H",
    Building.TAVERN: "T",
    Building.WELL: "W",
    Building.THEATER: "E",
    Building.FACTORY: "X",
    Building.CATHEDRAL: "A",
}


def render_text(grid: TownGrid) -> str:
    """Compact text view: lowercase letters for resources, capitals for buildings."""
    lines: List[str] = []
    for row in range(grid.rows):
        symbols: Iterable[str] = (
            "·" if tile is None else _SYMBOLS[tile]
            for tile in grid.row_tiles(row)
        )
        lines.append(" ".join(symbols))
    return "\n".join(lines)
