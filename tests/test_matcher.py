"""Tests for matching player selections against building templates."""

import pytest

from tiny_towns.game import (
    CATALOG,
    COLOR_TO_RESOURCE,
    Building,
    Resource,
    TownGrid,
    enumerate_orientations,
    find_placements,
    match_building,
)


def empty_board(size: int = 16):
    return [None] * size


def cottage_board():
    grid = empty_board()
    grid[1] = "Wheat"
    grid[4] = "Brick"
    grid[5] = "Glass"
    return grid


class TestMatchBuilding:
    def test_matches_cottage(self) -> None:
        result = match_building(cottage_board(), [1, 4, 5], "Cottage", 4)
        assert result.matched
        assert result.cells_to_clear == (1, 4, 5)

    def test_rejects_wrong_shape(self) -> None:
        grid = empty_board()
        grid[0], grid[1], grid[2] = "Wheat", "Brick", "Glass"
        result = match_building(grid, [0, 1, 2], "Cottage", 4)
        assert not result.matched
        assert result.cells_to_clear == ()

    def test_keeps_caller_order(self) -> None:
        result = match_building(cottage_board(), [5, 1, 4], "Cottage", 4)
        assert result.cells_to_clear == (5, 1, 4)

    @pytest.mark.parametrize("selection", [[], [0], [1, 4, 5], [0, 1, 2, 3]])
    def test_unknown_building_never_matches(self, selection) -> None:
        result = match_building(cottage_board(), selection, "NotARealBuilding", 4)
        assert not result.matched
        assert result.cells_to_clear == ()

    def test_resource_name_is_not_a_building(self) -> None:
        assert not match_building(cottage_board(), [1, 4, 5], "Wheat", 4).matched

    def test_swapped_resources_do_not_match(self) -> None:
        grid = cottage_board()
        grid[4], grid[5] = "Glass", "Brick"
        assert not match_building(grid, [1, 4, 5], "Cottage", 4).matched

    def test_empty_cell_in_selection_fails(self) -> None:
        grid = cottage_board()
        grid[5] = None
        assert not match_building(grid, [1, 4, 5], "Cottage", 4).matched

    @pytest.mark.parametrize("k", range(8))
    def test_every_orientation_matches(self, k) -> None:
        orientation = enumerate_orientations(CATALOG["Cottage"].patterns[0])[k]
        grid = empty_board()
        selection = []
        for cell in orientation:
            idx = (cell.row + 1) * 4 + (cell.col + 1)
            grid[idx] = COLOR_TO_RESOURCE[cell.color]
            selection.append(idx)
        assert match_building(grid, list(reversed(selection)), Building.COTTAGE, 4).matched

    def test_rows_do_not_wrap(self) -> None:
        grid = empty_board()
        grid[3], grid[4], grid[5] = "Brick", "Brick", "Glass"
        assert not match_building(grid, [3, 4, 5], "Tavern", 4).matched

    def test_other_widths(self) -> None:
        grid = [None] * 10
        grid[2], grid[3], grid[4] = "Brick", "Brick", "Glass"
        assert match_building(grid, [2, 3, 4], "Tavern", 5).matched

    def test_accepts_town_grid(self) -> None:
        town = TownGrid.from_cells(cottage_board(), 4)
        assert match_building(town, [1, 4, 5], "Cottage").matched

    def test_does_not_mutate_inputs(self) -> None:
        grid = cottage_board()
        selection = [1, 4, 5]
        match_building(grid, selection, "Cottage", 4)
        assert grid == cottage_board()
        assert selection == [1, 4, 5]


class TestFindPlacements:
    def test_single_well(self) -> None:
        grid = empty_board()
        grid[0], grid[1] = Resource.WOOD, Resource.STONE
        assert find_placements(grid, "Well") == [(0, 1)]

    def test_multiple_wells_share_a_cell(self) -> None:
        grid = empty_board()
        grid[0], grid[1], grid[4] = Resource.WOOD, Resource.STONE, Resource.STONE
        assert set(find_placements(grid, "Well")) == {(0, 1), (0, 4)}

    def test_every_placement_matches(self) -> None:
        grid = cottage_board()
        placements = find_placements(grid, "Cottage")
        assert placements == [(1, 4, 5)]
        assert all(match_building(grid, list(p), "Cottage").matched for p in placements)

    def test_unknown_building(self) -> None:
        assert find_placements(cottage_board(), "Castle") == []
