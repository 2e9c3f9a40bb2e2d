"""Tests for end-of-game scoring."""

import pytest

from tiny_towns.game import Building, FactoryStock, Resource, ScoringRules, TownGrid, compute_score, score_breakdown


def board(placements, size: int = 16):
    grid = [None] * size
    for idx, tile in placements.items():
        grid[idx] = tile
    return grid


class TestReferenceScores:
    def test_empty_board(self) -> None:
        assert compute_score(board({})) == -16

    def test_cathedral_waives_penalty(self) -> None:
        assert compute_score(board({0: "Cathedral"})) == 2

    def test_farm_feeds_four_cottages(self) -> None:
        placements = {0: "Farm"}
        placements.update({i: "Cottage" for i in range(1, 6)})
        assert compute_score(board(placements)) == 2

    def test_well_counts_adjacent_cottages(self) -> None:
        grid = board({5: "Well", 6: "Cottage", 9: "Cottage"})
        assert compute_score(grid) == -11
        assert score_breakdown(grid)["Well"] == 2

    def test_single_tavern(self) -> None:
        assert compute_score(board({7: "Tavern"})) == -13


class TestBuildingRules:
    def test_tavern_count_is_clamped(self) -> None:
        grid = board({i: "Tavern" for i in range(6)})
        assert score_breakdown(grid)["Tavern"] == 20
        assert compute_score(grid) == 10

    @pytest.mark.parametrize("count, points", [(0, 0), (1, 2), (2, 5), (3, 9), (4, 14), (5, 20)])
    def test_tavern_table(self, count, points) -> None:
        grid = board({i: Building.TAVERN for i in range(count)})
        assert score_breakdown(grid)["Tavern"] == points

    def test_chapel_scores_fed_cottages(self) -> None:
        grid = board({0: "Farm", 1: "Cottage", 2: "Cottage", 3: "Chapel"})
        breakdown = score_breakdown(grid)
        assert breakdown["Cottage"] == 6
        assert breakdown["Chapel"] == 2
        assert compute_score(grid) == -4

    def test_unfed_cottages_score_nothing(self) -> None:
        grid = board({0: "Cottage", 1: "Chapel"})
        breakdown = score_breakdown(grid)
        assert breakdown["Cottage"] == 0
        assert breakdown["Chapel"] == 0

    def test_theater_counts_distinct_tiles_in_row_and_column(self) -> None:
        grid = board({0: "Theater", 1: "Farm", 2: "Farm", 3: "Wheat", 4: "Well", 5: "Cottage"})
        breakdown = score_breakdown(grid)
        assert breakdown["Theater"] == 3
        assert breakdown["Cottage"] == 3
        assert breakdown["Well"] == 1
        assert breakdown["empty"] == -10
        assert compute_score(grid) == -3

    def test_theater_counts_leftover_resources(self) -> None:
        grid = board({0: "Theater", 1: "Wheat", 2: "Farm", 4: "Wheat"})
        assert score_breakdown(grid)["Theater"] == 2

    def test_theater_ignores_other_theaters(self) -> None:
        grid = board({0: "Theater", 3: "Theater", 12: "Tavern"})
        assert score_breakdown(grid)["Theater"] == 1

    def test_well_does_not_wrap_rows(self) -> None:
        grid = board({3: "Well", 4: "Cottage"})
        assert score_breakdown(grid)["Well"] == 0
        assert compute_score(grid) == -14

    def test_factory_is_zero_weighted(self) -> None:
        grid = board({0: "Factory"})
        annotations = {0: {"resource": "Wheat", "count": 3}}
        assert score_breakdown(grid, annotations)["Factory"] == 0
        assert compute_score(grid, annotations) == -15

    def test_factory_weight_is_configurable(self) -> None:
        grid = board({0: "Factory", 1: "Wheat"})
        annotations = {0: FactoryStock(Resource.WHEAT, 3), 1: FactoryStock(Resource.BRICK, 5)}
        rules = ScoringRules(factory_weight=2)
        assert score_breakdown(grid, annotations, rules=rules)["Factory"] == 6

    def test_cathedral_waiver_applies_with_other_buildings(self) -> None:
        grid = board({0: "Cathedral", 5: "Tavern", 10: "Catedral"})
        assert compute_score(grid) == 2 + 2 + 2


class TestScoringContract:
    def test_full_board_has_no_penalty(self) -> None:
        grid = ["Wheat"] * 16
        assert compute_score(grid) == 0

    def test_other_widths(self) -> None:
        grid = board({6: "Well", 1: "Cottage", 5: "Cottage", 7: "Cottage"}, size=10)
        assert score_breakdown(grid, columns=5)["Well"] == 3
        assert compute_score(grid, columns=5) == -3

    def test_custom_rules(self) -> None:
        assert compute_score(board({}), rules=ScoringRules(empty_penalty=0)) == 0

    def test_idempotent_and_pure(self) -> None:
        grid = board({0: "Farm", 1: "Cottage", 2: "Well", 6: "Cottage"})
        snapshot = list(grid)
        annotations = {}
        first = compute_score(grid, annotations)
        assert compute_score(grid, annotations) == first
        assert grid == snapshot
        assert annotations == {}

    def test_accepts_town_grid(self) -> None:
        town = TownGrid.from_cells(board({0: "Cathedral"}), 4)
        assert compute_score(town) == 2

    def test_breakdown_sums_to_score(self) -> None:
        grid = board({0: "Farm", 1: "Cottage", 2: "Chapel", 3: "Theater", 7: "Well"})
        assert sum(score_breakdown(grid).values()) == compute_score(grid)

    def test_bad_board_length(self) -> None:
        with pytest.raises(ValueError):
            compute_score([None] * 15, columns=4)

    def test_unknown_tile_name(self) -> None:
        with pytest.raises(ValueError):
            compute_score(board({0: "Castle"}))
