"""Tests for footprint canonicalisation and orientation enumeration."""

import pytest

from tiny_towns.game import CATALOG, ShapeCell, enumerate_orientations, flip_horizontal, normalize, patterns_equal, rotate90


def cells(*triples):
    return [ShapeCell(color, row, col) for color, row, col in triples]


ALL_PATTERNS = [p for t in CATALOG.values() for p in t.patterns]


class TestNormalize:
    def test_shifts_to_origin_and_sorts(self) -> None:
        pattern = cells(("C", 3, 3), ("A", 2, 3), ("B", 2, 4))
        assert normalize(pattern) == tuple(cells(("A", 0, 0), ("B", 0, 1), ("C", 1, 0)))

    def test_handles_negative_coordinates(self) -> None:
        pattern = cells(("A", -1, -2), ("B", 0, -2))
        assert normalize(pattern) == tuple(cells(("A", 0, 0), ("B", 1, 0)))

    def test_empty_pattern_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize([])

    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_idempotent(self, pattern) -> None:
        once = normalize(pattern)
        assert normalize(once) == once


class TestTransforms:
    def test_rotate90_maps_row_col_to_col_minus_row(self) -> None:
        assert rotate90(cells(("a", 0, 1), ("b", 2, 3))) == tuple(cells(("a", 1, 0), ("b", 3, -2)))

    def test_rotate90_keeps_zero_unsigned(self) -> None:
        rotated = rotate90(cells(("a", 0, 0)))
        assert rotated[0].col == 0
        assert str(rotated[0].col) == "0"

    def test_flip_horizontal_negates_columns(self) -> None:
        assert flip_horizontal(cells(("a", 1, 2))) == tuple(cells(("a", 1, -2)))

    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_four_rotations_return_to_start(self, pattern) -> None:
        start = normalize(pattern)
        current = start
        for _ in range(4):
            current = normalize(rotate90(current))
        assert current == start

    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_flip_is_an_involution(self, pattern) -> None:
        assert normalize(flip_horizontal(flip_horizontal(pattern))) == normalize(pattern)


class TestOrientations:
    @pytest.mark.parametrize("pattern", ALL_PATTERNS)
    def test_always_eight_entries(self, pattern) -> None:
        assert len(enumerate_orientations(pattern)) == 8

    def test_cottage_orientations_are_distinct(self) -> None:
        base = CATALOG["Cottage"].patterns[0]
        assert len(set(enumerate_orientations(base))) == 8

    def test_symmetric_shapes_keep_duplicates(self) -> None:
        base = cells(("x", 0, 0), ("x", 0, 1), ("x", 1, 0), ("x", 1, 1))
        orientations = enumerate_orientations(base)
        assert len(orientations) == 8
        assert len(set(orientations)) == 1

    def test_well_has_four_distinct_orientations(self) -> None:
        assert len(set(enumerate_orientations(CATALOG["Well"].patterns[0]))) == 4

    def test_first_orientation_is_identity(self) -> None:
        base = CATALOG["Tavern"].patterns[0]
        assert enumerate_orientations(base)[0] == normalize(base)


class TestPatternsEqual:
    def test_same_patterns(self) -> None:
        a = cells(("X", 0, 0), ("Y", 0, 1))
        b = cells(("X", 0, 0), ("Y", 0, 1))
        assert patterns_equal(a, b)

    def test_colour_order_matters(self) -> None:
        a = cells(("X", 0, 0), ("Y", 0, 1))
        c = cells(("Y", 0, 0), ("X", 0, 1))
        assert not patterns_equal(a, c)

    def test_length_mismatch(self) -> None:
        a = cells(("X", 0, 0), ("Y", 0, 1))
        assert not patterns_equal(a, a[:1])
