"""Tests for brain_train.core.path – safe path generation."""

from __future__ import annotations

import random

import pytest

from brain_train.core.path import PathGenerator, SafePath


class TestSafePath:
    def test_is_safe(self):
        path = SafePath((1, 0, 1, 0, 1))
        assert path.is_safe(4, 1)
        assert not path.is_safe(4, 0)

    def test_out_of_range_row_is_not_safe(self):
        path = SafePath((0, 0))
        assert not path.is_safe(-1, 0)
        assert not path.is_safe(2, 0)

    def test_cells_one_per_row(self):
        path = SafePath((1, 0, 1, 0, 1))
        assert list(path.cells()) == [(0, 1), (1, 0), (2, 1), (3, 0), (4, 1)]

    def test_contains(self):
        path = SafePath((1, 0))
        assert (0, 1) in path
        assert (0, 0) not in path
        assert "0-1" not in path

    def test_column_for(self):
        assert SafePath((2, 0, 1)).column_for(0) == 2


class TestPathGenerator:
    @pytest.mark.parametrize("cols", [1, 2, 3, 7])
    def test_one_column_per_row_in_range(self, cols: int):
        gen = PathGenerator(rows=5, rng=random.Random(cols))
        for _ in range(50):
            path = gen.generate(cols)
            assert path.rows == 5
            assert all(0 <= c < cols for c in path.columns)

    def test_single_column_is_forced(self):
        path = PathGenerator(rng=random.Random(1)).generate(1)
        assert path.columns == (0, 0, 0, 0, 0)

    def test_deterministic_with_seed(self):
        a = PathGenerator(rng=random.Random(42)).generate(4)
        b = PathGenerator(rng=random.Random(42)).generate(4)
        assert a == b

    def test_all_columns_reachable(self):
        gen = PathGenerator(rng=random.Random(3))
        seen = set()
        for _ in range(200):
            seen.update(gen.generate(3).columns)
        assert seen == {0, 1, 2}

    def test_zero_cols_rejected(self):
        with pytest.raises(ValueError):
            PathGenerator().generate(0)

    def test_zero_rows_rejected(self):
        with pytest.raises(ValueError):
            PathGenerator(rows=0)
