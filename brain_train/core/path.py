from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

Cell = Tuple[int, int]


@dataclass(frozen=True)
class SafePath:
    """One accepted column per row; ``columns[row]`` is that row's safe column."""

    columns: Tuple[int, ...]

    @property
    def rows(self) -> int:
        return len(self.columns)

    def column_for(self, row: int) -> int:
        return self.columns[row]

    def is_safe(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.columns) and self.columns[row] == col

    def cells(self) -> Iterator[Cell]:
        for row, col in enumerate(self.columns):
            yield (row, col)

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, tuple) or len(cell) != 2:
            return False
        return self.is_safe(*cell)


class PathGenerator:
    """Draws a uniformly random safe column for every row, independently."""

    def __init__(self, rows: int = 5, rng: Optional[random.Random] = None) -> None:
        if rows <= 0:
            raise ValueError(f"rows must be positive, got {rows}")
        self._rows = rows
        self._rng = rng or random.Random()

    @property
    def rows(self) -> int:
        return self._rows

    def generate(self, cols: int) -> SafePath:
        if cols <= 0:
            raise ValueError(f"cols must be positive, got {cols}")
        return SafePath(tuple(self._rng.randrange(cols) for _ in range(self._rows)))
