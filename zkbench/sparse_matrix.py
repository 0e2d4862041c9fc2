"""A sparse matrix that stores only explicitly set entries."""

from __future__ import annotations

from typing import Any, Iterator, Sequence


class SparseMatrix:
    """Sparse matrix whose unset entries read as ``default``."""

    def __init__(self, rows: int, cols: int, default: Any = 0) -> None:
        self.rows = rows
        self.cols = cols
        self.default = default
        self._entries: dict[tuple[int, int], Any] = {}

    def _check(self, row: int, col: int) -> None:
        if not 0 <= row < self.rows:
            raise IndexError("row index out of bounds")
        if not 0 <= col < self.cols:
            raise IndexError("column index out of bounds")

    def grow(self, rows: int, cols: int) -> None:
        """Enlarge the matrix; it can never shrink."""
        if rows < self.rows or cols < self.cols:
            raise ValueError("a sparse matrix cannot shrink")
        self.rows = rows
        self.cols = cols

    def set(self, row: int, col: int, value: Any) -> None:
        """Set the value at the given row and column."""
        self._check(row, col)
        self._entries[(row, col)] = value

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        self.set(*key, value)

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, col = key
        self._check(row, col)
        return self._entries.get((row, col), self.default)

    def __iter__(self) -> Iterator[tuple[tuple[int, int], Any]]:
        """Yield ``((row, col), value)`` for non-default entries in row-major order."""
        for key in sorted(self._entries):
            value = self._entries[key]
            if value != self.default:
                yield key, value

    def iter_row(self, row: int) -> Iterator[tuple[int, Any]]:
        """Yield ``(col, value)`` for the non-default entries of one row."""
        for col in sorted(c for r, c in self._entries if r == row):
            value = self._entries[(row, col)]
            if value != self.default:
                yield col, value

    def cleanup(self) -> None:
        """Drop stored entries equal to the default."""
        self._entries = {k: v for k, v in self._entries.items() if v != self.default}

    def __len__(self) -> int:
        return len(self._entries)

    def __mul__(self, rhs: Sequence[Any]) -> list[Any]:
        """Matrix-vector product."""
        if len(rhs) != self.cols:
            raise ValueError("Vector length does not match number of columns.")
        result = [self.default] * self.rows
        for (row, col), value in sorted(self._entries.items()):
            result[row] = result[row] + value * rhs[col]
        return result

    def __repr__(self) -> str:
        return f"SparseMatrix(rows={self.rows}, cols={self.cols}, entries={len(self._entries)})"