"""A small row-major matrix and the flatten/reshape helpers used to send it."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

SAMPLE_ROWS = 2
SAMPLE_COLS = 3


class Matrix:
    """A dense matrix stored as a sequence of rows."""

    def __init__(self, rows: Iterable[Iterable[float]]) -> None:
        self._data = [list(row) for row in rows]

    @property
    def rows(self) -> int:
        """The number of rows."""
        return len(self._data)

    @property
    def cols(self) -> int:
        """The number of columns, taken from the first row."""
        return len(self._data[0]) if self._data else 0

    def __getitem__(self, index: int) -> list[float]:
        return list(self._data[index])

    def __iter__(self):
        return (list(row) for row in self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Matrix({self._data!r})"

    def flatten(self) -> list[float]:
        """All elements in row-major order."""
        return [value for row in self._data for value in row]


def sample_matrix() -> Matrix:
    """The 2x3 matrix the matrix publisher sends every second."""
    return Matrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


def reshape(
    data: Sequence[float], rows: int = SAMPLE_ROWS, cols: int = SAMPLE_COLS
) -> list[list[float]]:
    """Rebuild a rows x cols matrix from flat row-major data."""
    if len(data) != rows * cols:
        raise ValueError(f"Size mismatch! Got {len(data)} elements.")
    return [list(data[start : start + cols]) for start in range(0, rows * cols, cols)]


def format_matrix(rows: Iterable[Iterable[float]]) -> str:
    """Render a matrix one row per line, values separated by spaces."""
    return "\n".join(" ".join(f"{value:g}" for value in row) for row in rows)