from __future__ import annotations
import random
from dataclasses import dataclass
from numbers import Integral
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import InputError


class DistanceMatrix:
    """Symmetric integer distance matrix with a zero diagonal.

    Rows are stored as tuples, so the matrix cannot be changed once built and
    can be shared by every ant of a colony. ``d[i][j]`` reads a distance.
    """

    __slots__ = ("_rows", "n")

    def __init__(self, rows: Sequence[Sequence[int]]):
        n = len(rows)
        if n == 0:
            raise InputError("distance matrix must not be empty")
        if any(len(row) != n for row in rows):
            raise InputError("distance matrix must be square")
        for i, row in enumerate(rows):
            for j, v in enumerate(row):
                if not isinstance(v, Integral) or isinstance(v, bool):
                    raise InputError(f"distance[{i}][{j}] is not an integer: {v!r}")
                if v < 0:
                    raise InputError(f"distance[{i}][{j}] is negative: {v}")
        for i in range(n):
            if rows[i][i] != 0:
                raise InputError(f"distance[{i}][{i}] must be 0")
            for j in range(i + 1, n):
                if rows[i][j] != rows[j][i]:
                    raise InputError(f"distance matrix is not symmetric at ({i}, {j})")
        self._rows: Tuple[Tuple[int, ...], ...] = tuple(tuple(int(v) for v in row) for row in rows)
        self.n = n

    @classmethod
    def from_coords(cls, coords: Sequence[Sequence[float]]) -> "DistanceMatrix":
        """Euclidean distances rounded half up to the nearest integer."""
        xy = np.asarray(coords, dtype=float)
        if xy.ndim != 2 or xy.shape[0] == 0 or xy.shape[1] != 2:
            raise InputError("coords must be a non-empty sequence of (x, y) pairs")
        diff = xy[:, None, :] - xy[None, :, :]
        d = np.floor(np.sqrt(np.sum(diff ** 2, axis=2)) + 0.5).astype(np.int64)
        return cls(d.tolist())

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, i: int) -> Tuple[int, ...]:
        return self._rows[i]

    def __iter__(self):
        return iter(self._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DistanceMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"DistanceMatrix(n={self.n})"

    def as_array(self) -> np.ndarray:
        arr = np.array(self._rows, dtype=np.int64)
        arr.flags.writeable = False
        return arr

    def tour_length(self, tour: Sequence[int]) -> int:
        """Length of a closed tour given as ``[start, ..., start]``."""
        return sum(self._rows[a][b] for a, b in zip(tour, tour[1:]))


def _parse_line(line: str, lineno: int) -> Tuple[int, int]:
    cols = line.split()
    if len(cols) != 3:
        raise InputError(f"line {lineno}: expected '<id> <x> <y>', got {line.strip()!r}")
    try:
        return int(cols[1]), int(cols[2])
    except ValueError:
        raise InputError(f"line {lineno}: coordinates must be integers, got {line.strip()!r}") from None


@dataclass
class TSPInstance:
    coords: List[Tuple[int, int]]
    name: str = "euclidean_tsp"

    @staticmethod
    def from_lines(lines: Iterable[str], n_cities: Optional[int] = None, name: str = "euclidean_tsp") -> "TSPInstance":
        """Parse ``<id> <x> <y>`` lines; the id column is ignored.

        With ``n_cities`` only the first ``n_cities`` city lines are read.
        """
        if n_cities is not None and n_cities <= 0:
            raise InputError(f"number of cities must be positive, got {n_cities}")
        coords = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            coords.append(_parse_line(line, lineno))
            if n_cities is not None and len(coords) == n_cities:
                break
        if not coords:
            raise InputError("no city coordinates found")
        if n_cities is not None and len(coords) < n_cities:
            raise InputError(f"expected {n_cities} cities, found {len(coords)}")
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def from_file(path: Union[str, Path], n_cities: Optional[int] = None) -> "TSPInstance":
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                return TSPInstance.from_lines(f, n_cities=n_cities, name=path.stem)
        except OSError as e:
            raise InputError(f"cannot read city file {path}: {e}") from e

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: int = 100, name: str = "random_euclidean"):
        if n <= 0:
            raise InputError(f"number of cities must be positive, got {n}")
        rng = random.Random(seed)
        # distinct points keep every inter-city distance non-zero
        points = rng.sample(range((square_size + 1) ** 2), n)
        coords = [divmod(p, square_size + 1) for p in points]
        return TSPInstance(coords=coords, name=name)

    def n_cities(self) -> int:
        return len(self.coords)

    def distance_matrix(self) -> DistanceMatrix:
        return DistanceMatrix.from_coords(self.coords)

    def tour_length(self, tour: Sequence[int]) -> int:
        return self.distance_matrix().tour_length(tour)
