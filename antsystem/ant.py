from __future__ import annotations
import random
from typing import List, Optional, Sequence

from .errors import DomainError, InputError


class Ant:
    """A single agent building one closed tour per iteration.

    Tour state (``tabu``, the visited flags, ``current_city`` and the private
    ``contribution`` matrix) lives only until the next :meth:`reset`; the
    object itself is reused across iterations.
    """

    def __init__(self, n_cities: int, rng: Optional[random.Random] = None):
        if n_cities <= 0:
            raise InputError(f"number of cities must be positive, got {n_cities}")
        self.n = n_cities
        self.rng = rng or random.Random()
        self.distance = None
        self.alpha = 1.0
        self.beta = 1.0
        self.tabu: List[int] = []
        self.visited: List[bool] = [False] * n_cities
        self.n_allowed = n_cities
        self.first_city = -1
        self.current_city = -1
        self.contribution: List[List[float]] = [[0.0] * n_cities for _ in range(n_cities)]

    def reset(self, distance, alpha: float, beta: float) -> None:
        if len(distance) != self.n:
            raise InputError(f"distance matrix has {len(distance)} cities, ant expects {self.n}")
        self.distance = distance
        self.alpha = alpha
        self.beta = beta
        self.contribution = [[0.0] * self.n for _ in range(self.n)]
        self.visited = [False] * self.n
        self.n_allowed = self.n
        self.first_city = self.rng.randrange(self.n)
        self.tabu = []
        self._visit(self.first_city)

    @property
    def allowed(self) -> List[int]:
        return [c for c in range(self.n) if not self.visited[c]]

    @property
    def closed(self) -> bool:
        return len(self.tabu) == self.n + 1

    def _visit(self, city: int) -> None:
        self.visited[city] = True
        self.n_allowed -= 1
        self.tabu.append(city)
        self.current_city = city

    def transition_probabilities(self, pheromone: Sequence[Sequence[float]]) -> List[float]:
        """Probability of moving from the current city to each city.

        Visited cities get 0. Allowed cities are weighted by
        ``tau^alpha * (1/d)^beta`` and normalised.
        """
        cur = self.current_city
        row = self.distance[cur]
        weights = [0.0] * self.n
        total = 0.0
        for c in range(self.n):
            if self.visited[c]:
                continue
            d = row[c]
            if d == 0:
                raise DomainError(f"zero distance between city {cur} and city {c}")
            w = (pheromone[cur][c] ** self.alpha) * ((1.0 / d) ** self.beta)
            weights[c] = w
            total += w
        if total == 0.0:
            # every weight underflowed or pheromone is exhausted: fall back to uniform
            share = 1.0 / self.n_allowed
            return [0.0 if self.visited[c] else share for c in range(self.n)]
        return [w / total for w in weights]

    def select_next_city(self, pheromone: Sequence[Sequence[float]]) -> int:
        if self.n_allowed == 0:
            raise DomainError("no allowed city left to select")
        probs = self.transition_probabilities(pheromone)
        u = self.rng.random()
        acc = 0.0
        selected = None
        last = None
        for c in range(self.n):
            if self.visited[c]:
                continue
            last = c
            acc += probs[c]
            if acc >= u:
                selected = c
                break
        if selected is None:
            # rounding left the running sum just below u
            selected = last
        self._visit(selected)
        return selected

    def close_tour(self) -> None:
        if self.n_allowed:
            raise DomainError(f"cannot close tour, {self.n_allowed} cities not visited yet")
        if self.closed:
            raise DomainError("tour is already closed")
        self.tabu.append(self.first_city)

    def tour_length(self) -> int:
        if not self.closed:
            raise DomainError("tour length requested before the tour was closed")
        tabu, d = self.tabu, self.distance
        return sum(d[tabu[i]][tabu[i + 1]] for i in range(self.n))

    def lay_pheromone(self, amount: float) -> None:
        """Write ``amount`` on every edge of the closed tour, both directions."""
        if not self.closed:
            raise DomainError("cannot lay pheromone before the tour was closed")
        for a, b in zip(self.tabu, self.tabu[1:]):
            self.contribution[a][b] = amount
            self.contribution[b][a] = amount
