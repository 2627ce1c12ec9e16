from __future__ import annotations
import logging
import math
import random
import time
from typing import List, Optional, Sequence

from .aco_base import ACOConfig, ACOResult
from .ant import Ant
from .tsp import DistanceMatrix

logger = logging.getLogger(__name__)


class AntSystem:
    """Classic Ant System (AS): every ant deposits, global evaporation.

    The pheromone matrix is only written by :meth:`_update_pheromone`, after
    all ants of the iteration have finished building their tours.
    """

    def __init__(self, dist_matrix, cfg: Optional[ACOConfig] = None):
        self.cfg = (cfg or ACOConfig()).validate()
        self.D = dist_matrix if isinstance(dist_matrix, DistanceMatrix) else DistanceMatrix(dist_matrix)
        self.n = self.D.n
        self.rng = random.Random(self.cfg.seed)

        self.tau = [[self.cfg.tau0] * self.n for _ in range(self.n)]

        self.ants = [Ant(self.n, random.Random(self.rng.getrandbits(64))) for _ in range(self.cfg.n_ants)]
        self._reset_ants()

        self.best_tour: Optional[List[int]] = None
        self.best_length = math.inf
        self.history_best_lengths: List[int] = []
        self.history_best_tours: List[List[int]] = []

    @classmethod
    def from_coords(cls, coords: Sequence[Sequence[float]], cfg: Optional[ACOConfig] = None) -> "AntSystem":
        return cls(DistanceMatrix.from_coords(coords), cfg)

    def _reset_ants(self) -> None:
        for ant in self.ants:
            ant.reset(self.D, self.cfg.alpha, self.cfg.beta)

    def construct_tours(self) -> List[int]:
        lengths = []
        for ant in self.ants:
            for _ in range(self.n - 1):
                ant.select_next_city(self.tau)
            ant.close_tour()
            lengths.append(ant.tour_length())
        return lengths

    def _update_best(self, lengths: List[int]) -> None:
        for ant, L in zip(self.ants, lengths):
            if L < self.best_length:
                self.best_length = L
                self.best_tour = list(ant.tabu)
                logger.debug("new best length %d", L)

    def _deposit(self, lengths: List[int]) -> None:
        for ant, L in zip(self.ants, lengths):
            # only a single-city tour has length 0
            if L > 0:
                ant.lay_pheromone(1.0 / L)

    def _update_pheromone(self) -> None:
        keep = 1.0 - self.cfg.rho
        n = self.n
        for i in range(n):
            row = self.tau[i]
            for j in range(n):
                row[j] = row[j] * keep + sum(ant.contribution[i][j] for ant in self.ants)

    def run_iteration(self) -> int:
        lengths = self.construct_tours()
        self._update_best(lengths)
        self._deposit(lengths)
        self._update_pheromone()
        self._reset_ants()

        self.history_best_lengths.append(self.best_length)
        self.history_best_tours.append(list(self.best_tour))
        return self.best_length

    def run(self) -> ACOResult:
        cfg = self.cfg
        logger.info("START AS | cities=%d ants=%d iterations=%d alpha=%s beta=%s rho=%s",
                    self.n, cfg.n_ants, cfg.n_iterations, cfg.alpha, cfg.beta, cfg.rho)
        start = time.time()
        self.history_best_lengths = []
        self.history_best_tours = []

        for it in range(cfg.n_iterations):
            self.run_iteration()

        elapsed = time.time() - start
        logger.info("END AS | best=%d | time=%.3fs", self.best_length, elapsed)
        return ACOResult(best_tour=list(self.best_tour), best_length=self.best_length,
                         history_best_lengths=list(self.history_best_lengths), config=cfg,
                         elapsed_sec=elapsed)
