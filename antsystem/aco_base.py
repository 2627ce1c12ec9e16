from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InputError


@dataclass
class ACOConfig:
    alpha: float = 1.0          # pheromone influence
    beta: float = 3.0           # heuristic influence
    rho: float = 0.5            # evaporation rate
    tau0: float = 0.1           # initial pheromone on every edge
    n_ants: int = 50
    n_iterations: int = 200
    seed: Optional[int] = None

    def validate(self) -> "ACOConfig":
        if self.n_ants <= 0:
            raise InputError(f"n_ants must be positive, got {self.n_ants}")
        if self.n_iterations <= 0:
            raise InputError(f"n_iterations must be positive, got {self.n_iterations}")
        if self.alpha < 0 or self.beta < 0:
            raise InputError(f"alpha and beta must be non-negative, got {self.alpha}, {self.beta}")
        if not 0.0 < self.rho < 1.0:
            raise InputError(f"rho must lie in (0, 1), got {self.rho}")
        if self.tau0 < 0:
            raise InputError(f"tau0 must be non-negative, got {self.tau0}")
        return self


@dataclass
class ACOResult:
    best_tour: List[int]
    best_length: int
    history_best_lengths: List[int] = field(default_factory=list)
    config: Optional[ACOConfig] = None
    elapsed_sec: float = 0.0
