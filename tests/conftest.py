import random

import pytest

from antsystem import DistanceMatrix, TSPInstance

RECTANGLE = [(0, 0), (0, 3), (4, 3), (4, 0)]


class FixedRandom(random.Random):
    """Generator with a fixed start city and a fixed roulette draw."""

    def __init__(self, u=0.0, start=0):
        super().__init__(0)
        self.u = u
        self.start = start

    def random(self):
        return self.u

    def randrange(self, *args, **kwargs):
        return self.start


@pytest.fixture
def rectangle():
    return DistanceMatrix.from_coords(RECTANGLE)


@pytest.fixture
def uniform3():
    return DistanceMatrix([[0, 1, 1], [1, 0, 1], [1, 1, 0]])


@pytest.fixture
def instance10():
    return TSPInstance.random_euclidean(10, seed=7)


def uniform_pheromone(n, value=0.1):
    return [[value] * n for _ in range(n)]
