import pytest

from antsystem import ACOConfig, AntSystem, DistanceMatrix, DomainError, InputError
from conftest import RECTANGLE


def test_rectangle_reaches_perimeter():
    cfg = ACOConfig(alpha=1.0, beta=3.0, rho=0.5, n_ants=50, n_iterations=50, seed=1)
    res = AntSystem.from_coords(RECTANGLE, cfg).run()
    assert res.best_length == 14
    assert len(res.best_tour) == 5
    assert res.best_tour[0] == res.best_tour[-1]
    assert sorted(res.best_tour[:4]) == [0, 1, 2, 3]
    assert res.config is cfg
    assert res.elapsed_sec >= 0.0


def test_setup_builds_colony(rectangle):
    solver = AntSystem(rectangle, ACOConfig(n_ants=7, n_iterations=1, seed=0))
    assert solver.n == 4
    assert len(solver.ants) == 7
    assert all(v == 0.1 for row in solver.tau for v in row)
    assert all(len(ant.tabu) == 1 for ant in solver.ants)


def test_setup_accepts_raw_matrix():
    solver = AntSystem([[0, 2], [2, 0]], ACOConfig(n_ants=2, n_iterations=3, seed=0))
    assert isinstance(solver.D, DistanceMatrix)
    res = solver.run()
    assert res.best_length == 4


def test_setup_rejects_asymmetric_matrix():
    with pytest.raises(InputError):
        AntSystem([[0, 2], [3, 0]], ACOConfig(n_ants=2, n_iterations=1))


@pytest.mark.parametrize("kwargs", [
    {"n_ants": 0},
    {"n_iterations": 0},
    {"rho": 0.0},
    {"rho": 1.0},
    {"alpha": -1.0},
    {"beta": -0.5},
    {"tau0": -0.1},
])
def test_invalid_config(rectangle, kwargs):
    with pytest.raises(InputError):
        AntSystem(rectangle, ACOConfig(**kwargs))


def test_constructed_tours_are_closed_permutations(instance10):
    solver = AntSystem(instance10.distance_matrix(), ACOConfig(n_ants=15, n_iterations=1, seed=4))
    lengths = solver.construct_tours()
    d = solver.D
    for ant, L in zip(solver.ants, lengths):
        tabu = ant.tabu
        assert len(tabu) == 11
        assert len(set(tabu[:10])) == 10
        assert tabu[0] == tabu[10]
        assert L == sum(d[tabu[i]][tabu[i + 1]] for i in range(10))


def test_best_length_is_non_increasing(instance10):
    solver = AntSystem(instance10.distance_matrix(), ACOConfig(n_ants=10, n_iterations=40, seed=11))
    res = solver.run()
    hist = res.history_best_lengths
    assert len(hist) == 40
    assert all(b <= a for a, b in zip(hist, hist[1:]))
    assert hist[-1] == res.best_length
    assert instance10.tour_length(res.best_tour) == res.best_length
    assert solver.history_best_tours[-1] == res.best_tour


@pytest.mark.parametrize("rho", [0.05, 0.5, 0.95])
def test_pheromone_stays_symmetric_and_non_negative(instance10, rho):
    solver = AntSystem(instance10.distance_matrix(), ACOConfig(n_ants=8, n_iterations=1, rho=rho, seed=2))
    for _ in range(15):
        solver.run_iteration()
        tau = solver.tau
        for i in range(10):
            for j in range(10):
                assert tau[i][j] >= 0.0
                assert tau[i][j] == pytest.approx(tau[j][i])


def test_pheromone_update_is_evaporation_plus_contributions(instance10):
    cfg = ACOConfig(n_ants=6, n_iterations=1, rho=0.3, seed=8)
    solver = AntSystem(instance10.distance_matrix(), cfg)
    before = [row[:] for row in solver.tau]
    lengths = solver.construct_tours()
    solver._update_best(lengths)
    solver._deposit(lengths)
    contributions = [[row[:] for row in ant.contribution] for ant in solver.ants]
    solver._update_pheromone()
    for i in range(10):
        for j in range(10):
            expected = before[i][j] * 0.7 + sum(c[i][j] for c in contributions)
            assert solver.tau[i][j] == pytest.approx(expected)


def test_each_ant_deposits_inverse_length_once_per_edge(instance10):
    solver = AntSystem(instance10.distance_matrix(), ACOConfig(n_ants=5, n_iterations=1, seed=3))
    lengths = solver.construct_tours()
    solver._deposit(lengths)
    for ant, L in zip(solver.ants, lengths):
        nonzero = [v for row in ant.contribution for v in row if v]
        assert len(nonzero) == 2 * 10
        assert all(v == 1.0 / L for v in nonzero)


def test_ants_are_reset_after_iteration(instance10):
    solver = AntSystem(instance10.distance_matrix(), ACOConfig(n_ants=4, n_iterations=1, seed=6))
    solver.run_iteration()
    for ant in solver.ants:
        assert len(ant.tabu) == 1
        assert len(ant.allowed) == 9
        assert all(v == 0.0 for row in ant.contribution for v in row)


def test_single_city_run():
    res = AntSystem.from_coords([(5, 5)], ACOConfig(n_ants=3, n_iterations=4, seed=0)).run()
    assert res.best_length == 0
    assert res.best_tour == [0, 0]


def test_fixed_seed_is_reproducible(instance10):
    cfg = ACOConfig(n_ants=10, n_iterations=20, seed=99)
    a = AntSystem(instance10.distance_matrix(), cfg).run()
    b = AntSystem(instance10.distance_matrix(), cfg).run()
    assert a.best_tour == b.best_tour
    assert a.history_best_lengths == b.history_best_lengths


def test_zero_distance_aborts_run():
    solver = AntSystem.from_coords([(0, 0), (0, 0), (3, 4)], ACOConfig(n_ants=2, n_iterations=5, seed=0))
    with pytest.raises(DomainError):
        solver.run()
