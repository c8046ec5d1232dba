import random

from gplab.evolution import operators
from gplab.repair.repair import repair_path


def _random_genes(rng: random.Random, n: int = 8) -> list[int]:
    return [rng.randrange(n) for _ in range(rng.randint(2, 10))]


def test_uniform_keeps_tails_of_longer_parent():
    rng = random.Random(0)
    c1, c2 = operators.uniform_crossover([0, 1, 2, 3, 4, 5, 9], [0, 6, 9], 0, 9, rng)
    assert len(c1) == 7 and len(c2) == 3
    assert c1[3:6] == [3, 4, 5]


def test_one_and_two_point_fall_back_to_uniform_on_short_parents():
    p1, p2 = [0, 9], [0, 9]
    for op in (operators.one_point_crossover, operators.two_point_crossover):
        c1, c2 = op(p1, p2, 0, 9, random.Random(1))
        assert c1 == [0, 9] and c2 == [0, 9]
    # min_len == 3 is enough for one point but not for two points
    a, b = [0, 1, 9], [0, 2, 9]
    rng_a, rng_b = random.Random(5), random.Random(5)
    assert operators.two_point_crossover(a, b, 0, 9, rng_a) == operators.uniform_crossover(a, b, 0, 9, rng_b)


def test_cut_points_stay_inside_bounds():
    rng = random.Random(3)
    p1 = [0, 1, 2, 3, 4, 9]
    p2 = [0, 5, 6, 7, 8, 9]
    for _ in range(200):
        c1, c2 = operators.one_point_crossover(p1, p2, 0, 9, rng)
        assert c1[0] == 0 and c1[-1] == 9
        assert sorted(c1 + c2) == sorted(p1 + p2)
        c1, c2 = operators.two_point_crossover(p1, p2, 0, 9, rng)
        assert c1[0] == 0 and c2[-1] == 9
        assert sorted(c1 + c2) == sorted(p1 + p2)


def test_crossover_endpoint_invariant_on_random_parents():
    rng = random.Random(11)
    for _ in range(300):
        p1, p2 = _random_genes(rng), _random_genes(rng)
        method = rng.choice(["uniform", "one_point", "two_point"])
        for child in operators.crossover(p1, p2, 0, 7, rng, method):
            assert child[0] == 0 and child[-1] == 7


def test_repair_deduplicates_and_restores_endpoints():
    assert repair_path([0, 1, 1, 2, 4], 0, 4) == [0, 1, 2, 4]
    assert repair_path([1, 2], 0, 4) == [0, 1, 2, 4]
    assert repair_path([0, 4, 2, 4], 0, 4) == [0, 4, 2, 4]
    assert repair_path([0, 2, 2], 0, 4) == [0, 2, 4]
    assert repair_path([3], 0, 4) == [3]


def test_repair_is_idempotent_on_its_own_output_for_endpoint_forced_input():
    rng = random.Random(2)
    for _ in range(300):
        genes = _random_genes(rng)
        genes[0], genes[-1] = 0, 7
        once = repair_path(genes, 0, 7)
        assert once[0] == 0 and once[-1] == 7
        assert repair_path(once, 0, 7) == once
        assert len(set(once[:-1])) == len(once[:-1])


def test_mutate_respects_rate_zero():
    rng = random.Random(0)
    assert operators.mutate([0, 1, 2, 9], 10, 0.0, rng) == [0, 1, 2, 9]
