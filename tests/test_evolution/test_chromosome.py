import random

import pytest

from gplab.core.cost import UNREACHABLE, Finite
from gplab.core.graph import Graph
from gplab.evolution.chromosome import LENGTH_PENALTY, Chromosome


def _graph() -> Graph:
    return Graph.from_edges(5, [(0, 1, 1), (1, 2, 1), (2, 4, 1), (0, 4, 10), (1, 3, 2), (3, 4, 2)])


def test_fitness_is_cost_plus_length_penalty():
    g = _graph()
    ch = Chromosome((0, 1, 2, 4), g)
    assert ch.is_valid
    assert ch.cost == Finite(3)
    assert ch.fitness == Finite(3 + LENGTH_PENALTY * 4)


def test_invalid_path_scores_unreachable():
    g = _graph()
    assert Chromosome((0, 2, 4), g).fitness is UNREACHABLE  # missing 0-2 edge
    assert Chromosome((1, 2, 4), g).fitness is UNREACHABLE  # wrong sender
    assert not Chromosome((0, 1, 1, 2, 4), g).is_valid


def test_shorter_path_wins_ties_on_cost():
    g = Graph.from_edges(5, [(0, 1, 2), (1, 4, 2), (0, 2, 1), (2, 3, 1), (3, 4, 2)])
    short = Chromosome((0, 1, 4), g)
    long = Chromosome((0, 2, 3, 4), g)
    assert short.cost == long.cost
    assert short.fitness < long.fitness


def test_chromosome_is_immutable_and_compares_by_genes():
    g = _graph()
    a = Chromosome([0, 1, 2, 4], g)
    b = Chromosome((0, 1, 2, 4), g)
    assert a == b and hash(a) == hash(b)
    assert a.genes == (0, 1, 2, 4)
    with pytest.raises(Exception):
        a.genes = (0, 4)  # type: ignore[misc]


def test_mutation_returns_new_instance_and_keeps_endpoints():
    g = _graph()
    ch = Chromosome((0, 1, 2, 4), g)
    rng = random.Random(0)
    for _ in range(50):
        m = ch.mutate(1.0, rng)
        assert m is not ch
        assert m.genes[0] == 0 and m.genes[-1] == 4
        assert len(set(m.genes)) == len(m.genes)
    assert ch.genes == (0, 1, 2, 4)


def test_mutation_is_a_no_op_without_free_nodes_or_interior():
    g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1)])
    full = Chromosome((0, 1, 2), g)
    assert full.mutate(1.0, random.Random(1)).genes == full.genes
    direct = Chromosome((0, 2), g)
    assert direct.mutate(1.0, random.Random(1)).genes == (0, 2)


def test_crossover_forces_endpoints_for_every_method():
    g = _graph()
    p1 = Chromosome((0, 1, 2, 4), g)
    p2 = Chromosome((0, 1, 3, 4), g)
    rng = random.Random(7)
    for method in ("uniform", "one_point", "two_point", "unknown"):
        for _ in range(20):
            c1, c2 = p1.crossover(p2, method, rng)
            for child in (c1, c2):
                assert child.genes[0] == g.sender
                assert child.genes[-1] == g.receiver


def test_repair_keeps_valid_paths_unchanged():
    g = _graph()
    ch = Chromosome((0, 1, 3, 4), g)
    repaired = ch.repair()
    assert repaired.genes == ch.genes
    assert repaired.fitness == ch.fitness


def test_str_shows_path_and_cost():
    g = _graph()
    assert str(Chromosome((0, 4), g)) == "Path: 0 -> 4, Cost: 10.20"
