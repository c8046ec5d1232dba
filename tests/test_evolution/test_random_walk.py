import random

from gplab.core.graph import Graph
from gplab.generation.random_walk import fallback_path, generate_random_chromosome, random_walk


def test_random_walk_reaches_receiver_without_revisiting():
    g = Graph(8)
    g.generate_random_network(connection_probability=0.6, rng=random.Random(1))
    rng = random.Random(2)
    for _ in range(50):
        path = random_walk(g, 16, rng)
        if path is None:
            continue
        assert path[0] == g.sender and path[-1] == g.receiver
        assert len(set(path)) == len(path)
        assert g.is_valid_path(path)


def test_fallback_prefers_direct_then_two_hop():
    direct = Graph.from_edges(4, [(0, 3, 5), (0, 1, 1), (1, 3, 1)])
    assert fallback_path(direct) == [0, 3]
    two_hop = Graph.from_edges(4, [(0, 2, 1), (2, 3, 1), (0, 1, 1), (1, 3, 1)])
    assert fallback_path(two_hop) == [0, 1, 3]
    none = Graph.from_edges(4, [(0, 1, 1)])
    assert fallback_path(none) == [0, 3]


def test_generated_chromosome_uses_fallback_when_walks_fail(caplog):
    g = Graph.from_edges(4, [(0, 1, 1)])
    with caplog.at_level("WARNING"):
        ch = generate_random_chromosome(g, random.Random(0), max_attempts=5)
    assert ch.genes == (0, 3)
    assert "falling back" in caplog.text


def test_step_limit_makes_walks_give_up():
    # a long chain cannot be walked in two steps
    g = Graph.from_edges(6, [(i, i + 1, 1) for i in range(5)])
    assert random_walk(g, 2, random.Random(0)) is None
    assert random_walk(g, 5, random.Random(0)) == [0, 1, 2, 3, 4, 5]
