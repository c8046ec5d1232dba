import random

import pytest

from gplab.core.cost import UNREACHABLE, Finite
from gplab.core.graph import Graph
from gplab.utils.validation import ValidationError


def _line_graph() -> Graph:
    # 0 - 1 - 2 - 3 with a costly shortcut 0 - 3
    return Graph.from_edges(4, [(0, 1, 1), (1, 2, 2), (2, 3, 3), (0, 3, 10)])


def test_defaults_and_diagonal():
    g = Graph(5)
    assert g.sender == 0 and g.receiver == 4
    assert all(g.get_connection_weight(i, i) == Finite(0) for i in range(5))
    assert g.get_connection_weight(0, 1) is UNREACHABLE


def test_boundary_validation_rejects_bad_nodes():
    with pytest.raises(ValidationError) as exc:
        Graph(4, sender=0, receiver=0)
    assert exc.value.code == "sender_equals_receiver"
    with pytest.raises(ValidationError) as exc:
        Graph(4, sender=0, receiver=7)
    assert exc.value.code == "node_out_of_range"
    with pytest.raises(ValidationError):
        Graph(1)


def test_set_connection_is_directed_and_ignores_out_of_range():
    g = Graph(3)
    g.set_connection(0, 1, 4)
    assert g.get_connection_weight(0, 1) == Finite(4)
    assert g.get_connection_weight(1, 0) is UNREACHABLE
    g.set_connection(0, 9, 1)
    g.remove_connection(9, 0)
    assert g.get_connection_weight(0, 9) is UNREACHABLE
    g.remove_connection(0, 1)
    assert g.get_connection_weight(0, 1) is UNREACHABLE


def test_path_cost_and_validity():
    g = _line_graph()
    assert g.calculate_path_cost([0, 1, 2, 3]) == Finite(6)
    assert g.calculate_path_cost([0, 2, 3]) is UNREACHABLE
    assert g.calculate_path_cost([0]) is UNREACHABLE
    assert g.is_valid_path([0, 1, 2, 3])
    assert g.is_valid_path([0, 3])
    assert not g.is_valid_path([1, 2, 3])  # wrong start
    assert not g.is_valid_path([0, 1, 1, 2, 3])  # repeated interior node
    assert not g.is_valid_path([0, 1, 2, 9])
    assert not g.is_valid_path([0, 2, 3])  # missing edge


def test_dijkstra_finds_cheapest_path():
    g = _line_graph()
    path, cost = g.get_shortest_path_dijkstra()
    assert path == [0, 1, 2, 3]
    assert cost == Finite(6)
    assert g.calculate_path_cost(path) == cost


def test_dijkstra_unreachable_receiver():
    g = Graph.from_edges(4, [(0, 1, 1), (1, 2, 1)])
    assert g.get_shortest_path_dijkstra() == ([], UNREACHABLE)


def test_dijkstra_is_never_beaten_by_a_simple_path_on_random_graphs():
    from itertools import permutations

    for seed in range(5):
        g = Graph(6)
        g.generate_random_network(max_weight=9, connection_probability=0.5, rng=random.Random(seed))
        _, best = g.get_shortest_path_dijkstra()
        interior = [1, 2, 3, 4]
        for k in range(len(interior) + 1):
            for mid in permutations(interior, k):
                assert best <= g.calculate_path_cost([0, *mid, 5])


def test_random_network_is_symmetric_and_seeded():
    g1, g2 = Graph(7), Graph(7)
    g1.generate_random_network(rng=random.Random(3))
    g2.generate_random_network(rng=random.Random(3))
    assert g1.to_matrix() == g2.to_matrix()
    for i in range(7):
        for j in range(7):
            assert g1.get_connection_weight(i, j) == g1.get_connection_weight(j, i)
            w = g1.get_connection_weight(i, j)
            if i != j and w.is_finite:
                assert 1 <= float(w) <= 10


def test_str_renders_missing_edges_as_infinity():
    text = str(Graph.from_edges(3, [(0, 1, 2)]))
    assert "∞" in text
    assert "Sender: 0" in text and "Receiver: 2" in text
