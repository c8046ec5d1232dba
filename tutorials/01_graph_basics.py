"""
Graph Basics Tutorial

Goals:
- Set and remove directed connections
- Evaluate path cost and validity, including the unreachable case
- Generate a seeded random network and print its adjacency matrix
"""

from gplab.core.cost import UNREACHABLE
from gplab.core.graph import Graph
from gplab.utils.rng_manager import RNGManager


def main():
    g = Graph(size=4, sender=0, receiver=3)

    # Connections are directed; set both directions for an undirected edge.
    g.set_connection(0, 1, 2)
    g.set_connection(1, 3, 2)
    print('cost 0->1->3:', g.calculate_path_cost([0, 1, 3]))
    print('valid:', g.is_valid_path([0, 1, 3]))

    # A missing edge makes the whole path unreachable instead of raising.
    print('cost 0->2->3 is unreachable:', g.calculate_path_cost([0, 2, 3]) is UNREACHABLE)

    g.remove_connection(1, 3)
    print('after removal:', g.get_shortest_path_dijkstra())

    # Random symmetric wiring, reproducible through a named RNG context.
    rng = RNGManager(seed=7)
    g.generate_random_network(max_weight=9, connection_probability=0.6, rng=rng.get_context_rng('network'))
    print(g)
    print('dijkstra:', g.get_shortest_path_dijkstra())


if __name__ == '__main__':
    main()
