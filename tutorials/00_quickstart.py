from gplab.core.graph import Graph
from gplab.evolution.genetic_algorithm import GeneticAlgorithm
from gplab.utils.rng_manager import RNGManager


def main():
    # Quickstart goal:
    # 1) Build a small weighted graph between a sender and a receiver
    # 2) Ask Dijkstra for the exact answer
    # 3) Let the genetic algorithm search for a path and compare

    # Five nodes; node 0 is the sender and node 4 the receiver by default.
    # Every pair is connected with weight 1, except a direct 0-4 edge that costs 10.
    edges = [(i, j, 1) for i in range(5) for j in range(i + 1, 5)]
    g = Graph.from_edges(5, edges)
    g.set_connection(0, 4, 10)
    g.set_connection(4, 0, 10)

    # Exact reference: any two-hop path costs 2.
    path, cost = g.get_shortest_path_dijkstra()
    print('dijkstra:', path, f'{cost:.1f}')

    # The GA takes a plain dict config; unspecified keys keep their defaults.
    # All randomness flows through the RNGManager, so the seed fixes the run.
    ga = GeneticAlgorithm(g, {'population_size': 30}, rng_manager=RNGManager(seed=42))
    best, history = ga.run(50)

    # Fitness = path cost + 0.1 per gene, so a two-hop path scores 2.3.
    print('ga_best:', best)
    print('generations:', len(history), 'stop_reason:', ga.stop_reason.value)


if __name__ == '__main__':
    main()
