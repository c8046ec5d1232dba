"""
Step Mode & Observers Tutorial

Goals:
- Advance the GA one generation at a time with step()
- Watch the per-step events through an observer callable
- Stop a run cooperatively from the observer
"""

from collections import Counter

from gplab.core.graph import Graph
from gplab.evolution.genetic_algorithm import GeneticAlgorithm
from gplab.utils.rng_manager import RNGManager


def build_graph() -> Graph:
    g = Graph(8)
    g.generate_random_network(connection_probability=0.45, rng=RNGManager(seed=3).get_context_rng('network'))
    return g


def main():
    g = build_graph()
    counts = Counter()

    def observer(event):
        counts[event.step_name] += 1

    ga = GeneticAlgorithm(
        g,
        {'population_size': 20, 'max_generations': 10, 'selection_method': 'rank'},
        rng_manager=RNGManager(seed=5),
        observer=observer,
    )
    while True:
        result = ga.step()
        print(f"gen={result.generation} best={result.statistics.min:.2f} avg={result.statistics.avg:.2f}")
        if result.stopped:
            print('stopped:', result.stop_reason.value)
            break
    print('events:', dict(counts))

    # Cooperative cancel: the request is honoured after the current generation.
    def cancel_after_first(event):
        if event.step_name == 'generation_end':
            ga2.stop()

    ga2 = GeneticAlgorithm(g, {'population_size': 20}, rng_manager=RNGManager(seed=6), observer=cancel_after_first)
    ga2.run(100)
    print('cancelled run:', ga2.generations, ga2.stop_reason.value)


if __name__ == '__main__':
    main()
