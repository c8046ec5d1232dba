"""
Path Search GA Demo (GPLab)

Summary:
- Builds a random weighted graph and finds a sender→receiver path with the GA
- Compares the GA result against Dijkstra's exact shortest path
- Optionally runs the parameter sweeps and prints a per-experiment report
- Logs per-generation fitness to CSV

Use --quick for a short sanity run.
"""

from __future__ import annotations

import argparse
import logging

from gplab.core.graph import Graph
from gplab.evolution.genetic_algorithm import GeneticAlgorithm
from gplab.experiments.runner import ExperimentRunner
from gplab.utils.observability import write_history_csv
from gplab.utils.rng_manager import RNGManager


def print_report(report: dict) -> None:
    for name, entry in report['experiments'].items():
        deviation = entry['deviation']
        dev_text = f"{deviation:.1f}%" if deviation is not None else "n/a"
        print(f"{name}: best_param={entry['best_parameter']} best={entry['best_fitness']:.2f} deviation={dev_text}")
    if report['summary']:
        s = report['summary']
        print(f"overall: {s['best_experiment']}={s['best_parameter']} best={s['best_fitness']:.2f}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--size', type=int, default=10, help='number of nodes')
    ap.add_argument('--density', type=float, default=0.5, help='connection probability')
    ap.add_argument('--pop', type=int, default=50)
    ap.add_argument('--gens', type=int, default=100)
    ap.add_argument('--selection', default='tournament', choices=['tournament', 'roulette', 'rank'])
    ap.add_argument('--crossover', default='uniform', choices=['uniform', 'one_point', 'two_point'])
    ap.add_argument('--seed', type=int, default=1234)
    ap.add_argument('--sweeps', action='store_true', help='also run the parameter sweeps')
    ap.add_argument('--csv', default='demos/path_ga_log.csv')
    ap.add_argument('--quick', action='store_true', help='use a tiny config for sanity-run')
    ap.add_argument('-v', '--verbose', action='store_true')
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    if args.quick:
        args.size = 6
        args.pop = 12
        args.gens = 10

    rng = RNGManager(seed=args.seed)
    graph = Graph(args.size)
    graph.generate_random_network(connection_probability=args.density, rng=rng.get_context_rng('network'))
    print(graph)

    path, cost = graph.get_shortest_path_dijkstra()
    print(f"dijkstra: path={path} cost={cost:.2f}")

    ga = GeneticAlgorithm(
        graph,
        {
            'population_size': args.pop,
            'selection_method': args.selection,
            'crossover_method': args.crossover,
        },
        rng_manager=rng,
    )
    best, history = ga.run(args.gens)
    stats = ga.get_statistics()
    print(f"ga: {best} generations={stats['generations']} stop={stats['stop_reason']} time={stats['execution_time']:.3f}s")
    if best is not None and best.is_valid:
        print(f"ga_cost={best.cost:.2f} dijkstra_cost={cost:.2f}")

    try:
        out = write_history_csv(args.csv, history)
        print('csv_log:', out)
    except OSError as exc:
        logging.getLogger(__name__).warning("Could not write %s: %s", args.csv, exc)

    if args.sweeps:
        runner = ExperimentRunner(
            graph,
            RNGManager(seed=args.seed + 1),
            progress=lambda cur, total, msg: print(f"[{cur}/{total}] {msg}"),
        )
        runner.run_experiments()
        print_report(runner.generate_report())


if __name__ == '__main__':
    main()
