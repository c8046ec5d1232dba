"""
Experiments Tutorial

Goals:
- Run a reduced parameter sweep with a progress callback
- Read the per-experiment report against the Dijkstra reference
- Record a perceptron run in the experiment journal
"""

from gplab.core.graph import Graph
from gplab.experiments.journal import ExperimentJournal
from gplab.experiments.runner import ExperimentRunner, Sweep
from gplab.perceptron.patterns import build_demo_samples
from gplab.perceptron.trainer import Trainer
from gplab.utils.rng_manager import RNGManager


def main():
    rng = RNGManager(seed=21)
    g = Graph(8)
    g.generate_random_network(rng=rng.get_context_rng('network'))

    sweeps = (
        Sweep('population_size', 'population_size', (10, 30), 20),
        Sweep('mutation_rate', 'mutation_rate', (0.05, 0.2), 20),
    )
    runner = ExperimentRunner(g, rng_manager=rng, progress=lambda cur, total, msg: print(f"[{cur}/{total}] {msg}"))
    runner.run_experiments(sweeps)

    report = runner.generate_report()
    for name, entry in report['experiments'].items():
        print(f"{name}: best_parameter={entry['best_parameter']} best={entry['best_fitness']:.2f} "
              f"deviation={entry['deviation']}")

    samples = build_demo_samples()
    journal = ExperimentJournal()
    result = Trainer({'max_epochs': 50}, rng_manager=rng).train(samples)
    entry = journal.record(result, dataset_size=len(samples))
    print('journal:', len(journal), entry)


if __name__ == '__main__':
    main()
