"""
Perceptron Demo (GPLab)

Summary:
- Trains a single-layer perceptron on the built-in 8x8 patterns
- Prints the epoch count, training MSE, post-training MSE, accuracy and per-neuron nets for one pattern
- Keeps a journal of runs across --repeat trainings and logs MSE history to CSV
"""

from __future__ import annotations

import argparse
import logging

from gplab.experiments.journal import ExperimentJournal
from gplab.perceptron.patterns import build_demo_samples, render
from gplab.perceptron.predictor import Predictor
from gplab.perceptron.trainer import Trainer, batch_mse
from gplab.utils.observability import write_history_csv
from gplab.utils.rng_manager import RNGManager


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--lr', type=float, default=0.1)
    ap.add_argument('--epochs', type=int, default=1000)
    ap.add_argument('--target', type=float, default=0.01)
    ap.add_argument('--weight-range', type=float, default=0.5)
    ap.add_argument('--threshold', type=float, default=0.5)
    ap.add_argument('--repeat', type=int, default=1)
    ap.add_argument('--seed', type=int, default=1234)
    ap.add_argument('--csv', default='demos/perceptron_log.csv')
    ap.add_argument('-v', '--verbose', action='store_true')
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    samples = build_demo_samples()
    config = {
        'learning_rate': args.lr,
        'max_epochs': args.epochs,
        'target_error': args.target,
        'weight_range': args.weight_range,
        'activation_threshold': args.threshold,
    }
    journal = ExperimentJournal()
    result = None
    for run in range(max(1, args.repeat)):
        result = Trainer(config, rng_manager=RNGManager(seed=args.seed + run)).train(samples)
        journal.record(result, len(samples))
        print(f"run={run} epochs={result.epochs} mse={result.mse:.5f} accuracy={result.accuracy * 100:.1f}%")

    # error of the final weights, measured without further updates
    print(f"final_mse={batch_mse(result.perceptron, samples):.5f}")

    for entry in journal.entries:
        print(entry)

    probe = samples[0]
    print(render(probe))
    prediction = Predictor(result.perceptron).predict(probe.pixels)
    print(f"recognized={prediction.label} (true={probe.label})")
    for item in prediction.detail:
        print(f"  {item.label:<12} net={item.net:+.4f} f(net)={item.output}")

    try:
        out = write_history_csv(args.csv, result.history)
        print('csv_log:', out)
    except OSError as exc:
        logging.getLogger(__name__).warning("Could not write %s: %s", args.csv, exc)


if __name__ == '__main__':
    main()
