"""Delta-rule training for the single-layer perceptron.

Each epoch visits every sample and, for each sample, every neuron in label
order (one-vs-all). A neuron's target is 1 only for samples carrying its own
label. Training stops once the epoch MSE reaches ``target_error`` or after
``max_epochs`` epochs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

import torch

from gplab.config import DEFAULT_PERCEPTRON_CONFIG, merge_config
from gplab.perceptron.neuron import Neuron, Perceptron, as_input
from gplab.perceptron.sample import Sample, labels_in_order
from gplab.utils.observability import EpochEvent, EpochObserver
from gplab.utils.rng_manager import RNGManager, ensure_rng_manager
from gplab.utils.validation import validate_dataset

logger = logging.getLogger(__name__)

ITERATION_LOG_LIMIT = 100


@dataclass(frozen=True)
class EpochRecord:
    epoch: int
    mse: float


@dataclass(frozen=True)
class IterationLogEntry:
    """One (sample, neuron) update step; values rounded for display."""

    epoch: int
    sample: str
    neuron: str
    error: int
    net: float
    weights: tuple[float, ...]


@dataclass
class TrainingResult:
    perceptron: Perceptron
    history: list[EpochRecord] = field(default_factory=list)
    iteration_log: list[IterationLogEntry] = field(default_factory=list)
    mse: float = math.inf
    epochs: int = 0
    accuracy: float = 0.0


def evaluate_accuracy(perceptron: Perceptron, samples: Sequence[Sample]) -> float:
    """Fraction of samples whose argmax-net label matches; first max wins."""
    if not samples:
        return 0.0
    correct = sum(1 for s in samples if perceptron.classify(s.pixels) == s.label)
    return correct / len(samples)


class Trainer:
    """Trains a :class:`Perceptron` on labelled samples.

    Args:
        config: Overrides for ``DEFAULT_PERCEPTRON_CONFIG``.
        rng_manager: Weights are drawn from its ``weights`` context.
        observer: Optional callable receiving an ``EpochEvent`` per epoch.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        rng_manager: RNGManager | None = None,
        observer: EpochObserver | None = None,
    ) -> None:
        cfg = merge_config(DEFAULT_PERCEPTRON_CONFIG, config, section='perceptron')
        self.learning_rate = float(cfg.get('learning_rate', 0.1))
        self.max_epochs = int(cfg.get('max_epochs', 1000))
        self.target_error = float(cfg.get('target_error', 0.01))
        self.weight_range = float(cfg.get('weight_range', 0.5))
        self.activation_threshold = float(cfg.get('activation_threshold', 0.5))
        self.min_samples = int(cfg.get('min_samples', 2))
        self.rng_manager = ensure_rng_manager(rng_manager)
        self.observer = observer

    def _init_perceptron(self, labels: list[str], input_size: int) -> Perceptron:
        rng = self.rng_manager.get_context_rng('weights')
        neurons = [Neuron.random(label, input_size, self.weight_range, rng) for label in labels]
        return Perceptron(neurons, self.activation_threshold)

    def train(self, samples: Iterable[Sample]) -> TrainingResult:
        samples = list(samples)
        input_size = validate_dataset(samples, min_samples=self.min_samples)
        labels = labels_in_order(samples)
        perceptron = self._init_perceptron(labels, input_size)
        inputs = [as_input(s.pixels) for s in samples]

        logger.info(
            "Training perceptron: samples=%d, classes=%d, inputs=%d, lr=%g",
            len(samples), len(labels), input_size, self.learning_rate,
        )

        history: list[EpochRecord] = []
        iteration_log: list[IterationLogEntry] = []
        mse = math.inf
        epoch = 0
        while epoch < self.max_epochs and mse > self.target_error:
            epoch += 1
            sum_sq = 0
            for sample, x in zip(samples, inputs):
                for label, neuron in perceptron.neurons.items():
                    net = neuron.net(x, self.activation_threshold)
                    output = 1 if net >= 0 else 0
                    target = 1 if sample.label == label else 0
                    error = target - output
                    if error != 0:
                        neuron.update(x, error, self.learning_rate)
                    sum_sq += error * error
                    if len(iteration_log) < ITERATION_LOG_LIMIT:
                        iteration_log.append(IterationLogEntry(
                            epoch=epoch,
                            sample=sample.label,
                            neuron=label,
                            error=error,
                            net=round(net, 3),
                            weights=tuple(round(w, 3) for w in neuron.weights[:5].tolist()),
                        ))
            mse = sum_sq / (len(samples) * len(labels))
            history.append(EpochRecord(epoch, mse))
            logger.debug("Epoch %d: mse=%.5f", epoch, mse)
            if self.observer is not None:
                self.observer(EpochEvent(
                    epoch=epoch,
                    mse=mse,
                    neurons=tuple(n.snapshot() for n in perceptron.neurons.values()),
                ))

        accuracy = evaluate_accuracy(perceptron, samples)
        logger.info("Training finished: epochs=%d, mse=%.5f, accuracy=%.3f", epoch, mse, accuracy)
        return TrainingResult(
            perceptron=perceptron,
            history=history,
            iteration_log=iteration_log,
            mse=mse,
            epochs=epoch,
            accuracy=accuracy,
        )


@torch.no_grad()
def batch_mse(perceptron: Perceptron, samples: Sequence[Sample]) -> float:
    """Mean squared one-vs-all error of a trained perceptron, without updates."""
    if not samples or not perceptron.neurons:
        return 0.0
    x = torch.stack([as_input(s.pixels) for s in samples])
    net = x @ perceptron.weight_matrix().T + perceptron.bias_vector() - perceptron.activation_threshold
    outputs = (net >= 0).to(x.dtype)
    labels = perceptron.labels
    targets = torch.tensor(
        [[1.0 if s.label == label else 0.0 for label in labels] for s in samples],
        dtype=x.dtype,
    )
    return float(((targets - outputs) ** 2).mean())


__all__ = [
    'Trainer',
    'TrainingResult',
    'EpochRecord',
    'IterationLogEntry',
    'evaluate_accuracy',
    'batch_mse',
    'ITERATION_LOG_LIMIT',
]
