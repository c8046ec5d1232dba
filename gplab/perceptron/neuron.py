"""Single-layer perceptron: one threshold neuron per class label."""

from __future__ import annotations

import random
from typing import Any, Iterable, Sequence

import torch

DTYPE = torch.float64


def as_input(vector: Sequence[int] | torch.Tensor) -> torch.Tensor:
    """Convert a pixel vector to a 1-D float64 tensor."""
    return torch.as_tensor(vector, dtype=DTYPE).reshape(-1)


class Neuron:
    """Weight vector plus bias for one class label."""

    def __init__(self, label: str, weights: Sequence[float] | torch.Tensor, bias: float = 0.0) -> None:
        self.label = label
        self.weights = torch.as_tensor(weights, dtype=DTYPE).clone().reshape(-1)
        self.bias = float(bias)

    @classmethod
    def random(cls, label: str, input_size: int, weight_range: float, rng: random.Random) -> 'Neuron':
        """Weights then bias, each uniform in ``[-weight_range, weight_range]``."""
        weights = [rng.uniform(-weight_range, weight_range) for _ in range(input_size)]
        bias = rng.uniform(-weight_range, weight_range)
        return cls(label, weights, bias)

    @property
    def input_size(self) -> int:
        return int(self.weights.numel())

    def net(self, x: torch.Tensor, threshold: float) -> float:
        return float(torch.dot(self.weights, x)) + self.bias - threshold

    def update(self, x: torch.Tensor, error: float, learning_rate: float) -> None:
        """Delta rule step for a single sample."""
        self.weights += learning_rate * error * x
        self.bias += learning_rate * error

    def snapshot(self) -> dict[str, Any]:
        return {'label': self.label, 'weights': self.weights.tolist(), 'bias': self.bias}

    def __repr__(self) -> str:
        return f"Neuron(label={self.label!r}, inputs={self.input_size}, bias={self.bias:.3f})"


class Perceptron:
    """Trained neurons in label order with a shared activation threshold."""

    def __init__(self, neurons: Iterable[Neuron], activation_threshold: float = 0.5) -> None:
        self.neurons: dict[str, Neuron] = {n.label: n for n in neurons}
        self.activation_threshold = float(activation_threshold)

    @property
    def labels(self) -> list[str]:
        return list(self.neurons)

    @property
    def input_size(self) -> int:
        first = next(iter(self.neurons.values()), None)
        return first.input_size if first is not None else 0

    def net_activations(self, vector: Sequence[int] | torch.Tensor) -> list[tuple[str, float]]:
        x = as_input(vector)
        return [(label, n.net(x, self.activation_threshold)) for label, n in self.neurons.items()]

    @staticmethod
    def winner(activations: Sequence[tuple[str, float]]) -> str:
        """Label with the highest net; ties go to the first label in training order."""
        best_label, best_net = activations[0]
        for label, net in activations[1:]:
            if net > best_net:
                best_label, best_net = label, net
        return best_label

    def classify(self, vector: Sequence[int] | torch.Tensor) -> str:
        return self.winner(self.net_activations(vector))

    def weight_matrix(self) -> torch.Tensor:
        """Stacked weights, shape ``(n_labels, input_size)``."""
        return torch.stack([n.weights for n in self.neurons.values()])

    def bias_vector(self) -> torch.Tensor:
        return torch.tensor([n.bias for n in self.neurons.values()], dtype=DTYPE)

    def to_dict(self) -> dict[str, Any]:
        return {
            'activation_threshold': self.activation_threshold,
            'neurons': [n.snapshot() for n in self.neurons.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Perceptron':
        neurons = [Neuron(d['label'], d['weights'], d.get('bias', 0.0)) for d in data.get('neurons', [])]
        return cls(neurons, data.get('activation_threshold', 0.5))

    def __repr__(self) -> str:
        return f"Perceptron(labels={self.labels}, inputs={self.input_size})"


__all__ = ['Neuron', 'Perceptron', 'as_input', 'DTYPE']
