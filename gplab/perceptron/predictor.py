"""Inference with a trained perceptron."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import torch

from gplab.perceptron.neuron import Perceptron
from gplab.translation.pytorch_impl import PerceptronModule, to_pytorch_model
from gplab.utils.validation import ValidationError


@dataclass(frozen=True)
class NeuronOutput:
    label: str
    net: float
    output: int


@dataclass(frozen=True)
class Prediction:
    """Argmax label plus per-neuron net activation and binary output."""

    label: str
    detail: tuple[NeuronOutput, ...]


class Predictor:
    def __init__(self, perceptron: Perceptron) -> None:
        if not perceptron.neurons:
            raise ValidationError("untrained_perceptron", "Perceptron has no neurons")
        self.perceptron = perceptron
        self._module: PerceptronModule | None = None

    def _check_length(self, vector: Sequence[int] | torch.Tensor) -> None:
        n = len(vector)
        if n != self.perceptron.input_size:
            raise ValidationError(
                "mismatched_input_length",
                "Input vector length differs from the trained input size",
                expected=self.perceptron.input_size,
                got=n,
            )

    def predict(self, vector: Sequence[int] | torch.Tensor) -> Prediction:
        """Score every neuron; ties go to the first label in training order."""
        self._check_length(vector)
        activations = self.perceptron.net_activations(vector)
        detail = tuple(NeuronOutput(label, net, 1 if net >= 0 else 0) for label, net in activations)
        return Prediction(Perceptron.winner(activations), detail)

    @property
    def module(self) -> PerceptronModule:
        # exported lazily; rebuild by creating a new Predictor after retraining
        if self._module is None:
            self._module = to_pytorch_model(self.perceptron)
        return self._module

    def predict_batch(self, vectors: Sequence[Sequence[int]] | torch.Tensor) -> list[str]:
        """Argmax labels for many vectors in one forward pass."""
        x = torch.as_tensor(vectors, dtype=torch.float64)
        if x.dim() != 2 or x.shape[1] != self.perceptron.input_size:
            raise ValidationError(
                "mismatched_input_length",
                "Batch must have shape (n, input_size)",
                expected=self.perceptron.input_size,
                shape=tuple(x.shape),
            )
        return self.module.predict_labels(x)


__all__ = ['Predictor', 'Prediction', 'NeuronOutput']
