"""Export a trained perceptron to a ``torch.nn.Module``.

The module computes ``x @ W.T + (b - threshold)`` in one ``nn.Linear`` so
that a batch of vectors is scored at once. Its net values match
:meth:`Perceptron.net_activations` for the same input.
"""

from __future__ import annotations

from typing import Any

import torch
import torch.nn as nn

from gplab.perceptron.neuron import Perceptron


class PerceptronModule(nn.Module):
    """Linear scoring layer plus argmax/threshold helpers."""

    def __init__(self, linear: nn.Linear, labels: list[str]) -> None:
        super().__init__()
        self.linear = linear
        self.labels = list(labels)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if x.dim() == 1:
            x = x.unsqueeze(0)
        weight = self.linear.weight
        return self.linear(x.to(device=weight.device, dtype=weight.dtype))

    @torch.no_grad()
    def outputs(self, x: torch.Tensor) -> torch.Tensor:
        """Binary neuron outputs (net >= 0)."""
        return (self.forward(x) >= 0).to(torch.int64)

    @torch.no_grad()
    def predict_labels(self, x: torch.Tensor) -> list[str]:
        # torch.argmax returns the first maximal index
        indices = torch.argmax(self.forward(x), dim=1)
        return [self.labels[int(i)] for i in indices]


def to_pytorch_model(perceptron: Perceptron, config: dict[str, Any] | None = None) -> PerceptronModule:
    """Build a :class:`PerceptronModule` with weights copied from ``perceptron``.

    Args:
        perceptron: Trained perceptron with at least one neuron.
        config: Optional ``device`` (default ``cpu``) and ``dtype`` (default
            ``float64``) settings.
    """
    cfg = config or {}
    device = torch.device(cfg.get('device', 'cpu'))
    dtype = getattr(torch, str(cfg.get('dtype', 'float64')))
    if not perceptron.neurons:
        raise ValueError("Cannot export a perceptron without neurons")

    linear = nn.Linear(perceptron.input_size, len(perceptron.neurons), bias=True, device=device, dtype=dtype)
    with torch.no_grad():
        linear.weight.copy_(perceptron.weight_matrix())
        linear.bias.copy_(perceptron.bias_vector() - perceptron.activation_threshold)
    module = PerceptronModule(linear, perceptron.labels)
    module.eval()
    return module


__all__ = ['PerceptronModule', 'to_pytorch_model']
