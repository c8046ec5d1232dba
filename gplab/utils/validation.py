"""Boundary validation for graph, GA, perceptron and dataset inputs.

The algorithmic core assumes validated inputs; these helpers are called at
construction time and raise :class:`ValidationError` with a machine-readable
``code`` plus keyword context.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

SELECTION_METHODS = ("tournament", "roulette", "rank")
CROSSOVER_METHODS = ("uniform", "one_point", "two_point")


class ValidationError(ValueError):
    """Structured validation failure."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context)

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.code}] {self.message}"
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"[{self.code}] {self.message} ({details})"


def validate_graph_params(size: int, sender: int, receiver: int) -> None:
    if not isinstance(size, int) or size < 2:
        raise ValidationError("invalid_graph_size", "Graph needs at least two nodes", size=size)
    for name, node in (("sender", sender), ("receiver", receiver)):
        if not isinstance(node, int) or not 0 <= node < size:
            raise ValidationError(
                "node_out_of_range",
                f"{name} must be a node index in [0, {size})",
                node=node,
                size=size,
            )
    if sender == receiver:
        raise ValidationError("sender_equals_receiver", "Sender and receiver must differ", node=sender)


def _check_rate(name: str, value: Any) -> None:
    if not isinstance(value, (int, float)) or not 0.0 <= float(value) <= 1.0:
        raise ValidationError("invalid_rate", f"{name} must be within [0, 1]", param=name, value=value)


def _check_positive_int(name: str, value: Any, minimum: int = 1) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValidationError(
            "invalid_param_domain",
            f"{name} must be an integer >= {minimum}",
            param=name,
            value=value,
        )


def _check_finite(name: str, value: Any, *, positive: bool = False, non_negative: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(float(value)):
        raise ValidationError("non_finite_param", f"{name} must be a finite number", param=name, value=value)
    if positive and value <= 0:
        raise ValidationError("invalid_param_domain", f"{name} must be > 0", param=name, value=value)
    if non_negative and value < 0:
        raise ValidationError("invalid_param_domain", f"{name} must be >= 0", param=name, value=value)


def validate_ga_config(config: Mapping[str, Any]) -> None:
    """Validate the keys present in a GA configuration mapping."""
    if "population_size" in config:
        _check_positive_int("population_size", config["population_size"], minimum=2)
    if "max_generations" in config:
        _check_positive_int("max_generations", config["max_generations"])
    if "elite_size" in config:
        _check_positive_int("elite_size", config["elite_size"], minimum=0)
    if "tournament_size" in config:
        _check_positive_int("tournament_size", config["tournament_size"])
    for key in ("mutation_rate", "crossover_rate"):
        if key in config:
            _check_rate(key, config[key])
    if "selection_method" in config and config["selection_method"] not in SELECTION_METHODS:
        raise ValidationError(
            "unknown_selection_method",
            f"selection_method must be one of {SELECTION_METHODS}",
            value=config["selection_method"],
        )
    if "crossover_method" in config and config["crossover_method"] not in CROSSOVER_METHODS:
        raise ValidationError(
            "unknown_crossover_method",
            f"crossover_method must be one of {CROSSOVER_METHODS}",
            value=config["crossover_method"],
        )


def validate_perceptron_config(config: Mapping[str, Any]) -> None:
    if "learning_rate" in config:
        _check_finite("learning_rate", config["learning_rate"], positive=True)
    if "max_epochs" in config:
        _check_positive_int("max_epochs", config["max_epochs"])
    if "min_samples" in config:
        _check_positive_int("min_samples", config["min_samples"])
    if "target_error" in config:
        _check_finite("target_error", config["target_error"], non_negative=True)
    if "weight_range" in config:
        _check_finite("weight_range", config["weight_range"], non_negative=True)
    if "activation_threshold" in config:
        _check_finite("activation_threshold", config["activation_threshold"])


def validate_pixels(pixels: Sequence[Any]) -> None:
    bad = [p for p in pixels if p not in (0, 1)]
    if bad:
        raise ValidationError("non_binary_pixels", "Pixels must be 0 or 1", offending=tuple(bad[:5]))


def validate_dataset(samples: Iterable[Any], *, min_samples: int = 1) -> int:
    """Check that a dataset is usable for one training run.

    Returns the shared input length.
    """
    samples = list(samples)
    if len(samples) < min_samples:
        raise ValidationError(
            "not_enough_samples",
            f"At least {min_samples} sample(s) required",
            count=len(samples),
        )
    lengths = {len(s.pixels) for s in samples}
    if len(lengths) != 1:
        raise ValidationError(
            "mismatched_sample_lengths",
            "All samples must share the same pixel vector length",
            lengths=tuple(sorted(lengths)),
        )
    (length,) = lengths
    if length == 0:
        raise ValidationError("empty_sample", "Samples must contain at least one pixel")
    return length


__all__ = [
    "ValidationError",
    "SELECTION_METHODS",
    "CROSSOVER_METHODS",
    "validate_graph_params",
    "validate_ga_config",
    "validate_perceptron_config",
    "validate_pixels",
    "validate_dataset",
]
