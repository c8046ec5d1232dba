"""Observation events, history export and determinism signatures.

Observers are plain callables injected at construction time. They receive
frozen snapshots and cannot change the state of the algorithm that emits
them.
"""

from __future__ import annotations

import csv
import dataclasses
import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Sequence


@dataclass(frozen=True)
class StepEvent:
    """Snapshot emitted by the genetic algorithm at well-defined points.

    Attributes:
        step_name: One of ``initialization``, ``generation_start``,
            ``elite_selection``, ``parent_selection``, ``crossover``,
            ``mutation``, ``population_update``, ``generation_end``.
        generation: Generation counter of the current population.
        best: Current best chromosome (or None for an empty population).
        statistics: Fitness statistics of the current population.
        population: Tuple snapshot of the current chromosomes.
        extra: Step-specific data (parents, children, elites, new population).
    """

    step_name: str
    generation: int
    best: Any
    statistics: Any
    population: tuple = ()
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class EpochEvent:
    """Snapshot emitted by the perceptron trainer after each epoch."""

    epoch: int
    mse: float
    neurons: tuple = ()


StepObserver = Callable[[StepEvent], None]
EpochObserver = Callable[[EpochEvent], None]


def freeze_extra(extra: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(extra or {}))


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    if hasattr(obj, "tolist"):
        return obj.tolist()
    # Cost values
    if hasattr(obj, "is_finite") and hasattr(obj, "__float__"):
        return float(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    return repr(obj)


def determinism_signature(obj: Any) -> str:
    """SHA-256 of a canonical JSON dump; equal runs give equal signatures."""
    payload = json.dumps(_jsonable(obj), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def write_history_csv(path: str | Path, records: Iterable[Any], fieldnames: Sequence[str] | None = None) -> Path:
    """Write dataclass or mapping records to CSV; costs are written as floats."""
    rows = []
    for rec in records:
        data = _jsonable(rec)
        if not isinstance(data, dict):
            raise TypeError(f"Cannot export record of type {type(rec).__name__}")
        rows.append(data)
    if fieldnames is None:
        fieldnames = list(rows[0].keys()) if rows else []
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(fieldnames), extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    return out


__all__ = [
    "StepEvent",
    "EpochEvent",
    "StepObserver",
    "EpochObserver",
    "freeze_extra",
    "determinism_signature",
    "write_history_csv",
]
