"""Parent selection strategies (lower fitness is better).

All strategies take a sequence of chromosomes already sorted ascending by
fitness (index 0 is the best) and a ``random.Random`` stream. An empty
sequence yields ``None``.
"""

from __future__ import annotations

import random
from typing import Any, Sequence


def _weighted_pick(items: Sequence[Any], weights: Sequence[float], rng: random.Random) -> Any:
    total = sum(weights)
    target = rng.random() * total
    cumulative = 0.0
    for item, w in zip(items, weights):
        cumulative += w
        if cumulative >= target:
            return item
    return items[-1]


def tournament_selection(chromosomes: Sequence[Any], tournament_size: int, rng: random.Random) -> Any:
    """Best of ``min(k, n)`` distinct members drawn without replacement."""
    if not chromosomes:
        return None
    k = max(1, min(int(tournament_size), len(chromosomes)))
    indices = rng.sample(range(len(chromosomes)), k)
    return min((chromosomes[i] for i in indices), key=lambda ch: ch.fitness)


def roulette_selection(chromosomes: Sequence[Any], rng: random.Random) -> Any:
    """Fitness-proportional pick with weight ``max - f + 1``.

    Falls back to a uniform pick when any member is unreachable or the
    weights sum to zero.
    """
    if not chromosomes:
        return None
    if any(not ch.fitness.is_finite for ch in chromosomes):
        return chromosomes[rng.randrange(len(chromosomes))]
    values = [float(ch.fitness) for ch in chromosomes]
    worst = max(values)
    weights = [worst - v + 1.0 for v in values]
    if sum(weights) == 0:
        return chromosomes[rng.randrange(len(chromosomes))]
    return _weighted_pick(chromosomes, weights, rng)


def rank_selection(chromosomes: Sequence[Any], rng: random.Random) -> Any:
    """Linear rank weights: the best gets ``n``, the worst gets 1."""
    if not chromosomes:
        return None
    n = len(chromosomes)
    weights = [float(n - i) for i in range(n)]
    return _weighted_pick(chromosomes, weights, rng)


def select_parent(
    chromosomes: Sequence[Any],
    method: str,
    rng: random.Random,
    tournament_size: int = 3,
) -> Any:
    """Dispatch by name; unknown methods use tournament selection."""
    if method == 'roulette':
        return roulette_selection(chromosomes, rng)
    if method == 'rank':
        return rank_selection(chromosomes, rng)
    return tournament_selection(chromosomes, tournament_size, rng)


__all__ = [
    'tournament_selection',
    'roulette_selection',
    'rank_selection',
    'select_parent',
]
