"""Mutation and crossover operators on path gene sequences.

Operators work on plain gene sequences and return new lists; the
:class:`~gplab.evolution.chromosome.Chromosome` wrapper turns them into new
chromosomes with recomputed fitness. Every random draw comes from the
``random.Random`` passed in, normally an :class:`RNGManager` context stream.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence

Genes = Sequence[int]
Children = tuple[list[int], list[int]]


def _force_endpoints(genes: list[int], sender: int, receiver: int) -> list[int]:
    if genes:
        genes[0] = sender
        genes[-1] = receiver
    return genes


def uniform_crossover(parent1: Genes, parent2: Genes, sender: int, receiver: int, rng: random.Random) -> Children:
    """Swap genes position-wise with probability 0.5.

    Positions beyond the shorter parent are inherited unchanged by the child
    built on the longer parent.
    """
    min_len = min(len(parent1), len(parent2))
    child1: list[int] = []
    child2: list[int] = []
    for i in range(min_len):
        if rng.random() < 0.5:
            child1.append(parent1[i])
            child2.append(parent2[i])
        else:
            child1.append(parent2[i])
            child2.append(parent1[i])
    child1.extend(parent1[min_len:])
    child2.extend(parent2[min_len:])
    return _force_endpoints(child1, sender, receiver), _force_endpoints(child2, sender, receiver)


def one_point_crossover(parent1: Genes, parent2: Genes, sender: int, receiver: int, rng: random.Random) -> Children:
    min_len = min(len(parent1), len(parent2))
    if min_len <= 2:
        return uniform_crossover(parent1, parent2, sender, receiver, rng)
    point = rng.randrange(1, min_len)
    child1 = list(parent1[:point]) + list(parent2[point:])
    child2 = list(parent2[:point]) + list(parent1[point:])
    return _force_endpoints(child1, sender, receiver), _force_endpoints(child2, sender, receiver)


def two_point_crossover(parent1: Genes, parent2: Genes, sender: int, receiver: int, rng: random.Random) -> Children:
    min_len = min(len(parent1), len(parent2))
    if min_len <= 3:
        return uniform_crossover(parent1, parent2, sender, receiver, rng)
    point1 = rng.randrange(1, min_len - 1)
    point2 = rng.randrange(point1 + 1, min_len)
    child1 = list(parent1[:point1]) + list(parent2[point1:point2]) + list(parent1[point2:])
    child2 = list(parent2[:point1]) + list(parent1[point1:point2]) + list(parent2[point2:])
    return _force_endpoints(child1, sender, receiver), _force_endpoints(child2, sender, receiver)


CROSSOVER_OPERATORS: dict[str, Callable[..., Children]] = {
    'uniform': uniform_crossover,
    'one_point': one_point_crossover,
    'two_point': two_point_crossover,
}


def crossover(
    parent1: Genes,
    parent2: Genes,
    sender: int,
    receiver: int,
    rng: random.Random,
    method: str = 'uniform',
) -> Children:
    """Dispatch to the named crossover; unknown names use uniform."""
    op = CROSSOVER_OPERATORS.get(method, uniform_crossover)
    return op(parent1, parent2, sender, receiver, rng)


def mutate(genes: Genes, num_nodes: int, rate: float, rng: random.Random) -> list[int]:
    """Replace one interior gene with a node not used elsewhere in the path.

    Applied with probability ``rate`` and only to paths with interior nodes.
    When every node is already in use the genes come back unchanged.
    """
    new_genes = list(genes)
    if len(new_genes) > 2 and rng.random() < rate:
        index = rng.randrange(1, len(new_genes) - 1)
        taken = set(new_genes[:index]) | set(new_genes[index + 1:])
        available = [node for node in range(num_nodes) if node not in taken]
        if available:
            new_genes[index] = rng.choice(available)
    return new_genes


__all__ = [
    'uniform_crossover',
    'one_point_crossover',
    'two_point_crossover',
    'crossover',
    'mutate',
    'CROSSOVER_OPERATORS',
]
