"""Chromosome: an immutable candidate path from sender to receiver."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from gplab.core.cost import UNREACHABLE, Cost
from gplab.core.graph import Graph
from gplab.evolution import operators
from gplab.repair.repair import repair as repair_fn

# Per-gene penalty; breaks cost ties in favour of shorter paths.
LENGTH_PENALTY = 0.1


@dataclass(frozen=True)
class Chromosome:
    """Path genes plus the fitness computed from the referenced graph.

    Attributes:
        genes: Node indices; first is the sender and last the receiver when valid
        graph: Graph the path is evaluated against
        fitness: Path cost plus ``LENGTH_PENALTY`` per gene, or UNREACHABLE
        is_valid: Whether the genes form a simple connected sender→receiver path

    Equality and hashing use the genes only.
    """

    genes: tuple[int, ...]
    graph: Graph = field(compare=False, repr=False)
    fitness: Cost = field(init=False, compare=False)
    is_valid: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'genes', tuple(int(g) for g in self.genes))
        valid = self.graph.is_valid_path(self.genes)
        object.__setattr__(self, 'is_valid', valid)
        object.__setattr__(self, 'fitness', self._calculate_fitness(valid))

    def _calculate_fitness(self, valid: bool) -> Cost:
        if not valid:
            return UNREACHABLE
        cost = self.graph.calculate_path_cost(self.genes)
        if not cost.is_finite:
            return UNREACHABLE
        return cost + LENGTH_PENALTY * len(self.genes)

    @property
    def cost(self) -> Cost:
        return self.graph.calculate_path_cost(self.genes)

    @property
    def interior(self) -> frozenset[int]:
        return frozenset(self.genes[1:-1])

    def mutate(self, mutation_rate: float = 0.1, rng: random.Random | None = None) -> 'Chromosome':
        rng = rng or random.Random()
        genes = operators.mutate(self.genes, self.graph.size, mutation_rate, rng)
        return Chromosome(genes, self.graph)

    def crossover(
        self,
        other: 'Chromosome',
        method: str = 'uniform',
        rng: random.Random | None = None,
    ) -> tuple['Chromosome', 'Chromosome']:
        rng = rng or random.Random()
        g1, g2 = operators.crossover(
            self.genes, other.genes, self.graph.sender, self.graph.receiver, rng, method
        )
        return Chromosome(g1, self.graph), Chromosome(g2, self.graph)

    def repair(self) -> 'Chromosome':
        return repair_fn(self)

    @classmethod
    def from_path(cls, path: Sequence[int], graph: Graph) -> 'Chromosome':
        return cls(tuple(path), graph)

    def __len__(self) -> int:
        return len(self.genes)

    def __str__(self) -> str:
        return f"Path: {' -> '.join(str(g) for g in self.genes)}, Cost: {self.fitness:.2f}"


__all__ = ['Chromosome', 'LENGTH_PENALTY']
