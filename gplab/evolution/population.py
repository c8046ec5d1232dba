"""Population of path chromosomes for one generation.

The chromosome list is kept sorted ascending by fitness after every
initialization and size-maintenance pass, so index 0 is always the best.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable

from gplab.core import cost as costs
from gplab.core.cost import UNREACHABLE, Cost
from gplab.core.graph import Graph
from gplab.evolution.chromosome import Chromosome
from gplab.evolution.selection import (
    rank_selection,
    roulette_selection,
    select_parent,
    tournament_selection,
)
from gplab.generation.random_walk import generate_random_chromosome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitnessStatistics:
    min: Cost
    max: Cost
    avg: Cost
    std: Cost


@dataclass(frozen=True)
class GenerationRecord:
    """Fitness summary appended once per completed generation."""

    generation: int
    best: Cost
    average: Cost
    worst: Cost


EMPTY_STATISTICS = FitnessStatistics(UNREACHABLE, UNREACHABLE, UNREACHABLE, costs.ZERO)


class Population:
    """Sorted set of chromosomes with selection and diversity helpers."""

    def __init__(
        self,
        size: int,
        graph: Graph,
        chromosome_length: int | None = None,
        rng: random.Random | None = None,
        selection_rng: random.Random | None = None,
    ) -> None:
        self.size = size
        self.graph = graph
        self.chromosome_length = chromosome_length or max(graph.size - 2, 4)
        self.rng = rng or random.Random()
        self.selection_rng = selection_rng or self.rng
        self.chromosomes: list[Chromosome] = []
        self.generation = 0
        self.fitness_history: list[GenerationRecord] = []

    # ---------------- Construction ----------------

    def _generate_random_chromosome(self) -> Chromosome:
        return generate_random_chromosome(self.graph, self.rng, self.chromosome_length)

    def initialize_random(self) -> None:
        self.chromosomes = [self._generate_random_chromosome() for _ in range(self.size)]
        self._sort_by_fitness()
        logger.debug(
            "Initialized population: size=%d, valid=%d",
            len(self.chromosomes), sum(1 for c in self.chromosomes if c.is_valid),
        )

    def _sort_by_fitness(self) -> None:
        # stable: ties keep insertion order
        self.chromosomes.sort(key=lambda ch: ch.fitness)

    def replace(self, chromosomes: Iterable[Chromosome]) -> None:
        self.chromosomes = list(chromosomes)

    # ---------------- Queries ----------------

    def get_best_chromosome(self) -> Chromosome | None:
        return self.chromosomes[0] if self.chromosomes else None

    def get_worst_chromosome(self) -> Chromosome | None:
        return self.chromosomes[-1] if self.chromosomes else None

    def get_average_fitness(self) -> Cost:
        return costs.mean(ch.fitness for ch in self.chromosomes)

    def get_fitness_statistics(self) -> FitnessStatistics:
        if not self.chromosomes:
            return EMPTY_STATISTICS
        values = [ch.fitness for ch in self.chromosomes]
        return FitnessStatistics(
            min=min(values),
            max=max(values),
            avg=costs.mean(values),
            std=costs.pstdev(values),
        )

    def get_diversity(self) -> float:
        """Mean pairwise Jaccard distance between interior node sets.

        Pairs whose interiors are both empty are not counted. Returns 0.0 for
        fewer than two chromosomes or when no pair is comparable.
        """
        if len(self.chromosomes) <= 1:
            return 0.0
        interiors = [ch.interior for ch in self.chromosomes]
        total_distance = 0.0
        comparisons = 0
        for i in range(len(interiors)):
            for j in range(i + 1, len(interiors)):
                union = interiors[i] | interiors[j]
                if not union:
                    continue
                intersection = interiors[i] & interiors[j]
                total_distance += (len(union) - len(intersection)) / len(union)
                comparisons += 1
        return total_distance / comparisons if comparisons else 0.0

    # ---------------- Selection ----------------

    def selection_tournament(self, tournament_size: int = 3) -> Chromosome | None:
        return tournament_selection(self.chromosomes, tournament_size, self.selection_rng)

    def selection_roulette(self) -> Chromosome | None:
        return roulette_selection(self.chromosomes, self.selection_rng)

    def selection_rank(self) -> Chromosome | None:
        return rank_selection(self.chromosomes, self.selection_rng)

    def select(self, method: str, tournament_size: int = 3) -> Chromosome | None:
        return select_parent(self.chromosomes, method, self.selection_rng, tournament_size)

    # ---------------- Maintenance ----------------

    def remove_duplicates(self) -> None:
        seen: set[tuple[int, ...]] = set()
        unique: list[Chromosome] = []
        for ch in self.chromosomes:
            if ch.genes not in seen:
                seen.add(ch.genes)
                unique.append(ch)
        self.chromosomes = unique

    def maintain_size(self) -> None:
        if len(self.chromosomes) > self.size:
            self.chromosomes = self.chromosomes[: self.size]
        while len(self.chromosomes) < self.size:
            self.chromosomes.append(self._generate_random_chromosome())
        self._sort_by_fitness()

    def update_generation(self) -> GenerationRecord:
        self.generation += 1
        stats = self.get_fitness_statistics()
        record = GenerationRecord(
            generation=self.generation,
            best=stats.min,
            average=stats.avg,
            worst=stats.max,
        )
        self.fitness_history.append(record)
        return record

    def snapshot(self) -> tuple[Chromosome, ...]:
        return tuple(self.chromosomes)

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __str__(self) -> str:
        if not self.chromosomes:
            return "Empty population"
        stats = self.get_fitness_statistics()
        lines = [
            f"Population (generation {self.generation}, size {len(self.chromosomes)}):",
            f"Best fitness: {stats.min:.2f}",
            f"Average fitness: {stats.avg:.2f}",
            f"Worst fitness: {stats.max:.2f}",
            f"Diversity: {self.get_diversity():.3f}",
            "",
        ]
        for i, ch in enumerate(self.chromosomes[:5]):
            lines.append(f"{i + 1}. {ch}")
        return "\n".join(lines)


__all__ = ['Population', 'FitnessStatistics', 'GenerationRecord']
