"""Generational genetic algorithm for sender→receiver path search.

One generation:
- elitism copies the ``elite_size`` best chromosomes unchanged;
- parents are selected by the configured method, crossed over with
  probability ``crossover_rate`` (otherwise passed through), mutated and
  repaired, until ``population_size`` children exist;
- the new population is truncated or topped up, then deduplicated.

A run stops on the first of: optimal fitness reached, best fitness
stagnating over ``STAGNATION_WINDOW`` generations, diversity below
``MIN_DIVERSITY``, a cooperative cancel, or the generation cap. ``step()``
advances the same routine one generation at a time.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gplab.config import DEFAULT_GA_CONFIG, merge_config
from gplab.core.cost import UNREACHABLE, Cost
from gplab.core.graph import Graph
from gplab.evolution.chromosome import LENGTH_PENALTY, Chromosome
from gplab.evolution.population import FitnessStatistics, GenerationRecord, Population
from gplab.utils.observability import StepEvent, StepObserver, freeze_extra
from gplab.utils.rng_manager import RNGManager, ensure_rng_manager

logger = logging.getLogger(__name__)

OPTIMAL_TOLERANCE = 0.1
STAGNATION_WINDOW = 20
MIN_DIVERSITY = 0.01


class GAState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    CONVERGED = "converged"


class StopReason(Enum):
    OPTIMAL_FOUND = "optimal_found"
    STAGNATION = "stagnation"
    LOW_DIVERSITY = "low_diversity"
    MAX_GENERATIONS = "max_generations"
    CANCELLED = "cancelled"


_CONVERGED_REASONS = frozenset({StopReason.OPTIMAL_FOUND, StopReason.STAGNATION, StopReason.LOW_DIVERSITY})


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single ``GeneticAlgorithm.step()`` call."""

    generation: int
    best: Chromosome | None
    statistics: FitnessStatistics
    stopped: bool
    stop_reason: StopReason | None = None


class GeneticAlgorithm:
    """Evolves a population of paths on a fixed graph.

    Args:
        graph: Graph to search; it is read but never modified.
        config: Overrides for ``DEFAULT_GA_CONFIG``; unknown keys and
            out-of-range values raise ``ValidationError``.
        rng_manager: Source of the ``init``, ``selection``, ``crossover`` and
            ``mutation`` streams. A freshly seeded manager is used if omitted.
        observer: Optional callable receiving a ``StepEvent`` at each step.
    """

    def __init__(
        self,
        graph: Graph,
        config: dict[str, Any] | None = None,
        rng_manager: RNGManager | None = None,
        observer: StepObserver | None = None,
    ) -> None:
        self.graph = graph
        self.rng_manager = ensure_rng_manager(rng_manager)
        self.observer = observer
        self._apply_config(merge_config(DEFAULT_GA_CONFIG, config))

        self.population: Population | None = None
        self.state = GAState.IDLE
        self.stop_reason: StopReason | None = None
        self._cancel_requested = False
        self._optimal: tuple[list[int], Cost] | None = None
        self._reset_run_statistics()

    def _apply_config(self, cfg: dict[str, Any]) -> None:
        self.population_size = int(cfg.get('population_size', 50))
        self.max_generations = int(cfg.get('max_generations', 100))
        self.mutation_rate = float(cfg.get('mutation_rate', 0.1))
        self.crossover_rate = float(cfg.get('crossover_rate', 0.8))
        self.elite_size = int(cfg.get('elite_size', 5))
        self.tournament_size = int(cfg.get('tournament_size', 3))
        self.selection_method = str(cfg.get('selection_method', 'tournament'))
        self.crossover_method = str(cfg.get('crossover_method', 'uniform'))
        self.chromosome_length = cfg.get('chromosome_length')

    def _reset_run_statistics(self) -> None:
        self.generations = 0
        self.best_fitness_history: list[Cost] = []
        self.average_fitness_history: list[Cost] = []
        self.execution_time = 0.0

    # ---------------- Parameters ----------------

    def get_parameters(self) -> dict[str, Any]:
        return {
            'population_size': self.population_size,
            'max_generations': self.max_generations,
            'mutation_rate': self.mutation_rate,
            'crossover_rate': self.crossover_rate,
            'elite_size': self.elite_size,
            'tournament_size': self.tournament_size,
            'selection_method': self.selection_method,
            'crossover_method': self.crossover_method,
            'chromosome_length': self.chromosome_length,
        }

    def set_parameters(self, **params: Any) -> None:
        """Update parameters in place; validated like the constructor config."""
        self._apply_config(merge_config(self.get_parameters(), params))
        if self.population is not None:
            self.population.size = self.population_size

    # ---------------- Optimal reference ----------------

    @property
    def optimal_solution(self) -> tuple[list[int], Cost]:
        """Dijkstra path and cost, computed once per algorithm instance."""
        if self._optimal is None:
            self._optimal = self.graph.get_shortest_path_dijkstra()
        return self._optimal

    @property
    def optimal_fitness(self) -> Cost:
        """Fitness the Dijkstra path would have as a chromosome."""
        path, cost = self.optimal_solution
        if not path or not cost.is_finite:
            return UNREACHABLE
        return cost + LENGTH_PENALTY * len(path)

    # ---------------- Observation ----------------

    def _notify(self, step_name: str, population: Population, **extra: Any) -> None:
        if self.observer is None:
            return
        event = StepEvent(
            step_name=step_name,
            generation=population.generation,
            best=population.get_best_chromosome(),
            statistics=population.get_fitness_statistics(),
            population=population.snapshot(),
            extra=freeze_extra(extra),
        )
        self.observer(event)

    # ---------------- Run ----------------

    def _new_population(self) -> Population:
        return Population(
            self.population_size,
            self.graph,
            self.chromosome_length,
            rng=self.rng_manager.get_context_rng('init'),
            selection_rng=self.rng_manager.get_rng_for_selection(),
        )

    def _initialize(self) -> Population:
        self._reset_run_statistics()
        self._cancel_requested = False
        self.stop_reason = None
        self.population = self._new_population()
        self.population.initialize_random()
        self.state = GAState.RUNNING
        self._notify('initialization', self.population)
        return self.population

    def run(self, max_generations: int | None = None) -> tuple[Chromosome | None, list[GenerationRecord]]:
        """Run to completion and return ``(best_chromosome, fitness_history)``."""
        if max_generations is None:
            max_generations = self.max_generations
        start = time.perf_counter()
        population = self._initialize()
        logger.info(
            "GA run started: population=%d, max_generations=%d, selection=%s, crossover=%s",
            self.population_size, max_generations, self.selection_method, self.crossover_method,
        )

        reason: StopReason | None = None
        for _ in range(int(max_generations)):
            self._advance_generation(population)
            reason = self._should_stop(population)
            if reason is not None:
                break
        if reason is None:
            reason = StopReason.MAX_GENERATIONS

        self.execution_time = time.perf_counter() - start
        self._finish(reason)
        return population.get_best_chromosome(), list(population.fitness_history)

    def step(self) -> StepResult:
        """Advance one generation, initializing the population on first call.

        Once the run has stopped, further calls return the final state
        without evolving.
        """
        if self.state in (GAState.STOPPED, GAState.CONVERGED) and self.population is not None:
            return self._step_result(self.population)
        if self.population is None or self.state is GAState.IDLE:
            self._initialize()
        population = self.population
        assert population is not None

        start = time.perf_counter()
        self._advance_generation(population)
        self.execution_time += time.perf_counter() - start

        reason = self._should_stop(population)
        if reason is None and self.generations >= self.max_generations:
            reason = StopReason.MAX_GENERATIONS
        if reason is not None:
            self._finish(reason)
        return self._step_result(population)

    def _step_result(self, population: Population) -> StepResult:
        return StepResult(
            generation=population.generation,
            best=population.get_best_chromosome(),
            statistics=population.get_fitness_statistics(),
            stopped=self.state in (GAState.STOPPED, GAState.CONVERGED),
            stop_reason=self.stop_reason,
        )

    def _advance_generation(self, population: Population) -> None:
        self._notify('generation_start', population)
        new_population = self._create_new_generation(population)
        population.replace(new_population.chromosomes)
        record = population.update_generation()
        self.generations = population.generation
        self.best_fitness_history.append(record.best)
        self.average_fitness_history.append(record.average)
        logger.debug(
            "Generation %d: best=%s avg=%s worst=%s",
            record.generation, format(record.best, '.3f'), format(record.average, '.3f'),
            format(record.worst, '.3f'),
        )
        self._notify('generation_end', population)

    def _create_new_generation(self, population: Population) -> Population:
        new_population = self._new_population()
        new_population.generation = population.generation
        crossover_rng = self.rng_manager.get_rng_for_crossover()
        mutation_rng = self.rng_manager.get_rng_for_mutation()

        elites = population.chromosomes[: self.elite_size]
        new_population.chromosomes.extend(elites)
        self._notify('elite_selection', population, elite_chromosomes=tuple(elites))

        while len(new_population.chromosomes) < self.population_size:
            parent1 = self._select_parent(population)
            parent2 = self._select_parent(population)
            self._notify('parent_selection', population, parent1=parent1, parent2=parent2)

            if crossover_rng.random() < self.crossover_rate:
                child1, child2 = parent1.crossover(parent2, self.crossover_method, crossover_rng)
                self._notify(
                    'crossover', population,
                    parent1=parent1, parent2=parent2, child1=child1, child2=child2,
                )
            else:
                child1, child2 = parent1, parent2

            child1 = child1.mutate(self.mutation_rate, mutation_rng)
            child2 = child2.mutate(self.mutation_rate, mutation_rng)
            self._notify('mutation', population, child1=child1, child2=child2)

            new_population.chromosomes.extend((child1.repair(), child2.repair()))

        new_population.maintain_size()
        new_population.remove_duplicates()
        self._notify('population_update', population, new_population=new_population.snapshot())
        return new_population

    def _select_parent(self, population: Population) -> Chromosome:
        return population.select(self.selection_method, self.tournament_size)

    def _should_stop(self, population: Population) -> StopReason | None:
        if self._cancel_requested:
            return StopReason.CANCELLED

        best = population.get_best_chromosome()
        optimal = self.optimal_fitness
        if best is not None and best.fitness.is_finite and optimal.is_finite:
            if best.fitness < optimal + OPTIMAL_TOLERANCE:
                return StopReason.OPTIMAL_FOUND

        if len(self.best_fitness_history) >= STAGNATION_WINDOW:
            recent_best = min(self.best_fitness_history[-STAGNATION_WINDOW:])
            if recent_best == self.best_fitness_history[-1]:
                return StopReason.STAGNATION

        if population.get_diversity() < MIN_DIVERSITY:
            return StopReason.LOW_DIVERSITY
        return None

    def _finish(self, reason: StopReason) -> None:
        self.stop_reason = reason
        self.state = GAState.CONVERGED if reason in _CONVERGED_REASONS else GAState.STOPPED
        best = self.population.get_best_chromosome() if self.population else None
        logger.info(
            "GA run finished after %d generations (%s): best=%s",
            self.generations, reason.value, best,
        )

    # ---------------- Control ----------------

    def stop(self) -> None:
        """Request cancellation; honoured after the current generation."""
        self._cancel_requested = True

    def reset(self) -> None:
        self.population = None
        self.state = GAState.IDLE
        self.stop_reason = None
        self._cancel_requested = False
        self._reset_run_statistics()

    def get_statistics(self) -> dict[str, Any]:
        return {
            'generations': self.generations,
            'execution_time': self.execution_time,
            'best_fitness_history': list(self.best_fitness_history),
            'average_fitness_history': list(self.average_fitness_history),
            'final_best_fitness': self.best_fitness_history[-1] if self.best_fitness_history else UNREACHABLE,
            'state': self.state.value,
            'stop_reason': self.stop_reason.value if self.stop_reason else None,
            'parameters': self.get_parameters(),
        }


__all__ = ['GeneticAlgorithm', 'GAState', 'StopReason', 'StepResult']
