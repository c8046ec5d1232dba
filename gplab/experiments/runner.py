"""Parameter sweeps over the path-search genetic algorithm.

Each sweep varies one parameter while the others keep their defaults and
runs one full GA per value. Units run sequentially; a unit that raises is
logged and skipped so one failure never aborts the series.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from gplab.core.cost import UNREACHABLE, Cost
from gplab.core.graph import Graph
from gplab.evolution.chromosome import LENGTH_PENALTY
from gplab.evolution.genetic_algorithm import GeneticAlgorithm
from gplab.evolution.population import GenerationRecord
from gplab.utils.rng_manager import RNGManager, ensure_rng_manager

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
GAFactory = Callable[..., GeneticAlgorithm]

CONVERGENCE_WINDOW = 10


@dataclass(frozen=True)
class Sweep:
    experiment: str
    parameter: str
    values: tuple[Any, ...]
    generations: int


SWEEPS: tuple[Sweep, ...] = (
    Sweep('population_size', 'population_size', (20, 50, 100, 150, 200), 50),
    Sweep('mutation_rate', 'mutation_rate', (0.01, 0.05, 0.1, 0.2, 0.3), 100),
    Sweep('crossover_rate', 'crossover_rate', (0.3, 0.5, 0.7, 0.8, 0.9), 100),
    Sweep('selection_method', 'selection_method', ('tournament', 'roulette', 'rank'), 100),
    Sweep('crossover_method', 'crossover_method', ('uniform', 'one_point', 'two_point'), 100),
)

BASE_PARAMETERS: dict[str, Any] = {
    'population_size': 50,
    'mutation_rate': 0.1,
    'crossover_rate': 0.8,
}


@dataclass(frozen=True)
class ExperimentResult:
    experiment: str
    parameter: Any
    best_fitness: Cost
    optimal_cost: Cost
    optimal_fitness: Cost
    generations: int
    execution_time: float
    convergence_generation: int


@dataclass(frozen=True)
class ConvergenceRecord:
    run: int
    generation: int
    best_fitness: Cost
    average_fitness: Cost


def find_convergence_generation(history: Sequence[GenerationRecord], window: int = CONVERGENCE_WINDOW) -> int:
    """First generation after which the best fitness held for ``window`` records.

    Returns ``len(history)`` when the history is shorter than the window or
    never settles.
    """
    if len(history) < window:
        return len(history)
    for i in range(window, len(history)):
        recent_best = min(rec.best for rec in history[i - window:i])
        if recent_best == history[i - 1].best:
            return i - window
    return len(history)


def deviation_percent(best: Cost, optimal: Cost) -> float | None:
    """Relative gap to the optimum in percent; None when it is undefined."""
    if not (best.is_finite and optimal.is_finite) or float(optimal) == 0:
        return None
    return (float(best) - float(optimal)) / float(optimal) * 100.0


class ExperimentRunner:
    """Runs the parameter sweeps against one graph and builds a report.

    Args:
        graph: Graph shared by every unit; never modified.
        rng_manager: Every unit gets its own manager seeded from this one, so
            a runner seed reproduces the whole series.
        progress: Optional ``(current, total, message)`` callback.
        ga_factory: Builds the algorithm for a unit; defaults to
            :class:`GeneticAlgorithm`.
    """

    def __init__(
        self,
        graph: Graph,
        rng_manager: RNGManager | None = None,
        progress: ProgressCallback | None = None,
        ga_factory: GAFactory | None = None,
    ) -> None:
        self.graph = graph
        self.rng_manager = ensure_rng_manager(rng_manager)
        self.progress = progress
        self.ga_factory = ga_factory or GeneticAlgorithm
        self.results: list[ExperimentResult] = []
        self.convergence_data: list[ConvergenceRecord] = []
        self.failures: list[tuple[str, Any]] = []
        self._cancel_requested = False
        self._optimal: tuple[Cost, Cost] | None = None

    def cancel(self) -> None:
        """Stop before the next unit; results gathered so far are kept."""
        self._cancel_requested = True

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested

    def _optimal_reference(self) -> tuple[Cost, Cost]:
        if self._optimal is None:
            path, cost = self.graph.get_shortest_path_dijkstra()
            fitness = cost + LENGTH_PENALTY * len(path) if path else UNREACHABLE
            self._optimal = (cost, fitness)
        return self._optimal

    def _unit_rng_manager(self, key: str) -> RNGManager:
        seed = self.rng_manager.get_context_rng(f"experiment:{key}").randrange(2**32)
        return RNGManager(seed)

    def _report_progress(self, current: int, total: int, message: str) -> None:
        if self.progress is not None:
            self.progress(current, total, message)

    def _run_unit(self, sweep: Sweep, value: Any) -> ExperimentResult:
        params = dict(BASE_PARAMETERS)
        params[sweep.parameter] = value
        ga = self.ga_factory(
            self.graph,
            config=params,
            rng_manager=self._unit_rng_manager(f"{sweep.experiment}={value}"),
        )
        start = time.perf_counter()
        best, history = ga.run(sweep.generations)
        elapsed = time.perf_counter() - start

        optimal_cost, optimal_fitness = self._optimal_reference()
        return ExperimentResult(
            experiment=sweep.experiment,
            parameter=value,
            best_fitness=best.fitness if best is not None else UNREACHABLE,
            optimal_cost=optimal_cost,
            optimal_fitness=optimal_fitness,
            generations=ga.generations,
            execution_time=elapsed,
            convergence_generation=find_convergence_generation(history),
        )

    def run_experiments(self, sweeps: Sequence[Sweep] = SWEEPS) -> list[ExperimentResult]:
        """Run every sweep unit in order; returns (and stores) the results."""
        self.results = []
        self.failures = []
        self._cancel_requested = False
        units = [(sweep, value) for sweep in sweeps for value in sweep.values]
        total = len(units)
        logger.info("Running %d experiment units across %d sweeps", total, len(sweeps))

        for index, (sweep, value) in enumerate(units, start=1):
            if self._cancel_requested:
                logger.info("Experiments cancelled after %d of %d units", index - 1, total)
                break
            self._report_progress(index, total, f"{sweep.experiment} = {value}")
            try:
                result = self._run_unit(sweep, value)
            except Exception:
                logger.exception("Experiment unit %s=%r failed; skipping", sweep.experiment, value)
                self.failures.append((sweep.experiment, value))
                continue
            self.results.append(result)
        else:
            self._report_progress(total, total, "Experiments finished")
        return list(self.results)

    def run_convergence_study(self, runs: int = 5, generations: int = 200) -> list[ConvergenceRecord]:
        """Repeat the default configuration and collect per-generation histories."""
        self.convergence_data = []
        for run in range(1, runs + 1):
            if self._cancel_requested:
                break
            self._report_progress(run, runs, f"convergence run {run}")
            try:
                ga = self.ga_factory(
                    self.graph,
                    config=dict(BASE_PARAMETERS),
                    rng_manager=self._unit_rng_manager(f"convergence:{run}"),
                )
                _, history = ga.run(generations)
            except Exception:
                logger.exception("Convergence run %d failed; skipping", run)
                self.failures.append(('convergence', run))
                continue
            self.convergence_data.extend(
                ConvergenceRecord(run, rec.generation, rec.best, rec.average) for rec in history
            )
        return list(self.convergence_data)

    def generate_report(self) -> dict[str, Any]:
        """Group results per experiment and pick the best parameter of each."""
        grouped: dict[str, list[ExperimentResult]] = {}
        for result in self.results:
            grouped.setdefault(result.experiment, []).append(result)

        experiments: dict[str, Any] = {}
        for name, results in grouped.items():
            best = min(results, key=lambda r: r.best_fitness)
            experiments[name] = {
                'results': results,
                'best_parameter': best.parameter,
                'best_fitness': best.best_fitness,
                'optimal_fitness': best.optimal_fitness,
                'deviation': deviation_percent(best.best_fitness, best.optimal_fitness),
            }

        summary: dict[str, Any] = {}
        finite = [r for r in self.results if r.best_fitness.is_finite]
        if finite:
            best_overall = min(finite, key=lambda r: r.best_fitness)
            summary = {
                'best_experiment': best_overall.experiment,
                'best_parameter': best_overall.parameter,
                'best_fitness': best_overall.best_fitness,
            }
        return {'experiments': experiments, 'summary': summary, 'failures': list(self.failures)}


__all__ = [
    'ExperimentRunner',
    'ExperimentResult',
    'ConvergenceRecord',
    'Sweep',
    'SWEEPS',
    'find_convergence_generation',
    'deviation_percent',
]
