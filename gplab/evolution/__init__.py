"""Evolutionary engine for GPLab path search."""

from .operators import crossover, mutate
from .selection import rank_selection, roulette_selection, select_parent, tournament_selection
from .chromosome import LENGTH_PENALTY, Chromosome
from .population import FitnessStatistics, GenerationRecord, Population
from .genetic_algorithm import GAState, GeneticAlgorithm, StepResult, StopReason

__all__ = [
    "Chromosome",
    "LENGTH_PENALTY",
    "Population",
    "FitnessStatistics",
    "GenerationRecord",
    "GeneticAlgorithm",
    "GAState",
    "StopReason",
    "StepResult",
    "crossover",
    "mutate",
    "tournament_selection",
    "roulette_selection",
    "rank_selection",
    "select_parent",
]
