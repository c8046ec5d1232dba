"""Experiment sweeps and run journals."""

from .journal import ExperimentJournal, JournalEntry  # noqa: F401
from .runner import (  # noqa: F401
    SWEEPS,
    ConvergenceRecord,
    ExperimentResult,
    ExperimentRunner,
    Sweep,
    find_convergence_generation,
)

__all__ = [
    'ExperimentRunner',
    'ExperimentResult',
    'ConvergenceRecord',
    'Sweep',
    'SWEEPS',
    'find_convergence_generation',
    'ExperimentJournal',
    'JournalEntry',
]
