"""Shared helpers: randomness, validation and observability."""

from .observability import EpochEvent, StepEvent, determinism_signature, write_history_csv  # noqa: F401
from .rng_manager import RNGManager  # noqa: F401
from .validation import ValidationError  # noqa: F401

__all__ = [
    'RNGManager',
    'ValidationError',
    'StepEvent',
    'EpochEvent',
    'determinism_signature',
    'write_history_csv',
]
