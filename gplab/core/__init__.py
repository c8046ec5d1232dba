"""Core graph model and cost values."""

from .cost import UNREACHABLE, Cost, Finite, Unreachable  # noqa: F401
from .graph import Graph  # noqa: F401

__all__ = [
    'Cost',
    'Finite',
    'Unreachable',
    'UNREACHABLE',
    'Graph',
]
