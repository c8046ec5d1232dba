"""Initial path generation for GPLab."""

from .random_walk import fallback_path, generate_random_chromosome, random_walk  # noqa: F401

__all__ = [
    'generate_random_chromosome',
    'random_walk',
    'fallback_path',
]
