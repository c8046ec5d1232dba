"""Repair module for GPLab."""

from .repair import repair, repair_path  # re-export

__all__ = [
    'repair',
    'repair_path',
]
