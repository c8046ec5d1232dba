"""Translation of trained models to PyTorch."""

from .pytorch_impl import PerceptronModule, to_pytorch_model  # noqa: F401

__all__ = [
    'PerceptronModule',
    'to_pytorch_model',
]
