"""Single-layer perceptron classifier for binary bitmaps."""

from .sample import Sample, labels_in_order  # noqa: F401
from .neuron import Neuron, Perceptron  # noqa: F401
from .trainer import EpochRecord, IterationLogEntry, Trainer, TrainingResult, evaluate_accuracy  # noqa: F401
from .predictor import NeuronOutput, Prediction, Predictor  # noqa: F401
from .patterns import DEMO_PATTERNS, build_demo_samples  # noqa: F401

__all__ = [
    'Sample',
    'Neuron',
    'Perceptron',
    'Trainer',
    'TrainingResult',
    'EpochRecord',
    'IterationLogEntry',
    'evaluate_accuracy',
    'Predictor',
    'Prediction',
    'NeuronOutput',
    'DEMO_PATTERNS',
    'build_demo_samples',
    'labels_in_order',
]
