"""
GPLab - Genetic Pathfinding & Perceptron Lab

Two small algorithm laboratories sharing a seedable randomness layer:
a genetic algorithm that searches sender→receiver paths in a weighted graph
(benchmarked against Dijkstra), and a single-layer perceptron trained with
the delta rule on binary bitmaps.
"""

__version__ = "0.1.0"

# Order matters: evolution must load before generation.
from .core import *  # noqa: F401,F403
from .utils import *  # noqa: F401,F403
from .evolution import *  # noqa: F401,F403
from .repair import *  # noqa: F401,F403
from .generation import *  # noqa: F401,F403
from .perceptron import *  # noqa: F401,F403
from .translation import *  # noqa: F401,F403
from .experiments import *  # noqa: F401,F403

from .config import PRESET_MINIMAL, PRESET_RESEARCH, PRESET_STANDARD  # noqa: F401
