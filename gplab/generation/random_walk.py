"""Random path generation for initial populations.

Implements a constrained random walk from sender to receiver:
- only finite edges are followed, self-loops never;
- visited nodes are not revisited, except the receiver as the final step;
- the walk gives up after ``max(2 * graph.size, chromosome_length)`` steps
  or at a dead end, and is retried up to ``MAX_ATTEMPTS`` times.

When every attempt fails, a deterministic fallback always yields a usable
chromosome: the direct sender→receiver edge, then the first two-hop path
through an intermediate node, then the bare ``[sender, receiver]`` pair
whether or not that edge exists.
"""

from __future__ import annotations

import logging
import random

from gplab.core.graph import Graph
from gplab.evolution.chromosome import Chromosome

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 200


def random_walk(graph: Graph, max_steps: int, rng: random.Random) -> list[int] | None:
    """One walk attempt; returns the path or None on dead end / step limit."""
    path = [graph.sender]
    visited = {graph.sender}
    current = graph.sender
    steps = 0

    while current != graph.receiver and steps < max_steps:
        candidates = [
            n for n in graph.neighbors(current)
            if n == graph.receiver or n not in visited
        ]
        if not candidates:
            return None
        nxt = rng.choice(candidates)
        path.append(nxt)
        if nxt != graph.receiver:
            visited.add(nxt)
        current = nxt
        steps += 1

    if current == graph.receiver:
        return path
    return None


def fallback_path(graph: Graph) -> list[int]:
    s, r = graph.sender, graph.receiver
    if graph.has_edge(s, r):
        return [s, r]
    for node in range(graph.size):
        if node in (s, r):
            continue
        if graph.has_edge(s, node) and graph.has_edge(node, r):
            return [s, node, r]
    return [s, r]


def generate_random_chromosome(
    graph: Graph,
    rng: random.Random,
    chromosome_length: int | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Chromosome:
    """Generate one chromosome by random walk, falling back deterministically."""
    if chromosome_length is None:
        chromosome_length = max(graph.size - 2, 4)
    max_steps = max(graph.size * 2, chromosome_length)

    for _ in range(max_attempts):
        path = random_walk(graph, max_steps, rng)
        if path is not None:
            return Chromosome(path, graph)

    path = fallback_path(graph)
    logger.warning(
        "Random walk exhausted %d attempts; falling back to %s", max_attempts, path
    )
    return Chromosome(path, graph)


__all__ = ['random_walk', 'fallback_path', 'generate_random_chromosome', 'MAX_ATTEMPTS']
