"""Dense weighted graph between a fixed sender and receiver.

The adjacency matrix is owned by the graph and only changes through
``set_connection``, ``remove_connection`` and ``generate_random_network``.
Missing edges are ``UNREACHABLE``; the diagonal is always ``Finite(0)``.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Sequence

from gplab.core.cost import UNREACHABLE, ZERO, Cost
from gplab.utils.validation import validate_graph_params

logger = logging.getLogger(__name__)


class Graph:
    """Weighted adjacency model with path cost, validity and Dijkstra."""

    def __init__(self, size: int = 8, sender: int = 0, receiver: int | None = None) -> None:
        if receiver is None:
            receiver = size - 1
        validate_graph_params(size, sender, receiver)
        self.size = size
        self.sender = sender
        self.receiver = receiver
        self._weights: list[list[Cost]] = [
            [ZERO if i == j else UNREACHABLE for j in range(size)] for i in range(size)
        ]

    @classmethod
    def from_edges(
        cls,
        size: int,
        edges: Iterable[tuple[int, int, float]],
        sender: int = 0,
        receiver: int | None = None,
        symmetric: bool = True,
    ) -> "Graph":
        """Build a graph from ``(u, v, weight)`` triples."""
        graph = cls(size, sender, receiver)
        for u, v, w in edges:
            graph.set_connection(u, v, w)
            if symmetric:
                graph.set_connection(v, u, w)
        return graph

    def _in_range(self, node: int) -> bool:
        return 0 <= node < self.size

    def set_connection(self, from_node: int, to_node: int, weight: Cost | float) -> None:
        if not (self._in_range(from_node) and self._in_range(to_node)):
            return
        if from_node == to_node:
            return
        self._weights[from_node][to_node] = Cost.of(weight)

    def remove_connection(self, from_node: int, to_node: int) -> None:
        if not (self._in_range(from_node) and self._in_range(to_node)):
            return
        if from_node == to_node:
            return
        self._weights[from_node][to_node] = UNREACHABLE

    def get_connection_weight(self, from_node: int, to_node: int) -> Cost:
        if self._in_range(from_node) and self._in_range(to_node):
            return self._weights[from_node][to_node]
        return UNREACHABLE

    def has_edge(self, from_node: int, to_node: int) -> bool:
        return from_node != to_node and self.get_connection_weight(from_node, to_node).is_finite

    def neighbors(self, node: int) -> list[int]:
        return [v for v in range(self.size) if self.has_edge(node, v)]

    def generate_random_network(
        self,
        max_weight: int = 10,
        connection_probability: float = 0.7,
        rng: random.Random | None = None,
    ) -> None:
        """Randomly (re)wire every unordered pair with a symmetric integer weight."""
        rng = rng or random.Random()
        edges = 0
        for i in range(self.size):
            for j in range(i + 1, self.size):
                if rng.random() < connection_probability:
                    weight = Cost.of(rng.randint(1, max_weight))
                    edges += 1
                else:
                    weight = UNREACHABLE
                self._weights[i][j] = weight
                self._weights[j][i] = weight
        logger.debug(
            "Random network: size=%d, edges=%d, p=%.2f, max_weight=%d",
            self.size, edges, connection_probability, max_weight,
        )

    def calculate_path_cost(self, path: Sequence[int]) -> Cost:
        if len(path) < 2:
            return UNREACHABLE
        cost: Cost = ZERO
        for u, v in zip(path, path[1:]):
            weight = self.get_connection_weight(u, v)
            if not weight.is_finite:
                return UNREACHABLE
            cost = cost + weight
        return cost

    def is_valid_path(self, path: Sequence[int]) -> bool:
        if len(path) < 2:
            return False
        if path[0] != self.sender or path[-1] != self.receiver:
            return False
        if not all(self._in_range(node) for node in path):
            return False
        middle = list(path[1:-1])
        if len(middle) != len(set(middle)):
            return False
        return all(self.has_edge(u, v) for u, v in zip(path, path[1:]))

    def get_shortest_path_dijkstra(self) -> tuple[list[int], Cost]:
        """Exact shortest path from sender to receiver, dense O(size²) scan."""
        distances: list[Cost] = [UNREACHABLE] * self.size
        previous = [-1] * self.size
        visited = [False] * self.size
        distances[self.sender] = ZERO

        for _ in range(self.size):
            u = -1
            best: Cost = UNREACHABLE
            for i in range(self.size):
                if not visited[i] and distances[i] < best:
                    best = distances[i]
                    u = i
            if u == -1:
                break
            visited[u] = True
            for v in range(self.size):
                if visited[v] or not self.has_edge(u, v):
                    continue
                alt = distances[u] + self._weights[u][v]
                if alt < distances[v]:
                    distances[v] = alt
                    previous[v] = u

        if not distances[self.receiver].is_finite:
            return [], UNREACHABLE

        path: list[int] = []
        current = self.receiver
        while current != -1:
            path.append(current)
            current = previous[current]
        path.reverse()
        return path, distances[self.receiver]

    def to_matrix(self) -> list[list[float]]:
        return [[float(w) for w in row] for row in self._weights]

    def copy(self) -> "Graph":
        clone = Graph(self.size, self.sender, self.receiver)
        clone._weights = [list(row) for row in self._weights]
        return clone

    def __str__(self) -> str:
        lines = ["Adjacency matrix:", "    " + "".join(f"{j:>4}" for j in range(self.size))]
        for i, row in enumerate(self._weights):
            cells = "".join(f"{int(float(w)):>3}" if w.is_finite else "  ∞" for w in row)
            lines.append(f"{i:>2}: {cells}")
        lines.append("")
        lines.append(f"Sender: {self.sender}")
        lines.append(f"Receiver: {self.receiver}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Graph(size={self.size}, sender={self.sender}, receiver={self.receiver})"


__all__ = ["Graph"]
