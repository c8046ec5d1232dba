"""Path repair after crossover and mutation.

Repair only removes duplicate nodes and restores the endpoints. It does not
reconnect the path: a repaired sequence with a missing edge keeps an
unreachable fitness and is eliminated by selection.
"""

from __future__ import annotations

from typing import Any, Sequence


def repair_path(genes: Sequence[int], sender: int, receiver: int) -> list[int]:
    """Deduplicate ``genes`` and make them start at sender and end at receiver.

    The first occurrence of each node is kept. A repeated receiver survives
    only as the trailing gene. Missing endpoints are inserted, not
    substituted.
    """
    genes = list(genes)
    if len(genes) < 2:
        return genes

    seen: set[int] = set()
    repaired: list[int] = []
    last = len(genes) - 1
    for idx, gene in enumerate(genes):
        if gene not in seen:
            seen.add(gene)
            repaired.append(gene)
        elif gene == receiver and idx == last and repaired and repaired[-1] != receiver:
            repaired.append(gene)

    if not repaired or repaired[0] != sender:
        repaired.insert(0, sender)
    if repaired[-1] != receiver:
        repaired.append(receiver)
    return repaired


def repair(chromosome: Any) -> Any:
    """Return a repaired copy of ``chromosome`` (same class, same graph)."""
    if len(chromosome.genes) < 2:
        return chromosome
    graph = chromosome.graph
    genes = repair_path(chromosome.genes, graph.sender, graph.receiver)
    return type(chromosome)(genes, graph)


__all__ = ['repair', 'repair_path']
