"""Seedable random streams shared by both subsystems.

Every stochastic operation (network generation, random walks, selection,
crossover, mutation, weight initialization) draws from a named context
stream. Streams are derived from the master seed with SHA-256 so that the
same seed reproduces the same run regardless of interpreter hash salting or
the order in which contexts are first requested.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any


class RNGManager:
    """Hands out independent ``random.Random`` instances per context."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)
        self.seed = int(seed)
        self._contexts: dict[str, random.Random] = {}

    def _derive_seed(self, context: str) -> int:
        digest = hashlib.sha256(f"{self.seed}:{context}".encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big")

    def get_context_rng(self, context: str) -> random.Random:
        rng = self._contexts.get(context)
        if rng is None:
            rng = random.Random(self._derive_seed(context))
            self._contexts[context] = rng
        return rng

    def get_rng_for_selection(self) -> random.Random:
        return self.get_context_rng("selection")

    def get_rng_for_crossover(self) -> random.Random:
        return self.get_context_rng("crossover")

    def get_rng_for_mutation(self) -> random.Random:
        return self.get_context_rng("mutation")

    def get_state(self) -> dict[str, Any]:
        """Snapshot the master seed and every context stream."""
        return {
            "seed": self.seed,
            "contexts": {name: rng.getstate() for name, rng in self._contexts.items()},
        }

    def set_state(self, state: dict[str, Any]) -> None:
        self.seed = int(state["seed"])
        self._contexts = {}
        for name, rng_state in state.get("contexts", {}).items():
            rng = random.Random()
            rng.setstate(rng_state)
            self._contexts[name] = rng

    def __repr__(self) -> str:
        return f"RNGManager(seed={self.seed}, contexts={sorted(self._contexts)})"


def ensure_rng_manager(rng_manager: RNGManager | None) -> RNGManager:
    """Return the given manager or a freshly seeded one."""
    return rng_manager if rng_manager is not None else RNGManager()


__all__ = ["RNGManager", "ensure_rng_manager"]
