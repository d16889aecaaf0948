"""
Deterministic ID allocation.

A plant owns one ``IDGenerator`` and hands it to everything that needs
process-unique identifiers (leaves, pools) instead of relying on global
counters. The generator also carries the seeded random stream used by
procedural passes.
"""

from typing import Optional
import numpy as np


class IDGenerator:
    """
    Monotonic ID counter with an attached random generator.

    Parameters
    ----------
    start : int
        First ID that will be handed out
    seed : int, optional
        Seed for ``rng``
    """

    def __init__(self, start: int = 1, seed: Optional[int] = None):
        self._next = start
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        return self._next

    def reserve(self, value: int) -> None:
        """Ensure IDs handed out later are greater than ``value``."""
        if value >= self._next:
            self._next = value + 1


__all__ = ["IDGenerator"]
