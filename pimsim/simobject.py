"""Base class for components driven by a clock."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SimulatorObject(ABC):
    """A component that counts clock cycles and does work on each update."""

    def __init__(self) -> None:
        self.current_clock_cycle = 0

    def step(self) -> None:
        """Advance the clock by one cycle."""
        self.current_clock_cycle += 1

    @abstractmethod
    def update(self) -> None:
        """Do the work of one clock cycle."""