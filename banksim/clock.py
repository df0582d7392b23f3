"""
Simulated Clock Module

Monotonic integer time source injected into the bank. The bank only reads
the current tick; whoever drives the simulation advances it.
"""


DEFAULT_MONTH_DURATION = 30


class SimulationClock:
    """Integer tick clock with a fixed month length"""

    def __init__(self, start: int = 0, month_duration: int = DEFAULT_MONTH_DURATION):
        if start < 0:
            raise ValueError("Clock cannot start before tick 0")
        if month_duration <= 0:
            raise ValueError("Month duration must be positive")
        self._current = start
        self.month_duration = month_duration

    def now(self) -> int:
        """Current tick"""
        return self._current

    def advance(self, ticks: int = 1) -> int:
        """Move time forward and return the new tick"""
        if ticks < 0:
            raise ValueError("Clock cannot move backwards")
        self._current += ticks
        return self._current

    def is_month_boundary(self, tick: int) -> bool:
        """Interest is committed on ticks that are multiples of the month length"""
        return tick % self.month_duration == 0

    def __repr__(self) -> str:
        return f"SimulationClock(now={self._current}, month_duration={self.month_duration})"
