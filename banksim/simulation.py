"""
Interest Scheduling Module

Drives simulated time for a bank: accrues interest every tick, commits it on
month boundaries and advances the clock. Uses the same cadence as
Bank.project_balance, so running the scheduler reproduces a projection.
"""

from typing import Dict, Optional

from .bank import Bank
from .clock import SimulationClock
from .logging_config import get_logger, log_action


class InterestScheduler:
    """
    Periodic interest processing for every account of a bank
    """

    def __init__(self, bank: Bank, clock: Optional[SimulationClock] = None):
        self.bank = bank
        self.clock = clock or bank.clock
        self.logger = get_logger("banksim.simulation")

    def step(self) -> Dict[str, int]:
        """
        Process the current tick, then advance the clock by one

        Returns:
            Counts of accounts accrued and committed during the tick
        """
        tick = self.clock.now()
        results = {"accrued": self.bank.accrue_all(), "committed": 0}

        if self.clock.is_month_boundary(tick):
            results["committed"] = self.bank.commit_all()

        self.clock.advance()
        return results

    def run(self, ticks: int) -> Dict[str, int]:
        """
        Run ``ticks`` consecutive steps

        Returns:
            Totals over the run: ticks processed, accruals and commits
        """
        if ticks < 0:
            raise ValueError("Number of ticks must be non-negative")

        start = self.clock.now()
        totals = {"ticks": 0, "accrued": 0, "committed": 0}
        for _ in range(ticks):
            result = self.step()
            totals["ticks"] += 1
            totals["accrued"] += result["accrued"]
            totals["committed"] += result["committed"]

        log_action(
            self.logger, "info", "Simulation run complete",
            action="run", tick=self.clock.now(),
            extra={"start": start, **totals}
        )
        return totals
