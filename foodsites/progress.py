"""
Progress toward the partner sign-up goal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PartnerProgress:
    count: int
    goal: int = 100

    @property
    def percent(self) -> int:
        if self.goal <= 0:
            return 100
        # Half rounds up, matching the front end's Math.round.
        return min(100, int(self.count * 100 / self.goal + 0.5))

    def as_dict(self) -> dict:
        return {"count": self.count, "goal": self.goal, "percent": self.percent}
