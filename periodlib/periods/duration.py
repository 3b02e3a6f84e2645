"""
Calendar step lengths.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from periodlib.conventions.config import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import Quantum
from periodlib.dates.adjustments import nearest_boundary, shift


@dataclass(frozen=True)
class Duration:
    """A count of calendar units (days, weeks, months, quarters or years).

    Month-based shifts clamp the day of month to the end of the target month,
    so they do not always invert: one month after 2021-01-31 is 2021-02-28,
    and one month before that is 2021-01-28.
    """

    quantum: Quantum = Quantum.DAY
    length: int = 0

    def add(self, when: date) -> date:
        """Shift ``when`` forward by this duration."""
        return shift(when, self.quantum, self.length)

    def subtract(self, when: date) -> date:
        """Shift ``when`` backward by this duration."""
        return shift(when, self.quantum, -self.length)

    def describe(self) -> str:
        # Only lengths above one are pluralised ("0 day", "-1 week")
        unit = self.quantum.unit
        if self.length > 1:
            unit += "s"
        return f"{self.length} {unit}"

    def __str__(self) -> str:
        return self.describe()

    @staticmethod
    def nearest_boundary(
        when: date,
        quantum: Quantum,
        start_of_week: Optional[int] = None,
        config: Optional[TimesConfig] = None,
    ) -> date:
        """Start of the ``quantum`` period containing ``when``."""
        if start_of_week is None:
            start_of_week = (config or DEFAULT_CONFIG).start_of_week
        return nearest_boundary(when, quantum, start_of_week)
