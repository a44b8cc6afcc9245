"""
Display statistics for experiment results.

Turns an outcome tally into counts plus percentages of the total,
rounded to two decimals, ready for the statistics panel.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping

import pandas as pd

from .outcomes import ExperimentResult
from .scenarios.base import OutcomeLabel

PERCENT_DECIMALS = 2


@dataclass(frozen=True)
class OutcomeStatistic:
    count: int
    percentage: float


@dataclass(frozen=True)
class DisplayStatistics:
    """Counts and percentages per outcome label."""
    total_trials: int = 0
    per_outcome: Mapping[OutcomeLabel, OutcomeStatistic] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'per_outcome', MappingProxyType(dict(self.per_outcome)))

    @classmethod
    def empty(cls) -> 'DisplayStatistics':
        return cls(total_trials=0, per_outcome={})

    def format_lines(self) -> List[str]:
        """Panel text: total line followed by '<label>: <count> (<pct>%)'."""
        lines = [f"Total Trials: {self.total_trials}"]
        for label, stat in self.per_outcome.items():
            lines.append(f"{label}: {stat.count} ({stat.percentage:.2f}%)")
        return lines

    def to_dataframe(self) -> pd.DataFrame:
        """One row per outcome label with count and percentage columns."""
        if not self.per_outcome:
            return pd.DataFrame(columns=["count", "percentage"])
        df = pd.DataFrame.from_dict(
            {label: {"count": s.count, "percentage": s.percentage}
             for label, s in self.per_outcome.items()},
            orient="index",
        )
        df.index.name = "label"
        return df


def to_display_statistics(result: ExperimentResult) -> DisplayStatistics:
    """
    Convert an experiment tally to display statistics.

    A zero-trial result yields an empty statistics object instead of
    dividing by zero.
    """
    total = result.total_trials
    if total == 0:
        return DisplayStatistics.empty()

    per_outcome = {
        label: OutcomeStatistic(
            count=count,
            percentage=round(count / total * 100.0, PERCENT_DECIMALS),
        )
        for label, count in result.outcomes.items()
    }
    return DisplayStatistics(total_trials=total, per_outcome=per_outcome)
