"""
Simulated trial records and per-run experiment results.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

import pandas as pd

from .scenarios.base import ExperimentKind, OutcomeLabel


@dataclass(frozen=True)
class TrialOutcome:
    """
    One simulated draw.

    Attributes:
        index: 0-based position in draw order
        label: Outcome identifier (str, or int for die faces)
        attributes: Kind-specific data used only for visual placement
    """
    index: int
    label: OutcomeLabel
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Trial index must be non-negative, got {self.index}")
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))


@dataclass
class ExperimentResult:
    """Result of one experiment run."""
    kind: ExperimentKind
    total_trials: int
    outcomes: Dict[OutcomeLabel, int]
    trials: Tuple[TrialOutcome, ...] = ()

    def __post_init__(self):
        self.trials = tuple(self.trials)

    def validate(self) -> list:
        """
        Check the tally and trial sequence are consistent.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        counted = sum(self.outcomes.values())
        if counted != self.total_trials:
            errors.append(f"Outcome counts sum to {counted}, expected {self.total_trials}")
        if self.trials and len(self.trials) != self.total_trials:
            errors.append(f"{len(self.trials)} trials recorded, expected {self.total_trials}")
        for position, trial in enumerate(self.trials):
            if trial.index != position:
                errors.append(f"Trial at position {position} has index {trial.index}")
                break
        return errors

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the trial sequence to a DataFrame (one row per trial)."""
        if not self.trials:
            return pd.DataFrame(columns=["index", "label"])

        records = []
        for trial in self.trials:
            records.append({
                "index": trial.index,
                "label": trial.label,
                **trial.attributes
            })
        return pd.DataFrame(records)
