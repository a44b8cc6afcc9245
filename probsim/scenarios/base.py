"""
Base types for experiment scenarios.

A scenario is static configuration: which experiment to run, how many
trials to draw, and the expected probability of each outcome label.
Simulation lives in the simulator; visuals live in the scene layer.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

import numpy as np

OutcomeLabel = Union[str, int]

# Tolerance for the expected-probability table summing to one
PROBABILITY_SUM_TOLERANCE = 1e-9


class ExperimentKind(str, Enum):
    """Closed set of supported experiments."""
    COIN_TOSS = "coinToss"
    DICE_TOSS = "diceToss"
    CONDITIONAL_PROBABILITY = "conditionalProbability"

    def __str__(self) -> str:
        return self.value


class ComplexityLevel(str, Enum):
    BASIC = "Basic"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScenarioDefinition:
    """
    Static definition of one experiment kind.

    Attributes:
        kind: Experiment kind this scenario describes
        title: Short display title
        description: One-sentence description for the selector panel
        expected_probability: outcome label -> probability (sums to 1)
        complexity_level: Basic / Intermediate / Advanced
        trial_count: Number of trials drawn per run
    """
    kind: ExperimentKind
    title: str
    description: str
    expected_probability: Mapping[OutcomeLabel, float]
    complexity_level: ComplexityLevel
    trial_count: int

    def __post_init__(self):
        if isinstance(self.trial_count, bool) or not isinstance(self.trial_count, (int, np.integer)):
            raise ValueError(f"trial_count must be an integer, got {self.trial_count!r}")
        if self.trial_count <= 0:
            raise ValueError(f"trial_count must be positive, got {self.trial_count}")
        if not self.expected_probability:
            raise ValueError(f"Scenario '{self.kind}' has an empty probability table")

        probabilities = np.array(list(self.expected_probability.values()), dtype=float)
        if np.any(probabilities < 0.0) or np.any(probabilities > 1.0):
            raise ValueError(
                f"Probabilities for '{self.kind}' must be in [0, 1], got {probabilities.tolist()}"
            )
        total = float(probabilities.sum())
        if not np.isclose(total, 1.0, rtol=0.0, atol=PROBABILITY_SUM_TOLERANCE):
            raise ValueError(f"Probabilities for '{self.kind}' sum to {total}, expected 1.0")

        # Coerce enums and freeze the table so returned definitions cannot be mutated
        object.__setattr__(self, 'kind', ExperimentKind(self.kind))
        object.__setattr__(self, 'complexity_level', ComplexityLevel(self.complexity_level))
        object.__setattr__(self, 'trial_count', int(self.trial_count))
        object.__setattr__(
            self, 'expected_probability', MappingProxyType(dict(self.expected_probability))
        )

    @property
    def outcome_labels(self) -> Tuple[OutcomeLabel, ...]:
        """Outcome labels in table order."""
        return tuple(self.expected_probability.keys())

    def probability_of(self, label: OutcomeLabel) -> float:
        """Expected probability of a label (KeyError if not in the table)."""
        return self.expected_probability[label]
