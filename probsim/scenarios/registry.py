"""
Scenario registry and the default experiment catalog.
"""

from typing import Dict, Iterator, List, Union

from ..errors import UnknownExperimentKind
from .base import ComplexityLevel, ExperimentKind, ScenarioDefinition


def coerce_kind(kind: Union[ExperimentKind, str]) -> ExperimentKind:
    """Convert a kind or its string value to ExperimentKind."""
    if isinstance(kind, ExperimentKind):
        return kind
    try:
        return ExperimentKind(kind)
    except ValueError:
        raise UnknownExperimentKind(kind, [k.value for k in ExperimentKind]) from None


class ScenarioRegistry:
    """
    Registry of scenario definitions keyed by experiment kind.

    Lookup is pure; definitions are immutable once registered.
    """

    def __init__(self):
        self._scenarios: Dict[ExperimentKind, ScenarioDefinition] = {}

    def register(self, scenario: ScenarioDefinition) -> None:
        """Register a scenario definition."""
        if scenario.kind in self._scenarios:
            raise ValueError(f"Scenario '{scenario.kind}' already registered")
        self._scenarios[scenario.kind] = scenario

    def register_all(self, scenarios: List[ScenarioDefinition]) -> None:
        """Register multiple scenario definitions."""
        for scenario in scenarios:
            self.register(scenario)

    def get(self, kind: Union[ExperimentKind, str]) -> ScenarioDefinition:
        """Get scenario by kind, raising UnknownExperimentKind if absent."""
        key = coerce_kind(kind)
        if key not in self._scenarios:
            raise UnknownExperimentKind(kind, self.kinds)
        return self._scenarios[key]

    def __getitem__(self, kind: Union[ExperimentKind, str]) -> ScenarioDefinition:
        return self.get(kind)

    def __contains__(self, kind: object) -> bool:
        try:
            return coerce_kind(kind) in self._scenarios
        except UnknownExperimentKind:
            return False

    def __iter__(self) -> Iterator[ScenarioDefinition]:
        return iter(self._scenarios.values())

    def __len__(self) -> int:
        return len(self._scenarios)

    @property
    def kinds(self) -> List[ExperimentKind]:
        """List of all registered kinds, in registration order."""
        return list(self._scenarios.keys())

    def validate(self) -> List[str]:
        """
        Check that every registered scenario is keyed consistently.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        for kind, scenario in self._scenarios.items():
            if scenario.kind != kind:
                errors.append(f"Scenario registered under '{kind}' describes '{scenario.kind}'")
        return errors


# -----------------------------------------------------------------------------
# Default catalog
# -----------------------------------------------------------------------------

COIN_TOSS = ScenarioDefinition(
    kind=ExperimentKind.COIN_TOSS,
    title="Coin Toss Probability",
    description="Explore the 50-50 chance of heads and tails in a series of coin tosses.",
    expected_probability={'heads': 0.5, 'tails': 0.5},
    complexity_level=ComplexityLevel.BASIC,
    trial_count=50,
)

DICE_TOSS = ScenarioDefinition(
    kind=ExperimentKind.DICE_TOSS,
    title="Dice Roll Probability",
    description="Investigate the uniform distribution of outcomes when rolling a six-sided die.",
    expected_probability={face: 1 / 6 for face in range(1, 7)},
    complexity_level=ComplexityLevel.INTERMEDIATE,
    trial_count=60,
)

# noEvent carries the mass left over by the two named events
CONDITIONAL_PROBABILITY = ScenarioDefinition(
    kind=ExperimentKind.CONDITIONAL_PROBABILITY,
    title="Conditional Probability",
    description="Explore how previous events impact the probability of future outcomes.",
    expected_probability={
        'independentEvent': 0.5,
        'dependentEvent': 0.3,
        'noEvent': 0.2,
    },
    complexity_level=ComplexityLevel.ADVANCED,
    trial_count=70,
)

DEFAULT_SCENARIOS = [COIN_TOSS, DICE_TOSS, CONDITIONAL_PROBABILITY]


def create_default_registry() -> ScenarioRegistry:
    """Create a registry holding the default catalog."""
    registry = ScenarioRegistry()
    registry.register_all(DEFAULT_SCENARIOS)
    return registry


_DEFAULT_REGISTRY = create_default_registry()


def get_scenario(kind: Union[ExperimentKind, str]) -> ScenarioDefinition:
    """Look up a scenario in the default catalog."""
    return _DEFAULT_REGISTRY.get(kind)


def list_scenarios() -> List[ScenarioDefinition]:
    """All scenarios in the default catalog, in display order."""
    return list(_DEFAULT_REGISTRY)
