# Experiment scenarios
#
# Each scenario defines:
# - Experiment kind and display metadata
# - Trial count per run
# - Expected probability of every outcome label

from .base import (
    ExperimentKind,
    ComplexityLevel,
    ScenarioDefinition,
)

from .registry import (
    ScenarioRegistry,
    coerce_kind,
    create_default_registry,
    get_scenario,
    list_scenarios,
    COIN_TOSS,
    DICE_TOSS,
    CONDITIONAL_PROBABILITY,
    DEFAULT_SCENARIOS,
)

__all__ = [
    # Base
    'ExperimentKind',
    'ComplexityLevel',
    'ScenarioDefinition',
    # Registry
    'ScenarioRegistry',
    'coerce_kind',
    'create_default_registry',
    'get_scenario',
    'list_scenarios',
    'COIN_TOSS',
    'DICE_TOSS',
    'CONDITIONAL_PROBABILITY',
    'DEFAULT_SCENARIOS',
]
