"""
probsim - Randomized probability experiments rendered as 3D scene entities.
"""

from .errors import (
    ProbsimError,
    UnknownExperimentKind,
    SceneNotClearedError,
    ExperimentInProgress,
)

from .scenarios import (
    ExperimentKind,
    ComplexityLevel,
    ScenarioDefinition,
    ScenarioRegistry,
    get_scenario,
    list_scenarios,
)

from .outcomes import (
    TrialOutcome,
    ExperimentResult,
)

from .simulator import (
    Simulator,
    simulate,
)

from .scene import (
    Transform,
    Style,
    Transition,
    VisualEntity,
    SceneLifecycleManager,
    build_entity,
)

from .statistics import (
    OutcomeStatistic,
    DisplayStatistics,
    to_display_statistics,
)

from .renderer import Renderer, RecordingRenderer
from .render_loop import RenderLoop
from .runner import RunState, ExperimentRunner, create_runner
from .config import ProbsimConfig, SceneSettings

__all__ = [
    # Errors
    "ProbsimError",
    "UnknownExperimentKind",
    "SceneNotClearedError",
    "ExperimentInProgress",
    # Scenarios
    "ExperimentKind",
    "ComplexityLevel",
    "ScenarioDefinition",
    "ScenarioRegistry",
    "get_scenario",
    "list_scenarios",
    # Results
    "TrialOutcome",
    "ExperimentResult",
    # Simulator
    "Simulator",
    "simulate",
    # Scene
    "Transform",
    "Style",
    "Transition",
    "VisualEntity",
    "SceneLifecycleManager",
    "build_entity",
    # Statistics
    "OutcomeStatistic",
    "DisplayStatistics",
    "to_display_statistics",
    # Runtime
    "Renderer",
    "RecordingRenderer",
    "RenderLoop",
    "RunState",
    "ExperimentRunner",
    "create_runner",
    "ProbsimConfig",
    "SceneSettings",
]
