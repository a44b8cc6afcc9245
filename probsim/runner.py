"""
Experiment runner: the run state machine and UI-facing entry points.

A run moves Idle -> Running -> Idle:
1. Reset published statistics and clear the scene
2. Simulate the selected experiment
3. Materialize one entity per trial
4. Publish display statistics

Runs are synchronous and never interleave; an overlapping request is
rejected with ExperimentInProgress.
"""

import logging
import threading
from enum import Enum
from typing import List, Optional, Union

from .config import ProbsimConfig
from .errors import ExperimentInProgress
from .logging_config import configure_logging
from .randomness import derive_random_source, make_random_source
from .render_loop import RenderLoop
from .renderer import Renderer
from .scenarios.base import ExperimentKind, ScenarioDefinition
from .scenarios.registry import ScenarioRegistry, create_default_registry
from .scene import SceneLifecycleManager
from .simulator import Simulator
from .statistics import DisplayStatistics, to_display_statistics

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class ExperimentRunner:
    """
    Couples simulator, scene and statistics behind two UI entry points:
    list_scenarios() and run_experiment(kind).
    """

    def __init__(
        self,
        scene: SceneLifecycleManager,
        simulator: Optional[Simulator] = None,
        registry: Optional[ScenarioRegistry] = None,
        render_loop: Optional[RenderLoop] = None,
    ):
        """
        Args:
            scene: Scene lifecycle manager owning the entities
            simulator: Experiment simulator (default catalog, unseeded if None)
            registry: Scenario catalog (simulator's registry if None)
            render_loop: Optional render loop started/stopped with the runner
        """
        if simulator is None:
            simulator = Simulator(registry=registry)
        self.scene = scene
        self.simulator = simulator
        self.registry = registry if registry is not None else simulator.registry
        self.render_loop = render_loop

        self._lock = threading.Lock()
        self._state = RunState.IDLE
        self._statistics = DisplayStatistics.empty()
        self._selected = self.registry.kinds[0] if len(self.registry) else ExperimentKind.COIN_TOSS

    # -------------------------------------------------------------------------
    # UI boundary
    # -------------------------------------------------------------------------

    def list_scenarios(self) -> List[ScenarioDefinition]:
        """Scenarios for the experiment selector."""
        return list(self.registry)

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def statistics(self) -> DisplayStatistics:
        """Statistics published by the last run (empty before any run)."""
        return self._statistics

    @property
    def selected_kind(self) -> ExperimentKind:
        return self._selected

    @property
    def selected_scenario(self) -> ScenarioDefinition:
        return self.registry.get(self._selected)

    def select(self, kind: Union[ExperimentKind, str]) -> ScenarioDefinition:
        """Change the selected experiment (validated against the catalog)."""
        scenario = self.registry.get(kind)
        self._selected = scenario.kind
        return scenario

    def run_selected(self) -> DisplayStatistics:
        """Run the currently selected experiment."""
        return self.run_experiment(self._selected)

    def run_experiment(self, kind: Union[ExperimentKind, str]) -> DisplayStatistics:
        """
        Run one experiment end to end.

        Args:
            kind: Experiment kind to run

        Returns:
            Display statistics for this run

        Raises:
            ExperimentInProgress: another run is in flight
            UnknownExperimentKind: kind is not in the catalog

        On any failure the scene is left cleared, published statistics stay
        empty and the runner returns to idle.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning("Rejected run of %s: experiment already in progress", kind)
            raise ExperimentInProgress(kind)

        try:
            self._state = RunState.RUNNING
            self._statistics = DisplayStatistics.empty()
            self.scene.clear()
            try:
                result = self.simulator.simulate(kind)
                self.scene.materialize(result)
                statistics = to_display_statistics(result)
            except Exception:
                logger.warning("Run of %s failed; scene cleared", kind)
                self.scene.clear()
                raise

            self._statistics = statistics
            logger.info(
                "Ran %s: %d trials, %d entities", result.kind, result.total_trials, len(self.scene)
            )
            return statistics
        finally:
            self._state = RunState.IDLE
            self._lock.release()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Start the render loop, if one is attached."""
        if self.render_loop is not None:
            await self.render_loop.start()

    async def close(self) -> None:
        """Stop the render loop and release all owned entities."""
        if self.render_loop is not None:
            await self.render_loop.stop()
        self.shutdown()

    def shutdown(self) -> None:
        """Release all owned entities. Safe to call repeatedly."""
        self.scene.clear()
        self._statistics = DisplayStatistics.empty()


def create_runner(
    renderer: Renderer,
    config: Optional[ProbsimConfig] = None,
    registry: Optional[ScenarioRegistry] = None,
) -> ExperimentRunner:
    """
    Wire a runner, scene, simulator and render loop from configuration.

    Args:
        renderer: Rendering backend (configured with config.scene)
        config: Runtime configuration (defaults if None)
        registry: Scenario catalog (default catalog if None)

    Returns:
        ExperimentRunner with a render loop attached but not started
    """
    config = config if config is not None else ProbsimConfig()
    registry = registry if registry is not None else create_default_registry()
    configure_logging(level=config.log_level)

    if config.seed is None:
        random_source = make_random_source()
    else:
        random_source = derive_random_source(config.seed, "simulator")

    renderer.configure(config.scene)
    scene = SceneLifecycleManager(renderer)
    simulator = Simulator(registry=registry, random_source=random_source)
    render_loop = RenderLoop(renderer, scene, frame_interval=config.frame_interval)
    return ExperimentRunner(scene, simulator=simulator, registry=registry, render_loop=render_loop)

