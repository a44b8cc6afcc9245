"""
Scene lifecycle: maps simulated trials to visual entities and owns them
between runs.

Placement and style are pure functions of (index, total trials, label,
attributes), so the same ExperimentResult always produces identical
entities regardless of the rendering backend.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import SceneNotClearedError
from .outcomes import ExperimentResult, TrialOutcome
from .renderer import Renderer
from .scenarios.base import ExperimentKind, OutcomeLabel

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)

# Coin spiral from the original scene: radius grows by one unit per trial
BASE_RADIUS = 2.0

COIN_COLORS: Dict[str, int] = {'heads': 0xFFD700, 'tails': 0xC0C0C0}
DIE_COLORS: Dict[int, int] = {
    1: 0xE63946,
    2: 0xF4A261,
    3: 0xE9C46A,
    4: 0x2A9D8F,
    5: 0x457B9D,
    6: 0x6D597A,
}
EVENT_COLORS: Dict[str, int] = {
    'independentEvent': 0x3A86FF,
    'dependentEvent': 0xFF006E,
    'noEvent': 0x8D99AE,
}
STAGE_HEIGHTS: Dict[str, float] = {'independent': 1.0, 'dependent': 0.5, 'none': 0.0}
DIE_HEIGHT_STEP = 0.5

SPIN_DURATION = 1.0
SPIN_EASING = "power2.inOut"
GROW_DURATION = 0.5
GROW_EASING = "back.out"


@dataclass(frozen=True)
class Transform:
    position: Vector3 = ORIGIN
    rotation: Vector3 = ORIGIN
    scale: Vector3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Style:
    """
    Appearance of one entity.

    `geometry` holds (name, value) pairs so the style stays hashable.
    """
    shape: str
    color: int
    geometry: Tuple[Tuple[str, float], ...] = ()

    def geometry_dict(self) -> Dict[str, float]:
        return dict(self.geometry)


@dataclass(frozen=True)
class Transition:
    """Animation descriptor consumed by the tweening backend."""
    target: str
    from_state: Vector3
    to_state: Vector3
    duration: float
    easing: str


@dataclass(frozen=True)
class VisualEntity:
    """One rendered trial."""
    owner_trial_index: int
    label: OutcomeLabel
    transform: Transform
    style: Style
    transition: Optional[Transition] = None


# -----------------------------------------------------------------------------
# Placement and style (pure)
# -----------------------------------------------------------------------------

def circle_position(index: int, total: int, height: float = 0.0) -> Vector3:
    """Position on an outward spiral: angle from index/total, radius index + 2."""
    angle = (index / total) * 2.0 * math.pi if total > 0 else 0.0
    radius = index + BASE_RADIUS
    return (math.cos(angle) * radius, height, math.sin(angle) * radius)


def _spin_transition(attributes: Dict[str, Any]) -> Optional[Transition]:
    spin = attributes.get('spin')
    if spin is None:
        return None
    return Transition(
        target='rotation',
        from_state=ORIGIN,
        to_state=tuple(float(v) for v in spin),
        duration=SPIN_DURATION,
        easing=SPIN_EASING,
    )


def _coin_entity(trial: TrialOutcome, total: int) -> VisualEntity:
    style = Style(
        shape='cylinder',
        color=COIN_COLORS[trial.label],
        geometry=(('radius_top', 1.0), ('radius_bottom', 1.0), ('height', 0.2), ('segments', 64)),
    )
    return VisualEntity(
        owner_trial_index=trial.index,
        label=trial.label,
        transform=Transform(position=circle_position(trial.index, total)),
        style=style,
        transition=_spin_transition(trial.attributes),
    )


def _die_entity(trial: TrialOutcome, total: int) -> VisualEntity:
    face = int(trial.label)
    style = Style(
        shape='box',
        color=DIE_COLORS[face],
        geometry=(('width', 0.8), ('height', 0.8), ('depth', 0.8)),
    )
    return VisualEntity(
        owner_trial_index=trial.index,
        label=trial.label,
        transform=Transform(position=circle_position(trial.index, total, face * DIE_HEIGHT_STEP)),
        style=style,
        transition=_spin_transition(trial.attributes),
    )


def _event_entity(trial: TrialOutcome, total: int) -> VisualEntity:
    stage = trial.attributes.get('stage', 'none')
    style = Style(
        shape='sphere',
        color=EVENT_COLORS[trial.label],
        geometry=(('radius', 0.5), ('width_segments', 32), ('height_segments', 16)),
    )
    return VisualEntity(
        owner_trial_index=trial.index,
        label=trial.label,
        transform=Transform(position=circle_position(trial.index, total, STAGE_HEIGHTS[stage])),
        style=style,
        transition=Transition(
            target='scale',
            from_state=ORIGIN,
            to_state=(1.0, 1.0, 1.0),
            duration=GROW_DURATION,
            easing=GROW_EASING,
        ),
    )


_ENTITY_BUILDERS = {
    ExperimentKind.COIN_TOSS: _coin_entity,
    ExperimentKind.DICE_TOSS: _die_entity,
    ExperimentKind.CONDITIONAL_PROBABILITY: _event_entity,
}


def build_entity(trial: TrialOutcome, total_trials: int, kind: ExperimentKind) -> VisualEntity:
    """Derive the entity for one trial; same inputs always give the same entity."""
    return _ENTITY_BUILDERS[ExperimentKind(kind)](trial, total_trials)


# -----------------------------------------------------------------------------
# Lifecycle manager
# -----------------------------------------------------------------------------

class SceneLifecycleManager:
    """
    Owns the visual entities of the current run.

    The owned set is empty before materialize() and is replaced in bulk:
    clear() removes everything, materialize() populates from one result.
    """

    def __init__(self, renderer: Renderer):
        self.renderer = renderer
        self._entities: List[VisualEntity] = []

    @property
    def entities(self) -> Tuple[VisualEntity, ...]:
        """Currently owned entities, in draw order."""
        return tuple(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def clear(self) -> None:
        """
        Remove every owned entity. No-op on an empty scene.

        The owned set is only dropped once the renderer has accepted the
        removal, so a failed clear() can be retried.
        """
        if not self._entities:
            return
        removed = self._entities
        self.renderer.remove_entities(removed)
        self._entities = []
        logger.debug("Cleared %d entities", len(removed))

    def materialize(self, result: ExperimentResult) -> Tuple[VisualEntity, ...]:
        """
        Create and submit one entity per trial.

        If the renderer raises, whatever part of the batch it accepted is
        removed again and the scene is left empty.

        Args:
            result: Experiment result whose trials are rendered in draw order

        Returns:
            The newly owned entities

        Raises:
            SceneNotClearedError: the scene still owns entities
        """
        if self._entities:
            logger.error(
                "materialize() called with %d entities still owned; run sequencing bug",
                len(self._entities)
            )
            raise SceneNotClearedError(len(self._entities))

        built = [build_entity(trial, result.total_trials, result.kind) for trial in result.trials]

        self._entities = built
        try:
            self.renderer.add_entities(built)
        except Exception:
            self._discard(built)
            raise
        logger.debug("Materialized %d entities for %s", len(built), result.kind)
        return tuple(built)

    def _discard(self, batch: List[VisualEntity]) -> None:
        # The renderer may hold any prefix of the batch after a failed add
        try:
            self.renderer.remove_entities(batch)
        except Exception:
            logger.exception("Could not withdraw %d entities after a failed add", len(batch))
            return
        self._entities = []
