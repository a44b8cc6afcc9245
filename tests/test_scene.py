"""
Tests for the scene lifecycle manager and entity placement.
"""

import math

import pytest

from probsim.errors import SceneNotClearedError
from probsim.outcomes import ExperimentResult, TrialOutcome
from probsim.renderer import RecordingRenderer
from probsim.scenarios import ExperimentKind
from probsim.scene import (
    COIN_COLORS,
    SceneLifecycleManager,
    build_entity,
    circle_position,
)


def coin_result():
    trials = (
        TrialOutcome(index=0, label='heads', attributes={'spin': (0.1, 0.2, 0.3)}),
        TrialOutcome(index=1, label='tails', attributes={'spin': (1.0, 2.0, 3.0)}),
        TrialOutcome(index=2, label='heads', attributes={'spin': (0.0, 0.0, 0.0)}),
    )
    return ExperimentResult(
        kind=ExperimentKind.COIN_TOSS,
        total_trials=3,
        outcomes={'heads': 2, 'tails': 1},
        trials=trials,
    )


class FailingRenderer(RecordingRenderer):
    def add_entities(self, entities):
        raise RuntimeError("backend unavailable")


class PartialRenderer(RecordingRenderer):
    """Accepts the first `accepted` entities of a batch, then raises."""

    def __init__(self, accepted):
        super().__init__()
        self.accepted = accepted

    def add_entities(self, entities):
        self.live.extend(entities[:self.accepted])
        raise RuntimeError("backend dropped the batch")


class StuckRemovalRenderer(RecordingRenderer):
    """Refuses the first removal request."""

    def __init__(self):
        super().__init__()
        self.refusals = 1

    def remove_entities(self, entities):
        if self.refusals:
            self.refusals -= 1
            raise RuntimeError("removal refused")
        super().remove_entities(entities)


class PartialStuckRenderer(PartialRenderer, StuckRemovalRenderer):
    pass


class TestPlacement:
    """Placement and style are pure functions of the trial."""

    def test_first_trial_on_positive_x_axis(self):
        assert circle_position(0, 50) == pytest.approx((2.0, 0.0, 0.0))

    def test_radius_grows_with_index(self):
        x, y, z = circle_position(10, 40)
        assert math.hypot(x, z) == pytest.approx(12.0)
        assert math.atan2(z, x) == pytest.approx(math.pi / 2)

    def test_coin_style(self):
        trial = TrialOutcome(index=0, label='tails', attributes={'spin': (1.0, 2.0, 3.0)})
        entity = build_entity(trial, 50, ExperimentKind.COIN_TOSS)

        assert entity.style.shape == 'cylinder'
        assert entity.style.color == COIN_COLORS['tails']
        assert entity.style.geometry_dict()['segments'] == 64
        assert entity.transition.to_state == (1.0, 2.0, 3.0)
        assert entity.transition.easing == "power2.inOut"
        assert entity.transition.duration == 1.0

    def test_die_height_follows_face(self):
        low = build_entity(TrialOutcome(index=3, label=1), 60, ExperimentKind.DICE_TOSS)
        high = build_entity(TrialOutcome(index=3, label=6), 60, ExperimentKind.DICE_TOSS)

        assert low.transform.position[1] == pytest.approx(0.5)
        assert high.transform.position[1] == pytest.approx(3.0)
        assert low.style.color != high.style.color
        # No spin attribute -> static
        assert low.transition is None

    def test_event_entity_scales_in(self):
        trial = TrialOutcome(index=0, label='dependentEvent', attributes={'stage': 'dependent'})
        entity = build_entity(trial, 70, ExperimentKind.CONDITIONAL_PROBABILITY)

        assert entity.style.shape == 'sphere'
        assert entity.transition.target == 'scale'
        assert entity.transform.position[1] == pytest.approx(0.5)

    def test_same_trial_same_entity(self):
        trial = TrialOutcome(index=7, label='heads', attributes={'spin': (0.5, 0.5, 0.5)})
        assert build_entity(trial, 50, ExperimentKind.COIN_TOSS) == build_entity(
            trial, 50, ExperimentKind.COIN_TOSS
        )


class TestSceneLifecycle:
    """Tests for SceneLifecycleManager."""

    def test_clear_before_any_run_is_noop(self, scene, renderer):
        scene.clear()
        scene.clear()
        assert len(scene) == 0
        assert renderer.batches == []

    def test_materialize_owns_one_entity_per_trial(self, scene, renderer):
        entities = scene.materialize(coin_result())

        assert len(scene) == 3
        assert [e.owner_trial_index for e in entities] == [0, 1, 2]
        assert renderer.live == list(entities)
        assert renderer.batches == [('add', 3)]

    def test_materialize_twice_without_clear(self, scene):
        scene.materialize(coin_result())
        with pytest.raises(SceneNotClearedError) as excinfo:
            scene.materialize(coin_result())
        assert excinfo.value.owned == 3
        # Existing entities untouched
        assert len(scene) == 3

    def test_clear_removes_everything(self, scene, renderer):
        scene.materialize(coin_result())
        scene.clear()

        assert len(scene) == 0
        assert renderer.live == []
        assert renderer.batches == [('add', 3), ('remove', 3)]

    def test_clear_then_materialize(self, scene, simulator):
        result = simulator.simulate(ExperimentKind.DICE_TOSS)
        scene.clear()
        scene.materialize(result)
        assert len(scene) == result.total_trials

    def test_materialize_is_deterministic(self, simulator):
        """Same result, two independent scenes, identical entities."""
        result = simulator.simulate(ExperimentKind.COIN_TOSS)
        first = SceneLifecycleManager(RecordingRenderer()).materialize(result)
        second = SceneLifecycleManager(RecordingRenderer()).materialize(result)

        assert first == second

    def test_renderer_failure_leaves_scene_empty(self):
        scene = SceneLifecycleManager(FailingRenderer())
        with pytest.raises(RuntimeError, match="backend unavailable"):
            scene.materialize(coin_result())
        assert len(scene) == 0
        assert scene.renderer.live == []

    def test_partial_add_is_withdrawn(self):
        renderer = PartialRenderer(accepted=2)
        scene = SceneLifecycleManager(renderer)

        with pytest.raises(RuntimeError, match="dropped the batch"):
            scene.materialize(coin_result())

        assert len(scene) == 0
        assert renderer.live == []
        assert renderer.batches == [('remove', 3)]

    def test_failed_withdrawal_keeps_ownership(self):
        """If the renderer refuses the removal, the scene still tracks the batch."""
        renderer = PartialStuckRenderer(accepted=2)
        scene = SceneLifecycleManager(renderer)

        with pytest.raises(RuntimeError, match="dropped the batch"):
            scene.materialize(coin_result())
        assert len(scene) == 3

        scene.clear()
        assert len(scene) == 0
        assert renderer.live == []

    def test_failed_clear_can_be_retried(self):
        renderer = StuckRemovalRenderer()
        scene = SceneLifecycleManager(renderer)
        scene.materialize(coin_result())

        with pytest.raises(RuntimeError, match="removal refused"):
            scene.clear()
        assert len(scene) == 3
        assert len(renderer.live) == 3

        scene.clear()
        assert len(scene) == 0
        assert renderer.live == []
