"""
Experiment simulator.

Each experiment kind is a pure function of (scenario, random source) that
draws `scenario.trial_count` trials. The simulator:
1. Looks up the scenario for the requested kind
2. Runs the kind's draw function, producing trials in draw order
3. Tallies outcomes into a fresh zero-initialised count table

No state is kept between runs.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Union

from .errors import UnknownExperimentKind
from .outcomes import ExperimentResult, TrialOutcome
from .randomness import RandomSource, checked_draw, make_random_source
from .scenarios.base import ExperimentKind, OutcomeLabel, ScenarioDefinition
from .scenarios.registry import ScenarioRegistry, create_default_registry

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

COIN_HEADS_THRESHOLD = 0.5
DIE_FACES = 6

# Conditional probability: a trial is independentEvent with probability 0.5.
# Otherwise it becomes dependentEvent with a probability gated on the previous
# trial's label; the first trial uses the marginal gate. Marginal frequency of
# dependentEvent is 0.5 * (0.5 * 0.8 + 0.5 * 0.4) = 0.3.
INDEPENDENT_THRESHOLD = 0.5
DEPENDENT_GATE_AFTER_INDEPENDENT = 0.8
DEPENDENT_GATE_OTHERWISE = 0.4
DEPENDENT_GATE_FIRST_TRIAL = 0.6

ExperimentFunction = Callable[[ScenarioDefinition, RandomSource], List[TrialOutcome]]


def _draw_spin(draw: RandomSource) -> tuple:
    """Random target orientation (x, y, z) in radians."""
    return tuple(checked_draw(draw) * TWO_PI for _ in range(3))


def simulate_coin_toss(scenario: ScenarioDefinition, draw: RandomSource) -> List[TrialOutcome]:
    """Bernoulli(0.5) per trial: heads if u < 0.5 else tails."""
    trials = []
    for i in range(scenario.trial_count):
        label = 'heads' if checked_draw(draw) < COIN_HEADS_THRESHOLD else 'tails'
        trials.append(TrialOutcome(index=i, label=label, attributes={'spin': _draw_spin(draw)}))
    return trials


def simulate_dice_toss(scenario: ScenarioDefinition, draw: RandomSource) -> List[TrialOutcome]:
    """Uniform face in 1..6 per trial."""
    trials = []
    for i in range(scenario.trial_count):
        face = min(int(checked_draw(draw) * DIE_FACES) + 1, DIE_FACES)
        trials.append(TrialOutcome(index=i, label=face, attributes={'spin': _draw_spin(draw)}))
    return trials


def simulate_conditional_probability(
    scenario: ScenarioDefinition,
    draw: RandomSource
) -> List[TrialOutcome]:
    """
    Two-stage draw with the dependent branch gated on the previous trial.

    Stage one: independentEvent if u < 0.5.
    Stage two (only if stage one failed): dependentEvent if v < gate, where
    gate is 0.8 after an independentEvent, 0.4 after anything else and
    0.6 for the first trial. Otherwise noEvent.
    """
    trials = []
    previous: Optional[OutcomeLabel] = None
    for i in range(scenario.trial_count):
        if checked_draw(draw) < INDEPENDENT_THRESHOLD:
            label, stage = 'independentEvent', 'independent'
        else:
            if previous is None:
                gate = DEPENDENT_GATE_FIRST_TRIAL
            elif previous == 'independentEvent':
                gate = DEPENDENT_GATE_AFTER_INDEPENDENT
            else:
                gate = DEPENDENT_GATE_OTHERWISE

            if checked_draw(draw) < gate:
                label, stage = 'dependentEvent', 'dependent'
            else:
                label, stage = 'noEvent', 'none'

        trials.append(TrialOutcome(
            index=i,
            label=label,
            attributes={'stage': stage, 'previous_label': previous}
        ))
        previous = label
    return trials


DEFAULT_EXPERIMENTS: Dict[ExperimentKind, ExperimentFunction] = {
    ExperimentKind.COIN_TOSS: simulate_coin_toss,
    ExperimentKind.DICE_TOSS: simulate_dice_toss,
    ExperimentKind.CONDITIONAL_PROBABILITY: simulate_conditional_probability,
}


class Simulator:
    """
    Runs experiments defined in a scenario registry.

    Randomness comes only from the injected source, so a seeded or
    sequence-backed source makes runs reproducible.
    """

    def __init__(
        self,
        registry: Optional[ScenarioRegistry] = None,
        random_source: Optional[RandomSource] = None,
        experiments: Optional[Dict[ExperimentKind, ExperimentFunction]] = None
    ):
        """
        Args:
            registry: Scenario catalog (default catalog if None)
            random_source: Uniform [0, 1) source (fresh numpy generator if None)
            experiments: Draw function per kind (built-in experiments if None)
        """
        self.registry = registry if registry is not None else create_default_registry()
        self.random_source = random_source if random_source is not None else make_random_source()
        self.experiments = dict(experiments if experiments is not None else DEFAULT_EXPERIMENTS)

        errors = self.registry.validate()
        if errors:
            raise ValueError(f"Invalid scenario registry: {errors}")

    def simulate(self, kind: Union[ExperimentKind, str]) -> ExperimentResult:
        """
        Draw all trials for one experiment kind.

        Args:
            kind: Experiment kind (enum member or its string value)

        Returns:
            ExperimentResult with a fresh tally and the trials in draw order

        Raises:
            UnknownExperimentKind: kind is not registered or has no draw function
        """
        scenario = self.registry.get(kind)
        experiment = self.experiments.get(scenario.kind)
        if experiment is None:
            raise UnknownExperimentKind(kind, list(self.experiments))

        trials = experiment(scenario, self.random_source)

        outcomes: Dict[OutcomeLabel, int] = {label: 0 for label in scenario.outcome_labels}
        for trial in trials:
            if trial.label not in outcomes:
                raise ValueError(
                    f"Experiment '{scenario.kind}' produced label {trial.label!r} "
                    f"outside its probability table"
                )
            outcomes[trial.label] += 1

        result = ExperimentResult(
            kind=scenario.kind,
            total_trials=scenario.trial_count,
            outcomes=outcomes,
            trials=tuple(trials),
        )
        errors = result.validate()
        if errors:
            raise ValueError(f"Inconsistent result for '{scenario.kind}': {errors}")

        logger.debug("Simulated %s: %s", scenario.kind, outcomes)
        return result


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------

def simulate(
    kind: Union[ExperimentKind, str],
    random_source: Optional[RandomSource] = None
) -> ExperimentResult:
    """Simulate one experiment against the default catalog."""
    return Simulator(random_source=random_source).simulate(kind)
