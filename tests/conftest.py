"""Pytest configuration and fixtures for probsim tests."""

import pytest

from probsim.randomness import make_random_source
from probsim.renderer import RecordingRenderer
from probsim.scene import SceneLifecycleManager
from probsim.simulator import Simulator


@pytest.fixture
def seeded_source():
    """Provide a deterministic uniform source for tests."""
    return make_random_source(42)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def scene(renderer):
    return SceneLifecycleManager(renderer)


@pytest.fixture
def simulator(seeded_source):
    """Simulator over the default catalog with a seeded source."""
    return Simulator(random_source=seeded_source)
