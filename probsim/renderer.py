"""
Renderer boundary.

The 3D backend is opaque: it accepts entity batches, removes entity
batches, and draws one frame at a time. `RecordingRenderer` keeps all of
that in memory and is used headless and in tests.
"""

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

from .config import SceneSettings

if TYPE_CHECKING:
    from .scene import VisualEntity


class Renderer(Protocol):
    """What the core needs from a rendering backend."""

    def configure(self, settings: SceneSettings) -> None:
        """Apply the static scene setup (background, camera, lights, controls)."""
        ...

    def add_entities(self, entities: Sequence['VisualEntity']) -> None:
        """Add a batch of entities to the scene graph."""
        ...

    def remove_entities(self, entities: Sequence['VisualEntity']) -> None:
        """Remove a batch of entities; entities not in the scene are ignored."""
        ...

    def render_frame(self, entities: Sequence['VisualEntity']) -> None:
        """Update controls/animations and draw the given entities once."""
        ...


class RecordingRenderer:
    """
    In-memory renderer.

    Tracks the live entity list, every add/remove batch, and the number
    of frames drawn.
    """

    def __init__(self):
        self.settings: Optional[SceneSettings] = None
        self.live: List['VisualEntity'] = []
        self.batches: List[Tuple[str, int]] = []
        self.frames = 0
        self.last_frame: Tuple['VisualEntity', ...] = ()

    def configure(self, settings: SceneSettings) -> None:
        self.settings = settings

    def add_entities(self, entities: Sequence['VisualEntity']) -> None:
        self.live.extend(entities)
        self.batches.append(('add', len(entities)))

    def remove_entities(self, entities: Sequence['VisualEntity']) -> None:
        removed = {id(e) for e in entities}
        self.live = [e for e in self.live if id(e) not in removed]
        self.batches.append(('remove', len(entities)))

    def render_frame(self, entities: Sequence['VisualEntity']) -> None:
        self.last_frame = tuple(entities)
        self.frames += 1
