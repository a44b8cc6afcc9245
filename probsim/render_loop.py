"""Cooperative per-frame render loop.

The loop runs as a background asyncio task: each frame draws whatever the
scene currently owns and then yields once. Experiment runs are synchronous,
so a frame never observes a half-materialized scene.
"""

import asyncio
import logging
from typing import Optional

from .config import DEFAULT_FRAME_INTERVAL
from .renderer import Renderer
from .scene import SceneLifecycleManager

logger = logging.getLogger(__name__)


class RenderLoop:
    """Background task that renders the owned entities once per frame."""

    def __init__(
        self,
        renderer: Renderer,
        scene: SceneLifecycleManager,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
    ):
        """Initialize the render loop.

        Args:
            renderer: Backend that draws frames
            scene: Scene whose entities are drawn
            frame_interval: Seconds to wait between frames
        """
        self._renderer = renderer
        self._scene = scene
        self._frame_interval = frame_interval
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the render loop."""
        if self._running:
            logger.warning("Render loop already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._loop(), name="probsim_render_loop")
        logger.info("Render loop started (interval: %.4fs)", self._frame_interval)

    async def stop(self) -> None:
        """Stop the render loop and wait for the task to finish."""
        if not self._running:
            return

        self._running = False
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Render loop stopped after %d frames", self.frames)

    async def _loop(self) -> None:
        while self._running:
            try:
                self._renderer.render_frame(self._scene.entities)
                self.frames += 1
            except Exception:
                logger.exception("Render frame failed")
            await asyncio.sleep(self._frame_interval)
