"""
Configuration for the probsim engine.

Defaults mirror the original interactive scene; a few values can be
overridden from the environment (or a .env file).
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_FRAME_INTERVAL = 1.0 / 60.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SceneSettings:
    """Static scene setup handed to the renderer once at startup."""
    background_color: int = 0xF0F4F8
    camera_fov: float = 75.0
    camera_near: float = 0.1
    camera_far: float = 1000.0
    camera_position: Tuple[float, float, float] = (0.0, 0.0, 5.0)
    ambient_light_color: int = 0xFFFFFF
    ambient_light_intensity: float = 0.5
    point_light_color: int = 0xFFFFFF
    point_light_intensity: float = 1.0
    point_light_position: Tuple[float, float, float] = (5.0, 5.0, 5.0)
    controls_damping: bool = True
    controls_damping_factor: float = 0.25
    antialias: bool = True


@dataclass
class ProbsimConfig:
    """
    Runtime configuration.

    Attributes:
        seed: Base seed for the random source (None = unseeded)
        frame_interval: Seconds between render-loop frames
        log_level: Logging level name
        scene: Scene setup passed to the renderer
    """
    seed: Optional[int] = None
    frame_interval: float = DEFAULT_FRAME_INTERVAL
    log_level: str = DEFAULT_LOG_LEVEL
    scene: SceneSettings = field(default_factory=SceneSettings)

    def __post_init__(self):
        if self.frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {self.frame_interval}")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'ProbsimConfig':
        """
        Build a config from PROBSIM_* environment variables.

        Reads PROBSIM_SEED, PROBSIM_FRAME_INTERVAL and PROBSIM_LOG_LEVEL,
        after loading a .env file if one is present.
        """
        load_dotenv(dotenv_path)

        raw_seed = os.getenv("PROBSIM_SEED")
        raw_interval = os.getenv("PROBSIM_FRAME_INTERVAL")
        return cls(
            seed=int(raw_seed) if raw_seed else None,
            frame_interval=float(raw_interval) if raw_interval else DEFAULT_FRAME_INTERVAL,
            log_level=os.getenv("PROBSIM_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
