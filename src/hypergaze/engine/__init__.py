"""hypergaze simulation engine."""

from .config import SimulationConfig
from .controls import (
    Intent,
    KeyboardState,
    KeyboardController,
    Autopilot,
    Controller,
    APPLY_ORDER,
)
from .scene import Scene, build_scene, make_entity
from .loop import SimulationEngine, SimulationMetrics, TickResult

__all__ = [
    "SimulationConfig",
    "Intent",
    "KeyboardState",
    "KeyboardController",
    "Autopilot",
    "Controller",
    "APPLY_ORDER",
    "Scene",
    "build_scene",
    "make_entity",
    "SimulationEngine",
    "SimulationMetrics",
    "TickResult",
]
