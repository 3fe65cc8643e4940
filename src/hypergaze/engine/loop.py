"""Simulation loop - fixed-rate ticks and frame rendering."""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional
import logging
import time

from ..figures import AlignedEntity
from ..render import RenderTarget
from .config import SimulationConfig
from .controls import APPLY_ORDER, Autopilot, Controller, Intent, KeyboardController, KeyboardState
from .scene import Scene, build_scene

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    tick: int
    intents: Dict[str, FrozenSet[Intent]]   # Entity name -> intents applied
    positions: Dict[str, tuple]             # Entity name -> planar body center
    mouth_radii: Dict[str, float]
    max_residual: float                     # Worst invariant error on body points
    tick_time_ms: float


@dataclass
class SimulationMetrics:
    """Counters tracked while the simulation runs."""
    total_ticks: int = 0
    frames_rendered: int = 0
    translations: int = 0
    rotations: int = 0
    worst_residual: float = 0.0
    drift_warnings: int = 0
    tick_time_history: List[float] = field(default_factory=list)

    @property
    def avg_tick_time_ms(self) -> float:
        if not self.tick_time_history:
            return 0.0
        return sum(self.tick_time_history) / len(self.tick_time_history)


class SimulationEngine:
    """Drives the two-entity scene.

    Each tick:
    1. Ask every entity's controller for its intents
    2. Apply rotations, then translations (trail grows on translation)
    3. Tick every mouth oscillator
    4. Check body invariants for drift

    Realignment happens only when a frame is rendered, after every
    entity has finished its motion for the tick.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        scene: Optional[Scene] = None,
        keyboard: Optional[KeyboardState] = None,
        controllers: Optional[Dict[str, Controller]] = None,
        on_tick_complete: Optional[Callable[[TickResult], None]] = None,
    ):
        self.config = config or SimulationConfig()
        self.scene = scene or build_scene(self.config)
        self.keyboard = keyboard or KeyboardState(self.config.key_bindings)
        if controllers is None:
            controllers = {
                self.scene.first.name: KeyboardController(self.keyboard),
                self.scene.second.name: Autopilot(),
            }
        self.controllers = controllers
        self.on_tick_complete = on_tick_complete

        self.metrics = SimulationMetrics()
        self._last_clock_ms: Optional[int] = None
        self._running = False

    def _apply(self, entity: AlignedEntity, intents: FrozenSet[Intent]):
        cfg = self.config
        for intent in APPLY_ORDER:
            if intent not in intents:
                continue
            if intent is Intent.ROTATE_RIGHT:
                entity.rotate_right(cfg.rot_speed)
            elif intent is Intent.ROTATE_LEFT:
                entity.rotate_left(cfg.rot_speed)
            elif intent is Intent.MOVE_FORWARD:
                entity.move_forward(cfg.move_speed)
            elif intent is Intent.MOVE_BACKWARD:
                entity.move_backward(cfg.move_speed)

            if intent.is_translation:
                entity.append_trail_point()
                self.metrics.translations += 1
            else:
                self.metrics.rotations += 1

    def tick(self) -> TickResult:
        """Advance the simulation by one fixed step."""
        tick_start = time.perf_counter()
        applied: Dict[str, FrozenSet[Intent]] = {}

        for entity in self.scene.entities:
            controller = self.controllers.get(entity.name)
            intents = controller.intents() if controller is not None else frozenset()
            self._apply(entity, intents)
            applied[entity.name] = intents

        for entity in self.scene.entities:
            entity.breathe()

        residual = max(entity.body.center.max_residual for entity in self.scene.entities)
        if residual > self.metrics.worst_residual:
            self.metrics.worst_residual = residual
        if residual > self.config.drift_warning:
            self.metrics.drift_warnings += 1
            logger.warning(
                "Tick %d: body invariant residual %.3g exceeds %.3g",
                self.metrics.total_ticks, residual, self.config.drift_warning,
            )

        tick_time = (time.perf_counter() - tick_start) * 1000
        self.metrics.total_ticks += 1
        self.metrics.tick_time_history.append(tick_time)
        if len(self.metrics.tick_time_history) > 1000:
            self.metrics.tick_time_history.pop(0)

        result = TickResult(
            tick=self.metrics.total_ticks,
            intents=applied,
            positions={e.name: e.position for e in self.scene.entities},
            mouth_radii={e.name: e.mouth.radius for e in self.scene.entities},
            max_residual=residual,
            tick_time_ms=tick_time,
        )

        if self.on_tick_complete:
            self.on_tick_complete(result)

        return result

    def advance_clock(self, now_ms: int) -> int:
        """Run the catch-up ticks owed since the last call.

        Ticks are only run once more than one frame period has elapsed;
        the clock then jumps to now_ms, dropping any remainder. Returns
        the number of ticks run.
        """
        if self._last_clock_ms is None:
            self._last_clock_ms = now_ms
            return 0
        elapsed = now_ms - self._last_clock_ms
        frame_ms = self.config.frame_ms
        if elapsed <= frame_ms:
            return 0
        ticks = elapsed // frame_ms
        for _ in range(ticks):
            self.tick()
        self._last_clock_ms = now_ms
        return ticks

    def render(self, target: RenderTarget):
        """Realign both entities, then draw the whole scene."""
        self.scene.draw(target)
        self.metrics.frames_rendered += 1

    def run(
        self,
        max_ticks: int,
        target: Optional[RenderTarget] = None,
        render_every: int = 1,
    ) -> SimulationMetrics:
        """Run ticks headlessly, rendering every render_every ticks.

        Stops after max_ticks or when stop() is called.
        """
        if render_every < 1:
            raise ValueError(f"render_every must be >= 1, got {render_every}")
        self._running = True
        for i in range(max_ticks):
            if not self._running:
                break
            self.tick()
            if target is not None and (i + 1) % render_every == 0:
                self.render(target)
        self._running = False
        return self.metrics

    def stop(self):
        """Stop a run() in progress."""
        self._running = False

    def reset_metrics(self):
        self.metrics = SimulationMetrics()
