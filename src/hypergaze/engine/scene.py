"""Two-phase construction of the standard scene."""

from dataclasses import dataclass
from typing import Optional
import logging

from ..figures import AlignedEntity, PlanarDisk, wire_peers
from ..render import BLACK, Color, RenderTarget
from .config import SimulationConfig

logger = logging.getLogger(__name__)

RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)


@dataclass
class Scene:
    """Background plus two mutually watching entities."""
    background: PlanarDisk
    first: AlignedEntity
    second: AlignedEntity

    @property
    def entities(self):
        return (self.first, self.second)

    def realign(self):
        # Motion for the tick is complete for both before either looks
        for entity in self.entities:
            entity.realign()

    def draw(self, target: RenderTarget):
        self.realign()
        self.background.draw(target)
        for entity in self.entities:
            entity.draw(target, realign=False)


def make_entity(color: Color, name: str, config: SimulationConfig) -> AlignedEntity:
    return AlignedEntity(
        color,
        name=name,
        body_radius=config.body_radius,
        eye_radius=config.eye_radius,
        pupil_radius=config.pupil_radius,
        mouth_radius=config.mouth_radius,
        mouth_step=config.mouth_step,
        eye_offset=config.eye_offset,
        samples=config.boundary_samples,
        max_reach=config.max_reach,
    )


def build_scene(config: Optional[SimulationConfig] = None) -> Scene:
    """Construct both entities, wire them, then move the second into place."""
    config = config or SimulationConfig()

    first = make_entity(RED, "first", config)
    second = make_entity(GREEN, "second", config)
    wire_peers(first, second)

    second.rotate_right(config.initial_turn)
    second.move_forward(config.initial_advance)

    background = PlanarDisk(1.0, 0.0, 0.0, BLACK, config.boundary_samples)
    logger.debug("Built scene: %r, %r", first, second)
    return Scene(background=background, first=first, second=second)
