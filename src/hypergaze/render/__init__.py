"""Rendering seam: colors, the RenderTarget protocol and two targets."""

from .targets import (
    Color,
    WHITE,
    BLACK,
    RenderTarget,
    DrawCall,
    RecordingRenderer,
    MatplotlibRenderer,
    HAS_MATPLOTLIB,
)

__all__ = [
    "Color",
    "WHITE",
    "BLACK",
    "RenderTarget",
    "DrawCall",
    "RecordingRenderer",
    "MatplotlibRenderer",
    "HAS_MATPLOTLIB",
]
