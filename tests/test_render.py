"""Tests for the rendering seam."""

import numpy as np
import pytest

from hypergaze.engine import SimulationConfig, SimulationEngine
from hypergaze.render import Color, RecordingRenderer, WHITE


class TestColor:
    """Test color validation."""

    def test_rgb(self):
        """rgb drops alpha."""
        assert Color(0.1, 0.2, 0.3, 0.5).rgb == (0.1, 0.2, 0.3)

    def test_out_of_range(self):
        """Components outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            Color(1.5, 0.0, 0.0)
        with pytest.raises(ValueError):
            Color(0.0, 0.0, 0.0, -0.1)


class TestRecordingRenderer:
    """Test the recording target."""

    def test_records_copies(self):
        """Recorded vertices do not alias the caller's array."""
        target = RecordingRenderer()
        verts = np.zeros((4, 2))
        target.draw_triangle_fan(verts, WHITE)
        verts[0, 0] = 1.0
        assert target.calls[0].vertices[0, 0] == 0.0

    def test_filters_and_clear(self):
        """fans/strips split by primitive; clear empties the log."""
        target = RecordingRenderer()
        target.draw_triangle_fan(np.zeros((3, 2)), WHITE)
        target.draw_line_strip(np.zeros((2, 2)), WHITE)
        assert len(target.fans) == 1
        assert len(target.strips) == 1
        target.clear()
        assert target.calls == []


class TestMatplotlibRenderer:
    """Test frame output with matplotlib."""

    def test_save_frame(self, tmp_path):
        """A rendered scene is written as an image file."""
        pytest.importorskip("matplotlib")
        from hypergaze.render import MatplotlibRenderer

        engine = SimulationEngine(SimulationConfig.for_testing())
        engine.keyboard.press("e")
        engine.run(20)

        renderer = MatplotlibRenderer(size_inches=2.0)
        try:
            engine.render(renderer)
            path = renderer.save(tmp_path / "frames" / "frame.png", dpi=50)
        finally:
            renderer.close()
        assert path.exists()
        assert path.stat().st_size > 0
