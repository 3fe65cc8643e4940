"""Demo: two figures watching each other on the hyperbolic plane.

Runs the standard scene headlessly: the first figure follows a scripted
key sequence, the second circles on autopilot. Prints a short report and
writes the final frame as a PNG (needs matplotlib).

Usage:
    python examples/demo_scene.py --ticks 600 --output frames/final.png
"""

import argparse
import logging
from pathlib import Path

from hypergaze.engine import SimulationConfig, SimulationEngine
from hypergaze.figures import gaze_error
from hypergaze.render import HAS_MATPLOTLIB, MatplotlibRenderer, RecordingRenderer

# (tick, key, pressed)
SCRIPT = [
    (0, "e", True),
    (120, "f", True),
    (180, "f", False),
    (300, "s", True),
    (330, "s", False),
    (420, "e", False),
    (420, "d", True),
    (500, "d", False),
]


def run_demo(ticks: int, output: Path, verbose: bool = False) -> int:
    print("=" * 60)
    print("hypergaze scene demo")
    print("=" * 60)

    engine = SimulationEngine(SimulationConfig())
    events = sorted(SCRIPT)

    for i in range(ticks):
        while events and events[0][0] == i:
            _, key, pressed = events.pop(0)
            if pressed:
                engine.keyboard.press(key)
            else:
                engine.keyboard.release(key)
        result = engine.tick()
        if verbose or i % 100 == 0:
            first = result.positions["first"]
            second = result.positions["second"]
            print(f"[Tick {result.tick:4d}] first=({first[0]:+.3f}, {first[1]:+.3f}) "
                  f"second=({second[0]:+.3f}, {second[1]:+.3f}) "
                  f"mouth={result.mouth_radii['first']:.3f}")

    recorder = RecordingRenderer()
    engine.render(recorder)
    print("-" * 60)
    print(f"Ticks run:        {engine.metrics.total_ticks}")
    print(f"Draw calls:       {len(recorder.calls)}")
    print(f"Trail lengths:    first={len(engine.scene.first.trail)}, "
          f"second={len(engine.scene.second.trail)}")
    print(f"Worst residual:   {engine.metrics.worst_residual:.3g}")
    errors = [gaze_error(e, i) for e in engine.scene.entities for i in range(4)]
    print(f"Worst gaze error: {max(errors):.3g} rad")

    if not HAS_MATPLOTLIB:
        print("matplotlib not installed; skipping frame output")
        return 0

    renderer = MatplotlibRenderer()
    try:
        engine.render(renderer)
        path = renderer.save(output)
    finally:
        renderer.close()
    print(f"Frame saved to:   {path}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Run the hypergaze demo scene")
    parser.add_argument("--ticks", type=int, default=600)
    parser.add_argument("--output", type=Path, default=Path("frames/final.png"))
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return run_demo(args.ticks, args.output, verbose=args.verbose)


if __name__ == "__main__":
    raise SystemExit(main())
