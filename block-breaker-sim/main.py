#!/usr/bin/env python3
"""CLI entry point for the Block Breaker simulation.

Usage:
    python main.py play [reflect|gameover]   Launch the Pygame game window
    python main.py camera                    Play with the webcam marker tracker
    python main.py auto [runs] [skill]       Run autopilot sessions and print stats
    python main.py analyze                   Generate autopilot charts
    python main.py test                      Run all tests

Add -v anywhere for debug logging.
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _args():
    return [a for a in sys.argv[2:] if a != "-v"]


def _config_from_args():
    from breaker.types import BottomEdge, GameConfig

    args = _args()
    mode = args[0] if args else "reflect"
    try:
        edge = BottomEdge(mode)
    except ValueError:
        print(f"ERROR: unknown bottom edge mode '{mode}' (use reflect or gameover)")
        sys.exit(2)
    return GameConfig(bottom_edge=edge)


def cmd_play():
    """Launch the Pygame game window."""
    print("Launching Block Breaker...")
    print("Controls: mouse=move  click/SPACE=launch  P/ESC=pause  R=restart  Q=quit")
    print("-" * 60)
    from sim.visualizer import run_visualizer
    if not run_visualizer(_config_from_args()):
        sys.exit(1)


def cmd_camera():
    """Play with a coloured marker in front of the webcam."""
    print("Launching Block Breaker with camera control...")
    print("Hold an orange object in view and move it left/right. SPACE=launch  Q=quit")
    print("-" * 60)
    from sim.visualizer import run_visualizer
    if not run_visualizer(use_camera=True):
        sys.exit(1)


def cmd_auto():
    """Run autopilot sessions and print stats."""
    from sim.autoplay import compute_stats, run_session

    args = _args()
    runs = int(args[0]) if args and args[0].isdigit() else 5
    skill = float(args[1]) if len(args) > 1 else 0.9

    print("=" * 60)
    print("  BLOCK BREAKER AUTOPILOT")
    print("=" * 60)
    print(f"\n  Runs: {runs}   Skill: {skill:.0%}\n")

    results = []
    for seed in range(runs):
        r = run_session(seed=seed, skill=skill)
        results.append(r)
        print(f"  Run {seed + 1:2d}: {r.final_state.value:8s} score {r.score:5d}  "
              f"bricks {r.bricks_destroyed}/{r.bricks_total}  "
              f"time {r.sim_time:6.1f}s  paddle bounces {r.paddle_bounces}")

    s = compute_stats(results)
    print()
    print(f"  Cleared: {s['cleared']}/{s['runs']} ({s['clear_rate']}%)")
    print(f"  Avg score: {s['avg_score']}   Max score: {s['max_score']}")
    if s["avg_clear_time"] is not None:
        print(f"  Avg time to clear: {s['avg_clear_time']}s")
    print(f"  Avg paddle bounces: {s['avg_paddle_bounces']}")
    print(f"  Brick edges hit: {dict(sorted(s['hit_edges'].items(), key=lambda x: -x[1]))}")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "camera": cmd_camera,
    "auto": cmd_auto,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    level = logging.DEBUG if "-v" in sys.argv else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
