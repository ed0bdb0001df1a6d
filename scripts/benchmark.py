#!/usr/bin/env python
"""
Render a sample solid repeatedly and display a timing breakdown.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --solid dodecahedron --iterations 50
    python scripts/benchmark.py --layers 5 --no-hierarchy
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Any

# Add project paths for development
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from prisma import Mesh, Plane, Vector3, run
from prisma.profiling import enable_profiling, reset_profile, get_profile_results


# ANSI colors for output
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
CYAN = "\033[36m"

COLORS = [
    (255, 0, 0), (0, 160, 0), (0, 0, 255), (255, 140, 0), (255, 255, 255), (255, 220, 0),
    (128, 0, 128), (0, 200, 200), (200, 100, 50), (100, 100, 100), (250, 128, 114), (0, 0, 0),
]

SOLIDS = {
    'cube': Mesh.cube,
    'tetrahedron': Mesh.tetrahedron,
    'dodecahedron': Mesh.dodecahedron,
}


def build_mesh(solid: str, layers: int, gap: float) -> Mesh:
    """Solid sliced into layers along each axis, with bevelled stickers."""
    mesh = SOLIDS[solid](COLORS)
    if layers > 1:
        for axis in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
            for i in range(1, layers):
                offset = -0.5 + i / layers
                mesh = mesh.cut(Plane(Vector3(axis).mul(offset), Vector3(axis)), gap)
    return mesh.shorten_faces(gap).soften_faces(gap)


def print_results(results: Dict[str, Dict[str, Any]], iterations: int, show_hierarchy: bool):
    """Print marker statistics, nested under their parents unless flat."""
    print()
    print(f"  {'Marker':<30} {'Calls':>8} {'Avg (ms)':>10} {'Total (ms)':>12}")
    print(f"  {'─' * 30} {'─' * 8} {'─' * 10} {'─' * 12}")

    def row(name, depth):
        m = results[name]
        label = ("  " * depth + name)[:30]
        color = BOLD if depth == 0 else ""
        print(f"  {color}{label:<30}{RESET} {m['count'] // iterations:>8} "
              f"{m['total_ms'] / iterations:>10.3f} {m['total_ms']:>12.3f}")

    if not show_hierarchy:
        for name in sorted(results, key=lambda n: -results[n]['total_ms']):
            row(name, 0)
        return

    def children(parent):
        return sorted((n for n, m in results.items() if parent in m['parents']),
                      key=lambda n: -results[n]['total_ms'])

    def walk(name, depth):
        row(name, depth)
        for child in children(name):
            walk(child, depth + 1)

    for name in sorted((n for n, m in results.items() if not m['parents']),
                       key=lambda n: -results[n]['total_ms']):
        walk(name, 0)


def main():
    parser = argparse.ArgumentParser(
        description="Render a sample solid and display a timing breakdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--solid", choices=sorted(SOLIDS), default="cube", help="Solid to render (default: cube)")
    parser.add_argument("-l", "--layers", type=int, default=3, help="Layers per axis (default: 3)")
    parser.add_argument("-g", "--gap", type=float, default=0.02, help="Gap between layers (default: 0.02)")
    parser.add_argument("-i", "--iterations", type=int, default=20, help="Number of iterations (default: 20)")
    parser.add_argument("--no-hierarchy", action="store_true", help="Show flat list instead of tree")
    parser.add_argument("--no-warmup", action="store_true", help="Skip warmup iteration")

    args = parser.parse_args()

    if args.iterations < 1:
        print("Error: --iterations must be at least 1")
        return 1

    mesh = build_mesh(args.solid, args.layers, args.gap)

    if not args.no_warmup:
        run(mesh, output_format='none')

    reset_profile()
    enable_profiling(True)
    start = time.perf_counter()
    try:
        for _ in range(args.iterations):
            result = run(mesh, output_format='dict')
    finally:
        enable_profiling(False)
    elapsed_ms = (time.perf_counter() - start) * 1000

    print()
    print("=" * 66)
    print(f"{BOLD}PRISMA BENCHMARK{RESET}: {args.solid}, {args.layers} layers")
    print("=" * 66)
    print()
    print(f"  Faces:              {CYAN}{result.stats['face_count']:,}{RESET}")
    print(f"  Front-facing:       {result.stats['front_facing_count']:,}")
    print(f"  Iterations:         {args.iterations}")
    print(f"  Time per iteration: {elapsed_ms / args.iterations:,.2f}ms")
    print_results(get_profile_results(), args.iterations, not args.no_hierarchy)
    print()
    print(f"{DIM}Set PRISMA_NO_PROFILING=1 to measure without markers.{RESET}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
