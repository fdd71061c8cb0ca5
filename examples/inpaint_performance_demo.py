"""
Performance demonstration for region inpainting.

Times the fast marching inpainter on square holes of increasing size and
shows how the per-pixel cost stays roughly flat while total time grows
with hole area.

Run from the repository root:
    python examples/inpaint_performance_demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

import numpy as np

from WR_Libs.InpaintingLib.inpaint_models import SelectionRegion
from WR_Libs.InpaintingLib.region_inpainter import inpaint_region


def make_test_buffer(size):
    """Striped RGBA test image so the kernel has edges to follow."""
    ys, xs = np.mgrid[0:size, 0:size]
    buffer = np.zeros((size, size, 4), dtype=np.uint8)
    buffer[..., 0] = ((xs // 8) % 2) * 220
    buffer[..., 1] = (ys * 255 // max(1, size - 1)).astype(np.uint8)
    buffer[..., 2] = 90
    buffer[..., 3] = 255
    return buffer


def benchmark_hole(hole, iterations=3):
    """Benchmark one hole size."""
    size = hole + 100
    offset = (size - hole) // 2
    region = SelectionRegion("bench", offset, offset, hole, hole)

    print(f"\nBenchmarking {hole}x{hole} hole in {size}x{size} image")
    print("-" * 60)

    times = []
    for i in range(iterations):
        buffer = make_test_buffer(size)
        start = time.time()
        report = inpaint_region(buffer, size, size, region)
        elapsed = time.time() - start
        times.append(elapsed)
        label = " (warmup)" if i == 0 else ""
        print(f"  Run {i+1}: {elapsed:.3f}s, {report.resolved_pixels} pixels{label}")

    timed = times[1:] or times
    average = sum(timed) / len(timed)
    per_pixel = average / (hole * hole) * 1e6
    print(f"Average (excluding warmup): {average:.3f}s ({per_pixel:.1f} us/pixel)")
    return average


def main():
    """Run inpainting benchmarks."""
    print("=" * 60)
    print("Region Inpainting Performance Benchmark")
    print("=" * 60)

    results = {}
    for hole in (10, 20, 40):
        results[hole] = benchmark_hole(hole)

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for hole, seconds in results.items():
        print(f"  {hole:>3}x{hole:<3} hole: {seconds:.3f}s")


if __name__ == "__main__":
    main()
