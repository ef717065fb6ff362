"""
Demonstration of the Adaptive Resonance Engine

Runs the three reference kernels through the same engine:
1. FuzzyART on analog points in the unit square
2. ART1 on binary feature vectors
3. HypersphereART on growing ball-shaped categories
and finishes with a parallel scan over many categories.
"""

import logging

import numpy as np
from adaptive_resonance import (
    ResonanceEngine,
    FuzzyKernel,
    BinaryKernel,
    HypersphereKernel,
    FuzzyParameters,
    BinaryParameters,
    HypersphereParameters,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_fuzzy():
    """Cluster noisy points around three centers."""
    print_section("FuzzyART: analog clustering")

    rng = np.random.default_rng(0)
    centers = np.array([[0.2, 0.2], [0.8, 0.3], [0.5, 0.85]])
    points = np.clip(
        np.repeat(centers, 30, axis=0) + rng.normal(0, 0.04, (90, 2)), 0.0, 1.0
    )

    for vigilance in (0.6, 0.8, 0.9):
        params = FuzzyParameters(vigilance=vigilance, learning_rate=0.5)
        with ResonanceEngine(FuzzyKernel(), params) as art:
            labels = art.learn_batch(points, epochs=2)
            print(f"  ρ = {vigilance:.2f}: {art.category_count():3d} categories, "
                  f"first labels {labels[:6]}")

    print("\n✓ Higher vigilance gives finer categories")


def demonstrate_binary():
    """ART1 on binary feature vectors."""
    print_section("ART1: binary patterns")

    patterns = {
        "A": [1, 1, 0, 0, 0, 0],
        "A'": [1, 1, 1, 0, 0, 0],
        "B": [0, 0, 0, 1, 1, 0],
        "B'": [0, 0, 0, 1, 1, 1],
    }
    with ResonanceEngine(BinaryKernel(), BinaryParameters(vigilance=0.6)) as art:
        for name, bits in patterns.items():
            result = art.learn(bits)
            status = "new" if result.created else "resonated"
            print(f"  {name:3s} -> category {result.category_index} ({status})")
        for index, weight in enumerate(art.get_categories()):
            print(f"  prototype {index}: {weight.bits.astype(int).tolist()}")


def demonstrate_hypersphere():
    """Categories grow their radius as they absorb nearby points."""
    print_section("HypersphereART: growing categories")

    params = HypersphereParameters(vigilance=0.5, default_radius=0.0, max_radius=1.0)
    with ResonanceEngine(HypersphereKernel(), params) as art:
        for point in ([0.0, 0.0], [0.3, 0.0], [0.0, 0.4], [5.0, 5.0]):
            result = art.learn(point)
            weight = result.weight
            print(f"  {point} -> category {result.category_index}, "
                  f"radius {weight.radius:.2f}")
        print(f"  predict [0.1, 0.1] -> {art.predict([0.1, 0.1])}")


def demonstrate_parallel_scan():
    """Many categories push the search onto the worker pool."""
    print_section("Parallel scan and telemetry")

    rng = np.random.default_rng(1)
    points = rng.random((2000, 4))
    params = FuzzyParameters(vigilance=0.92, parallelism_level=4,
                             parallel_threshold=100, leaf_size=64)
    with ResonanceEngine(FuzzyKernel(), params) as art:
        art.learn_batch(points)
        art.predict_batch(points[:200])
        print(art.performance_snapshot())
        print(f"  {art!r}")


def main():
    """Run the complete demonstration."""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    print("\n" + "=" * 70)
    print("  ADAPTIVE RESONANCE - ENGINE DEMONSTRATION")
    print("  One search-and-learn loop, three kernels")
    print("=" * 70)

    demonstrate_fuzzy()
    demonstrate_binary()
    demonstrate_hypersphere()
    demonstrate_parallel_scan()

    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
