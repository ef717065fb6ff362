# adaptive_resonance/constants.py
"""
Adaptive Resonance Constants

This module defines the defaults used throughout the resonance engine:

LAYER 1: Resonance Constants (Kernel Layer)
- DEFAULT_VIGILANCE: Similarity threshold a category must meet to resonate
- DEFAULT_INITIAL_ACTIVATION: Activation reported for a freshly created category

LAYER 2: Search Constants (Scan Layer)
- DEFAULT_PARALLEL_THRESHOLD: Category count above which scans go parallel
- DEFAULT_LEAF_SIZE: Categories scanned sequentially by one parallel task

LAYER 3: Resource Constants (Engine Layer)
- DEFAULT_MAX_CACHE_SIZE: Bound on cached pattern conversions
- DEFAULT_MEMORY_OPTIMIZATION_THRESHOLD: Cache fill ratio that triggers a trim
- LATENCY_SMOOTHING: Weight of the newest sample in the latency average
"""
import os


# =============================================================================
# LAYER 1: Resonance Constants (Kernel Layer)
# =============================================================================

DEFAULT_VIGILANCE = 0.75
DEFAULT_INITIAL_ACTIVATION = 1.0

# FuzzyART: choice parameter α and learning rate β (β = 1 is fast learning)
DEFAULT_ALPHA = 0.001
DEFAULT_LEARNING_RATE = 1.0

# ART1: choice parameter L (L > 1)
DEFAULT_CHOICE_L = 2.0

# HypersphereART: radius of a new category and the expansion ceiling
DEFAULT_RADIUS = 0.0
DEFAULT_MAX_RADIUS = 1.0


# =============================================================================
# LAYER 2: Search Constants (Scan Layer)
# =============================================================================

# Stores with more categories than this are scanned on the worker pool
DEFAULT_PARALLEL_THRESHOLD = 100

# Leaf size of the divide-and-conquer split (independent of the threshold)
DEFAULT_LEAF_SIZE = 100

DEFAULT_PARALLELISM_LEVEL = os.cpu_count() or 1


# =============================================================================
# LAYER 3: Resource Constants (Engine Layer)
# =============================================================================

DEFAULT_MAX_CACHE_SIZE = 1000
DEFAULT_MEMORY_OPTIMIZATION_THRESHOLD = 0.8

# avg ← (1 - s)·avg + s·sample
LATENCY_SMOOTHING = 0.5

assert 0.0 < LATENCY_SMOOTHING <= 1.0, "Latency smoothing must satisfy 0 < s ≤ 1"
