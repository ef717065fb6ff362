"""
Reference resonance kernels.

- FuzzyKernel:       FuzzyART (complement-coded, analog inputs in [0, 1])
- BinaryKernel:      ART1 (binary inputs)
- HypersphereKernel: HypersphereART (ball-shaped categories)
"""

from .fuzzy import FuzzyKernel, FuzzyWeight, complement_code
from .binary import BinaryKernel, BinaryWeight
from .hypersphere import HypersphereKernel, HypersphereWeight

__all__ = [
    "FuzzyKernel",
    "FuzzyWeight",
    "complement_code",
    "BinaryKernel",
    "BinaryWeight",
    "HypersphereKernel",
    "HypersphereWeight",
]
