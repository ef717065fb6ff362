# setup.py - Package the adaptive resonance engine
from setuptools import setup, find_packages

setup(
    name="adaptive_resonance",
    version="0.1.0",
    description="Shared resonance-search-and-learning engine for ART clustering",
    packages=find_packages(include=["adaptive_resonance", "adaptive_resonance.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
