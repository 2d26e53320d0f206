"""
Random sample generation.

Usage:
    from pysimstudy.sampling import SampleGenerator

    gen = SampleGenerator(seed=42)
    x = gen.sample(mean=0.0, std=1.0, n=30)
"""

from pysimstudy.sampling.generator import SampleGenerator, spawn_seeds

__all__ = [
    "SampleGenerator",
    "spawn_seeds",
]
