"""
Random number helpers.

Every stochastic component accepts an explicit ``numpy.random.Generator`` so
runs can be reproduced by seeding it.
"""

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a generator, seeded when ``seed`` is given."""
    return np.random.default_rng(seed)


def gaussian_noise(rng: np.random.Generator, size: int) -> np.ndarray:
    """
    Standard normal samples via the Box-Muller transform.

    Args:
        rng: Random generator
        size: Number of samples

    Returns:
        Array of shape (size,)
    """
    # 1 - U keeps u1 in (0, 1] so the log is finite
    u1 = 1.0 - rng.random(size)
    u2 = rng.random(size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
