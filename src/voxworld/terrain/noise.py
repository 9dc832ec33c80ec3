"""Coherent noise sources for terrain generation.

Wraps two independent OpenSimplex generators: one drives the height field,
the other decides where vegetation grows.
"""

import logging

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

logger = logging.getLogger(__name__)

# Seed offset separating the vegetation generator from the height generator
VEGETATION_SEED_OFFSET = 1000

# Upper bound for randomly drawn seeds
_MAX_SEED = 2**31 - 1


class NoiseField:
    """Deterministic 2D noise field seeded once per generation run.

    Both sampling schemes return values in roughly [-1, 1]. The same seed
    always reproduces the same field.
    """

    def __init__(self, seed: int | None = None):
        """Initialize NoiseField.

        Args:
            seed: Noise seed. None draws a random seed.
        """
        if seed is None:
            seed = int(np.random.default_rng().integers(0, _MAX_SEED))
            logger.debug(f"Drew random noise seed {seed}")
        self.seed = seed
        self._height = OpenSimplex(seed=seed)
        self._vegetation = OpenSimplex(seed=seed + VEGETATION_SEED_OFFSET)

    def height(self, x: float, y: float) -> float:
        """Sample height noise at a single point."""
        return float(self._height.noise2(x, y))

    def vegetation(self, x: float, y: float) -> float:
        """Sample vegetation noise at a single point."""
        return float(self._vegetation.noise2(x, y))

    def height_array(
        self, xs: NDArray[np.float64], ys: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Sample height noise on the grid spanned by xs and ys.

        Args:
            xs: 1D array of x sample coordinates.
            ys: 1D array of y sample coordinates.

        Returns:
            2D array of shape (len(ys), len(xs)).
        """
        return self._height.noise2array(xs, ys)

    def vegetation_array(
        self, xs: NDArray[np.float64], ys: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Sample vegetation noise on the grid spanned by xs and ys.

        Args:
            xs: 1D array of x sample coordinates.
            ys: 1D array of y sample coordinates.

        Returns:
            2D array of shape (len(ys), len(xs)).
        """
        return self._vegetation.noise2array(xs, ys)
