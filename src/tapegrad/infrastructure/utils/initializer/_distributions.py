"""
Sampling distributions for random initialization.

Each distribution is a small frozen dataclass satisfying `IDistribution`:
``sample(rng, shape)`` draws a float32 array from a
``numpy.random.Generator``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..._constants import DEFAULT_DTYPE


@dataclass(frozen=True)
class Uniform:
    """
    Continuous uniform distribution on ``[low, high)``.

    Raises
    ------
    ValueError
        If ``high <= low``.
    """

    low: float = 0.0
    high: float = 1.0

    def __post_init__(self) -> None:
        if not self.high > self.low:
            raise ValueError(
                f"Uniform requires high > low, got low={self.low}, high={self.high}"
            )

    def sample(self, rng: np.random.Generator, shape: tuple[int, ...]) -> np.ndarray:
        return rng.uniform(self.low, self.high, size=shape).astype(DEFAULT_DTYPE)


@dataclass(frozen=True)
class Normal:
    """
    Normal distribution with the given mean and standard deviation.

    Raises
    ------
    ValueError
        If ``std < 0``.
    """

    mean: float = 0.0
    std: float = 1.0

    def __post_init__(self) -> None:
        if self.std < 0:
            raise ValueError(f"Normal requires std >= 0, got {self.std}")

    def sample(self, rng: np.random.Generator, shape: tuple[int, ...]) -> np.ndarray:
        return rng.normal(self.mean, self.std, size=shape).astype(DEFAULT_DTYPE)
