"""
Initialization mixin: factories and in-place fills for tensor types.

Factories are classmethods of a specialized tensor type
(``Tensor2D[2, 3].ones()``); in-place fills are instance methods returning
the same object so they can be chained. None of them touches the gradient
handle.
"""

from __future__ import annotations

from abc import ABC
from typing import Any

import numpy as np
from typing_extensions import Self

from ...._constants import DEFAULT_DTYPE


class TensorMixinInit(ABC):
    """
    Mixin implementing construction helpers and in-place fills.
    """

    @classmethod
    def zeros(cls) -> Self:
        """Return a zero-filled value of this type."""
        return cls()

    @classmethod
    def ones(cls) -> Self:
        """Return a value of this type with every element set to one."""
        return cls._from_owned(np.ones(cls.SHAPE, dtype=DEFAULT_DTYPE))

    @classmethod
    def full(cls, value: float) -> Self:
        """Return a value of this type with every element set to `value`."""
        return cls._from_owned(np.full(cls.SHAPE, value, dtype=DEFAULT_DTYPE))

    @classmethod
    def rand(cls, rng: np.random.Generator) -> Self:
        """
        Return a value sampled uniformly from ``[0, 1)``.

        Parameters
        ----------
        rng : numpy.random.Generator
            Random generator used for sampling.
        """
        return cls._from_owned(rng.random(cls.SHAPE, dtype=DEFAULT_DTYPE))

    @classmethod
    def randn(cls, rng: np.random.Generator) -> Self:
        """
        Return a value sampled from the standard normal distribution.
        """
        return cls._from_owned(
            rng.standard_normal(cls.SHAPE, dtype=DEFAULT_DTYPE)
        )

    def fill(self, value: float) -> Self:
        """Set every element to `value` in place and return self."""
        self.mut_data()[...] = value
        return self

    def randomize(self, rng: np.random.Generator, dist: Any) -> Self:
        """
        Overwrite the buffer in place with samples from `dist`.

        Parameters
        ----------
        rng : numpy.random.Generator
            Random generator used for sampling.
        dist : IDistribution
            Distribution to sample from (e.g. ``Uniform(-1, 1)``).

        Returns
        -------
        Self
            This value, for chaining.
        """
        self.mut_data()[...] = dist.sample(rng, type(self).SHAPE)
        return self

    def initialize(self, name: str, *args: Any, **kwargs: Any) -> Self:
        """
        Apply the named fill registered in `Initializer`.

        Raises
        ------
        ValueError
            If no fill is registered under `name`.
        """
        from ....utils.initializer import Initializer

        Initializer(name)(self, *args, **kwargs)
        return self
