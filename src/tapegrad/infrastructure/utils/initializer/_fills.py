"""
Built-in named fills.

Provided initializers
---------------------
- ``zeros``:
    Set every element to zero.
- ``ones``:
    Set every element to one.
- ``uniform``:
    Sample from ``U(low, high)`` (defaults ``[0, 1)``).
- ``normal``:
    Sample from ``N(mean, std^2)`` (defaults standard normal).

The random fills take a ``numpy.random.Generator`` as their first extra
argument, so results are reproducible for a seeded generator.
"""

from typing import Any

import numpy as np

from ._base import Initializer
from ._distributions import Normal, Uniform


@Initializer.register_initializer("zeros")
def zeros(tensor: Any) -> Any:
    """
    Initialize a tensor with all elements set to zero.

    Returns
    -------
    Tensor
        The initialized tensor (same object).
    """
    return tensor.fill(0.0)


@Initializer.register_initializer("ones")
def ones(tensor: Any) -> Any:
    """
    Initialize a tensor with all elements set to one.
    """
    return tensor.fill(1.0)


@Initializer.register_initializer("uniform")
def uniform(
    tensor: Any, rng: np.random.Generator, low: float = 0.0, high: float = 1.0
) -> Any:
    """
    Fill a tensor with samples from ``U(low, high)``.

    Parameters
    ----------
    tensor:
        The tensor to initialize in-place.
    rng:
        Random generator used for sampling.
    low, high:
        Bounds of the interval.
    """
    return tensor.randomize(rng, Uniform(low, high))


@Initializer.register_initializer("normal")
def normal(
    tensor: Any, rng: np.random.Generator, mean: float = 0.0, std: float = 1.0
) -> Any:
    return tensor.randomize(rng, Normal(mean, std))
