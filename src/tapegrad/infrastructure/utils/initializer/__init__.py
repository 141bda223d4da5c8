"""
Initialization public API.

This module exposes the `Initializer` registry, the built-in named fills
(registered via import side effects) and the sampling distributions used by
`Tensor.randomize`.

Exports
-------
- Initializer:
    Registry-backed dispatcher applying a named fill to a tensor.
- Uniform, Normal:
    `IDistribution` implementations.
"""

from ._fills import *
from ._base import Initializer
from ._distributions import Normal, Uniform

__all__ = [
    Initializer.__name__,
    Normal.__name__,
    Uniform.__name__,
]
