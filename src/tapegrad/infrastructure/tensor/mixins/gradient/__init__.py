"""
Gradient mixin for Tensor types.

Public API
----------
- ``TensorMixinGradient``
"""

from ._base import TensorMixinGradient

__all__ = [
    TensorMixinGradient.__name__,
]
