"""
Activations mixin for Tensor types.

Public API
----------
- ``TensorMixinActivations``
"""

from ._base import TensorMixinActivations

__all__ = [
    TensorMixinActivations.__name__,
]
