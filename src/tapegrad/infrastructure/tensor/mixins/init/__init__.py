"""
Initialization mixin for Tensor types.

Public API
----------
- ``TensorMixinInit``
"""

from ._base import TensorMixinInit

__all__ = [
    TensorMixinInit.__name__,
]
