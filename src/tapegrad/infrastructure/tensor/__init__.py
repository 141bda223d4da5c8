"""
Tensor types and their supporting storage.

Public API
----------
- ``Tensor`` and the families ``Tensor0D`` .. ``Tensor4D``
- ``ShapedArray`` / ``tensor_type`` for shape-level code
- ``OpContext`` passed to `Function` implementations
"""

from ._shaped_array import ShapedArray, tensor_type
from ._tensor import Tensor, Tensor0D, Tensor1D, Tensor2D, Tensor3D, Tensor4D
from ._tensor_context import OpContext

__all__ = [
    ShapedArray.__name__,
    tensor_type.__name__,
    Tensor.__name__,
    Tensor0D.__name__,
    Tensor1D.__name__,
    Tensor2D.__name__,
    Tensor3D.__name__,
    Tensor4D.__name__,
    OpContext.__name__,
]
