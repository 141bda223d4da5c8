"""
Concrete tensor types.

`Tensor` assembles the NumPy-backed fixed-shape storage (`ShapedArray`) with
the capability mixins, and the dimension families `Tensor0D` .. `Tensor4D`
are its subclasses. A family is specialized by subscription into the type
that fixes the shape:

    >>> import numpy as np
    >>> x = Tensor1D[3].from_numpy(np.array([1.0, -2.0, 3.0]))
    >>> type(x).SHAPE
    (3,)
    >>> x.relu().to_numpy()
    array([1., 0., 3.], dtype=float32)

`Tensor0D` has the fixed shape ``()`` and needs no subscription.
"""

from __future__ import annotations

from typing import Any

from ...domain._tensor import ITensor
from ..gradients._handle import GradientHandle
from ._shaped_array import ShapedArray
from .mixins.activations import TensorMixinActivations
from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.gradient import TensorMixinGradient
from .mixins.init import TensorMixinInit
from .mixins.reduction import TensorMixinReduction


class Tensor(
    ShapedArray,
    TensorMixinGradient,
    TensorMixinActivations,
    TensorMixinArithmetic,
    TensorMixinReduction,
    TensorMixinInit,
    ITensor,
):
    """
    Fixed-shape float32 tensor value carrying an optional gradient handle.

    Parameters
    ----------
    data : array-like, optional
        Initial contents; must have exactly the type's `SHAPE`. Zero-filled
        when omitted.
    copy : bool, optional
        Whether to copy `data`. Defaults to True.

    Notes
    -----
    - `Tensor` itself and the bare families cannot be instantiated; use a
      specialization such as ``Tensor2D[2, 3]``.
    - A new value always starts with an empty gradient handle.
    - Equality is identity. Compare buffers with ``numpy.testing`` or
      ``np.array_equal(a.data, b.data)``.
    """

    def __init__(self, data: Any = None, *, copy: bool = True) -> None:
        super().__init__(data, copy=copy)
        self._grad = GradientHandle()


class Tensor0D(Tensor, ndim=0):
    """Scalar tensor (shape ``()``); the result type of reductions."""


class Tensor1D(Tensor, ndim=1):
    """One-dimensional tensor family; specialize as ``Tensor1D[n]``."""


class Tensor2D(Tensor, ndim=2):
    """Two-dimensional tensor family; specialize as ``Tensor2D[rows, cols]``."""


class Tensor3D(Tensor, ndim=3):
    """Three-dimensional tensor family."""


class Tensor4D(Tensor, ndim=4):
    """Four-dimensional tensor family."""
