"""
Arithmetic mixin defining elementwise Tensor operators.

Binary operators accept either another value of exactly the same tensor type
or a real scalar (Python or NumPy). Scalars are treated as constants: they
are folded into the recorded operation (``ScaleFn`` / ``ShiftFn``) instead
of being lifted into tensors, so they never receive a gradient slot.
"""

import numbers
from abc import ABC
from typing import Union

import numpy as np

Number = Union[int, float, np.number]


def _is_scalar(x: object) -> bool:
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (numbers.Real, np.number)) and not isinstance(
        x, np.complexfloating
    )


class TensorMixinArithmetic(ABC):
    """
    Mixin implementing ``+``, ``-``, ``*``, unary ``-`` and `scale`.

    Notes
    -----
    Operands of different tensor types raise `TypeError`; shapes are a
    property of the type, so there is no broadcasting.
    """

    # NumPy scalars on the left defer to the reflected operators below
    __array_ufunc__ = None

    def __add__(self, other):
        from ...._function import add, shift

        if _is_scalar(other):
            return shift(self, other)
        return add(self, other)

    def __radd__(self, other: Number):
        from ...._function import shift

        if _is_scalar(other):
            return shift(self, other)
        return NotImplemented

    def __sub__(self, other):
        from ...._function import shift, sub

        if _is_scalar(other):
            return shift(self, -other)
        return sub(self, other)

    def __rsub__(self, other: Number):
        from ...._function import neg, shift

        # c - x == shift(-x, c)
        if _is_scalar(other):
            return shift(neg(self), other)
        return NotImplemented

    def __mul__(self, other):
        from ...._function import mul, scale

        if _is_scalar(other):
            return scale(self, other)
        return mul(self, other)

    def __rmul__(self, other: Number):
        from ...._function import scale

        if _is_scalar(other):
            return scale(self, other)
        return NotImplemented

    def __neg__(self):
        from ...._function import neg

        return neg(self)

    def scale(self, factor: Number):
        """
        Multiply every element by the constant `factor`.

        Backward rule:
            ``d(c * x) / dx = c``
        """
        from ...._function import scale

        return scale(self, factor)
