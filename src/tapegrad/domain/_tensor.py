"""
Tensor interface definitions.

This module composes the independent capability contracts of tapegrad into
the full tensor interface. A concrete tensor type is expected to satisfy all
of them at once:

- `IShapedArray`: fixed per-type shape and buffer access,
- `IGradientCarrier`: an owned gradient handle,
- `IActivations`: differentiable elementwise operations.

Notes
-----
The capabilities are combined by protocol conjunction rather than by a class
hierarchy, so any type that structurally provides every member satisfies
`ITensor`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._gradient import IGradientCarrier
from ._shape import IShapedArray


@runtime_checkable
class IActivations(Protocol):
    """
    Elementwise activation interface.

    Each method returns a new value of the same tensor type. When a gradient
    tape is active, the input and the result are recorded on it and a
    backward step applying the analytic derivative is pushed.
    """

    def relu(self) -> "IActivations":
        """Elementwise ``max(x, 0)``; derivative ``1[x > 0]``."""
        ...

    def sin(self) -> "IActivations":
        """Elementwise sine; derivative ``cos(x)``."""
        ...

    def cos(self) -> "IActivations":
        """Elementwise cosine; derivative ``-sin(x)``."""
        ...

    def ln(self) -> "IActivations":
        """Elementwise natural logarithm; derivative ``1 / x``."""
        ...

    def exp(self) -> "IActivations":
        """Elementwise exponential; derivative ``exp(x)``."""
        ...

    def sigmoid(self) -> "IActivations":
        """Elementwise logistic sigmoid; derivative ``s * (1 - s)``."""
        ...

    def tanh(self) -> "IActivations":
        """Elementwise hyperbolic tangent; derivative ``1 - tanh(x)^2``."""
        ...

    def square(self) -> "IActivations":
        """Elementwise square; derivative ``2 * x``."""
        ...

    def abs(self) -> "IActivations":
        """Elementwise absolute value; derivative ``sign(x)``."""
        ...


@runtime_checkable
class ITensor(IShapedArray, IGradientCarrier, IActivations, Protocol):
    """
    Full tensor interface: shape contract, gradient carrier and activations.
    """


@runtime_checkable
class IBatch(Protocol):
    """
    Batching sugar: map an element tensor type to its batched tensor type.
    """

    @classmethod
    def batched(cls, batch_size: int) -> type:
        """
        Return the tensor type of shape ``(batch_size,) + cls.SHAPE``.
        """
        ...
