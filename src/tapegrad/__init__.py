"""
tapegrad: reverse-mode automatic differentiation on fixed-shape tensors.

Operations performed inside ``with GradientTape() as tape:`` are recorded;
``tape.backward(loss)`` replays them in reverse and accumulates one gradient
per recorded value.

    >>> import numpy as np
    >>> from tapegrad import GradientTape, Tensor1D
    >>> x = Tensor1D[2].from_numpy(np.array([3.0, 4.0]))
    >>> with GradientTape() as tape:
    ...     y = x.square()
    >>> tape.backward(y)
    >>> tape.gradient(x)
    array([6., 8.], dtype=float32)
"""

from .domain import (
    GradientContractError,
    MissingGradientError,
    ShapeMismatchError,
    TapeAllocationError,
    TapeStateError,
    UnregisteredSlotError,
)
from .infrastructure import (
    SGD,
    GradientHandle,
    GradientSlot,
    GradientTape,
    Initializer,
    Normal,
    Tensor,
    Tensor0D,
    Tensor1D,
    Tensor2D,
    Tensor3D,
    Tensor4D,
    Uniform,
    record,
    tensor_type,
    update,
)

__version__ = "0.1.0"

__all__ = [
    GradientContractError.__name__,
    MissingGradientError.__name__,
    ShapeMismatchError.__name__,
    TapeAllocationError.__name__,
    TapeStateError.__name__,
    UnregisteredSlotError.__name__,
    SGD.__name__,
    GradientHandle.__name__,
    GradientSlot.__name__,
    GradientTape.__name__,
    Initializer.__name__,
    Normal.__name__,
    Tensor.__name__,
    Tensor0D.__name__,
    Tensor1D.__name__,
    Tensor2D.__name__,
    Tensor3D.__name__,
    Tensor4D.__name__,
    Uniform.__name__,
    record.__name__,
    tensor_type.__name__,
    update.__name__,
]
