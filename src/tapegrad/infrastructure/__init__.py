"""
Infrastructure layer of tapegrad: NumPy-backed implementations of the
domain contracts.
"""

from .gradients import (
    BackwardStep,
    GradientHandle,
    GradientSlot,
    GradientTape,
    record,
    update,
)
from .tensor import (
    OpContext,
    ShapedArray,
    Tensor,
    Tensor0D,
    Tensor1D,
    Tensor2D,
    Tensor3D,
    Tensor4D,
    tensor_type,
)
from ._function import (
    absolute,
    add,
    cos,
    exp,
    ln,
    mul,
    neg,
    reduce_mean,
    reduce_sum,
    relu,
    scale,
    shift,
    sigmoid,
    sin,
    square,
    sub,
    tanh,
)
from .optimizers import SGD
from .utils import Initializer, Normal, Uniform

__all__ = [
    BackwardStep.__name__,
    GradientHandle.__name__,
    GradientSlot.__name__,
    GradientTape.__name__,
    record.__name__,
    update.__name__,
    OpContext.__name__,
    ShapedArray.__name__,
    Tensor.__name__,
    Tensor0D.__name__,
    Tensor1D.__name__,
    Tensor2D.__name__,
    Tensor3D.__name__,
    Tensor4D.__name__,
    tensor_type.__name__,
    absolute.__name__,
    add.__name__,
    cos.__name__,
    exp.__name__,
    ln.__name__,
    mul.__name__,
    neg.__name__,
    reduce_mean.__name__,
    reduce_sum.__name__,
    relu.__name__,
    scale.__name__,
    shift.__name__,
    sigmoid.__name__,
    sin.__name__,
    square.__name__,
    sub.__name__,
    tanh.__name__,
    SGD.__name__,
    Initializer.__name__,
    Normal.__name__,
    Uniform.__name__,
]
