"""
Domain layer of tapegrad: structural contracts and error types.

Nothing in this package depends on NumPy or on the infrastructure layer.
"""

from ._errors import (
    GradientContractError,
    MissingGradientError,
    ShapeMismatchError,
    TapeAllocationError,
    TapeStateError,
    UnregisteredSlotError,
)
from ._function import Function
from ._gradient import (
    IGradientCarrier,
    IGradientHandle,
    IGradientSlot,
    IGradientTape,
    ITaped,
)
from ._initialization import IDistribution
from ._optimizers import IOptimizer
from ._shape import IShapedArray
from ._tensor import IActivations, IBatch, ITensor

__all__ = [
    GradientContractError.__name__,
    MissingGradientError.__name__,
    ShapeMismatchError.__name__,
    TapeAllocationError.__name__,
    TapeStateError.__name__,
    UnregisteredSlotError.__name__,
    Function.__name__,
    IGradientCarrier.__name__,
    IGradientHandle.__name__,
    IGradientSlot.__name__,
    IGradientTape.__name__,
    ITaped.__name__,
    IDistribution.__name__,
    IOptimizer.__name__,
    IShapedArray.__name__,
    IActivations.__name__,
    IBatch.__name__,
    ITensor.__name__,
]
