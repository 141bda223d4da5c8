"""
Gradient bookkeeping: slots, handles, the tape, recording and updates.
"""

from ._backward_step import BackwardStep
from ._handle import GradientHandle
from ._recorder import record
from ._slot import GradientSlot
from ._tape import GradientTape
from ._taped import update

__all__ = [
    BackwardStep.__name__,
    GradientHandle.__name__,
    GradientSlot.__name__,
    GradientTape.__name__,
    record.__name__,
    update.__name__,
]
