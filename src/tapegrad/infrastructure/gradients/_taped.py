"""
Parameter update primitive.

`update` applies the gradient resolved on a tape to a value's data in place
and detaches the value's handle, so each gradient is consumed exactly once.
"""

from __future__ import annotations

from typing import Any

from ...domain._errors import MissingGradientError


def update(value: Any, tape: Any) -> None:
    """
    Subtract the resolved gradient of `value` from its data, in place.

    Parameters
    ----------
    value : IShapedArray & IGradientCarrier
        A leaf value recorded on `tape`.
    tape : GradientTape
        The tape whose backward pass produced the gradient.

    Raises
    ------
    MissingGradientError
        If `value` has no attached gradient handle (never recorded, or
        already updated).
    UnregisteredSlotError
        If the attached slot was not issued by `tape`.

    Notes
    -----
    This is an unconditional ``data -= gradient``. The gradient is expected to
    be pre-scaled by the learning rate (see `GradientTape.scale_gradients`).
    The handle is detached before the tape is consulted, so a value with a
    stale slot ends up empty either way.
    """
    slot = value.mut_grad().take()
    if slot is None:
        raise MissingGradientError(type(value).__name__)
    value.mut_data()[...] -= tape.resolve(slot)
