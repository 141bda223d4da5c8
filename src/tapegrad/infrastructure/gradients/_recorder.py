"""
Recorder: lazily attach a gradient slot to a value.

`record` is called by every differentiable operation on its inputs and on
its result. Allocation is deferred until a value actually takes part in a
recorded computation, and a value is registered at most once per tape
lifetime.
"""

from __future__ import annotations

import logging
from typing import Any

from ._slot import GradientSlot

logger = logging.getLogger(__name__)


def record(value: Any, tape: Any) -> GradientSlot:
    """
    Ensure `value` carries a slot on `tape` and return that slot.

    Parameters
    ----------
    value : IShapedArray & IGradientCarrier
        The value to record. Its type's `SHAPE` sizes the gradient buffer.
    tape : GradientTape
        The tape issuing the slot.

    Returns
    -------
    GradientSlot
        The slot attached to `value` after the call.

    Notes
    -----
    - Calling `record` again within the same tape lifetime allocates nothing.
    - A slot left over from another tape (or from this tape before a reset)
      is dropped and replaced by a fresh slot on `tape`. This is what lets
      inputs and targets, which are never passed to `update`, be reused
      across training cycles.
    """
    handle = value.mut_grad()
    slot = handle.attach_if_absent(
        lambda: tape.register_gradient(type(value).SHAPE)
    )
    if tape.owns(slot):
        return slot

    logger.debug(
        "dropping %r of %s from a previous tape lifetime",
        slot,
        type(value).__name__,
    )
    handle.take()
    return handle.attach_if_absent(
        lambda: tape.register_gradient(type(value).SHAPE)
    )
