"""
Gradient handle: a value's optional attachment to its registered slot.

A `GradientHandle` is a tagged optional with exactly two mutating
operations:

- `attach_if_absent(factory)`: populate the handle unless it already holds a
  slot, and return the slot it holds afterwards;
- `take()`: return the held slot and clear the handle in the same step.

`take` is the only way to consume a slot, which rules out applying the same
gradient twice.
"""

from __future__ import annotations

from typing import Callable, Optional

from ._slot import GradientSlot


class GradientHandle:
    """
    Optional single-owner reference from a tensor value to a `GradientSlot`.

    Notes
    -----
    - A handle belongs to exactly one value. Copying a value never copies
      its handle; the copy starts with a fresh, empty handle.
    - `slot` is a read-only peek used by differentiable operations to wire
      backward steps. It does not consume the slot.
    """

    __slots__ = ("_slot",)

    def __init__(self) -> None:
        self._slot: Optional[GradientSlot] = None

    @property
    def is_empty(self) -> bool:
        """Return True if no slot is attached."""
        return self._slot is None

    @property
    def slot(self) -> Optional[GradientSlot]:
        """Return the attached slot without detaching it (None if empty)."""
        return self._slot

    def attach_if_absent(self, factory: Callable[[], GradientSlot]) -> GradientSlot:
        """
        Attach a slot produced by `factory` unless one is already attached.

        Parameters
        ----------
        factory : Callable[[], GradientSlot]
            Called only when the handle is empty.

        Returns
        -------
        GradientSlot
            The attached slot (newly created or pre-existing).
        """
        if self._slot is None:
            self._slot = factory()
        return self._slot

    def take(self) -> Optional[GradientSlot]:
        """
        Detach and return the attached slot.

        Returns
        -------
        Optional[GradientSlot]
            The slot that was attached, or None if the handle was empty.
        """
        slot, self._slot = self._slot, None
        return slot

    def __bool__(self) -> bool:
        return self._slot is not None

    def __repr__(self) -> str:
        return f"GradientHandle({self._slot!r})"
