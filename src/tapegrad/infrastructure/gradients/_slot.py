"""
Gradient slot: an opaque index into tape-owned gradient storage.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GradientSlot:
    """
    Reference to one gradient buffer owned by a `GradientTape`.

    Satisfies `IGradientSlot` structurally.

    Attributes
    ----------
    index : int
        Dense index assigned by the tape, in registration order.
    shape : tuple[int, ...]
        Shape the buffer was registered with.
    tape_token : int
        Identity of the tape lifetime that issued the slot. A tape rejects
        slots whose token differs from its own.

    Notes
    -----
    The slot never holds a reference to the buffer itself, so it can be
    copied and compared freely without aliasing tape memory.
    """

    index: int
    shape: tuple[int, ...]
    tape_token: int

    def __repr__(self) -> str:
        return f"GradientSlot(index={self.index}, shape={self.shape})"
