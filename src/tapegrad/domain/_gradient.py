"""
Gradient-carrier and tape interface definitions.

This module defines the contracts that connect tensor values to the gradient
tape:

- `IGradientSlot`: an opaque reference into tape-owned gradient storage.
- `IGradientHandle`: the optional attachment a value uses to remember its
  currently registered slot.
- `IGradientCarrier`: the capability "this value carries a gradient handle".
- `IGradientTape`: the arena that issues slots, records backward steps and
  replays them.
- `ITaped`: the capability "this value can be updated from a resolved tape".

Design notes
------------
- A slot is an index, never a reference into tape memory. Values reach their
  gradient data only through the tape's accessors.
- The handle exposes exactly two mutating operations: attach-if-absent and
  take. `take` is the only way to consume a slot and it clears the handle in
  the same step.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class IGradientSlot(Protocol):
    """
    Opaque reference into tape-owned gradient storage.

    Notes
    -----
    A slot is valid only for the tape lifetime that issued it.
    """

    @property
    def index(self) -> int:
        """Dense index assigned by the issuing tape."""
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the buffer the slot refers to."""
        ...


@runtime_checkable
class IGradientHandle(Protocol):
    """
    Optional single-owner attachment of a slot to a tensor value.
    """

    @property
    def is_empty(self) -> bool:
        """Return True if no slot is attached."""
        ...

    def attach_if_absent(self, factory: Callable[[], IGradientSlot]) -> IGradientSlot:
        """
        Attach a slot produced by `factory` unless one is already attached.

        Parameters
        ----------
        factory : Callable[[], IGradientSlot]
            Called at most once, only when the handle is empty.

        Returns
        -------
        IGradientSlot
            The slot attached after the call.
        """
        ...

    def take(self) -> Optional[IGradientSlot]:
        """
        Detach and return the attached slot, leaving the handle empty.

        Returns
        -------
        Optional[IGradientSlot]
            The previously attached slot, or None if the handle was empty.
        """
        ...


@runtime_checkable
class IGradientCarrier(Protocol):
    """
    Capability: the value owns exactly one gradient handle.
    """

    @property
    def grad(self) -> IGradientHandle:
        """Return the value's gradient handle (read side)."""
        ...

    def mut_grad(self) -> IGradientHandle:
        """Return the value's gradient handle for mutation."""
        ...


@runtime_checkable
class IGradientTape(Protocol):
    """
    Gradient tape interface.

    The tape owns every gradient buffer and the ordered list of backward
    steps of one forward/backward cycle.
    """

    def register_gradient(self, shape: tuple[int, ...]) -> IGradientSlot:
        """
        Allocate a zero-initialized buffer of `shape` and return its slot.
        """
        ...

    def resolve(self, slot: IGradientSlot) -> Any:
        """
        Return the accumulated gradient buffer for `slot`.
        """
        ...

    def push_backward_step(
        self,
        reads: Sequence[IGradientSlot],
        writes: Sequence[IGradientSlot],
        derivative_fn: Callable[..., Sequence[Any]],
    ) -> None:
        """
        Append a backward step to the replay sequence.

        Parameters
        ----------
        reads : Sequence[IGradientSlot]
            Slots supplying incoming (downstream) gradient.
        writes : Sequence[IGradientSlot]
            Slots that accumulate the outgoing (upstream) contributions.
        derivative_fn : Callable[..., Sequence[Any]]
            Called with one buffer per `reads` slot; returns one contribution
            per `writes` slot.
        """
        ...

    def execute_backward(self, seed_slot: IGradientSlot, seed_value: Any) -> None:
        """
        Seed `seed_slot` with `seed_value` and replay all steps in reverse.
        """
        ...


@runtime_checkable
class ITaped(Protocol):
    """
    Capability: apply the resolved gradient of a tape to the value in place.
    """

    def update(self, tape: IGradientTape) -> None:
        """
        Subtract the value's resolved gradient from its data and detach the
        handle.
        """
        ...
