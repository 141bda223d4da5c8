"""
Gradient tape: arena of gradient buffers plus an ordered backward-step log.

This module provides `GradientTape`, the record-keeping core of tapegrad.
During a forward pass the tape

- allocates one zero-initialized gradient buffer per value the first time
  the value is recorded (`register_gradient`), and
- appends one `BackwardStep` per differentiable operation
  (`push_backward_step`).

After the forward pass, `execute_backward` seeds one slot and replays the
steps strictly last-in-first-out, summing every contribution into its target
slot. `resolve` then returns the accumulated gradient of any slot.

Design notes
------------
- The tape is an arena: buffers live in a list owned by the tape and are
  addressed by `GradientSlot.index`. Values only ever hold slots, so no value
  can alias or mutate tape storage directly.
- Push order is taken as a valid reverse-topological order. This holds for
  straight-line traces (no data-dependent branching while recording).
- A tape lifetime is identified by a token stored in every slot it issues.
  `reset()` starts a new lifetime; slots from the old one are rejected.
- Using a tape as a context manager makes it the *active* tape, which is the
  tape differentiable operations record onto.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Iterable, Optional, Sequence

import numpy as np

from ...domain._errors import (
    MissingGradientError,
    ShapeMismatchError,
    TapeAllocationError,
    TapeStateError,
    UnregisteredSlotError,
)
from .._constants import DEFAULT_DTYPE
from ._backward_step import BackwardStep
from ._recorder import record
from ._slot import GradientSlot

logger = logging.getLogger(__name__)

_TAPE_TOKENS = itertools.count(1)

# Innermost tape last.
_ACTIVE_TAPES: list["GradientTape"] = []


class GradientTape:
    """
    Owner of all gradient buffers and backward steps of one forward/backward
    cycle.

    Satisfies `IGradientTape` structurally.

    Examples
    --------
    >>> x = Tensor1D[2].from_numpy([3.0, 4.0])
    >>> with GradientTape() as tape:
    ...     y = x.square()
    >>> tape.backward(y)
    >>> tape.gradient(x)
    array([6., 8.], dtype=float32)

    Notes
    -----
    - A tape is meant to be discarded, or `reset()`, after its gradients have
      been consumed. Reusing it for an unrelated computation without a reset
      is outside the contract.
    - The tape is not thread-safe.
    """

    def __init__(self) -> None:
        self._token: int = next(_TAPE_TOKENS)
        self._buffers: list[np.ndarray] = []
        self._steps: list[BackwardStep] = []
        self._replayed: bool = False

    # ------------------------------------------------------------------
    # Active-tape management
    # ------------------------------------------------------------------
    def __enter__(self) -> "GradientTape":
        _ACTIVE_TAPES.append(self)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        # Remove the innermost occurrence so nested re-entry of one tape
        # unwinds correctly.
        for i in range(len(_ACTIVE_TAPES) - 1, -1, -1):
            if _ACTIVE_TAPES[i] is self:
                del _ACTIVE_TAPES[i]
                break

    @staticmethod
    def active() -> Optional["GradientTape"]:
        """
        Return the innermost tape entered with ``with``, or None.
        """
        return _ACTIVE_TAPES[-1] if _ACTIVE_TAPES else None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def num_slots(self) -> int:
        """Number of slots registered in the current lifetime."""
        return len(self._buffers)

    @property
    def num_steps(self) -> int:
        """Number of backward steps recorded in the current lifetime."""
        return len(self._steps)

    @property
    def replayed(self) -> bool:
        """True once `execute_backward` has run in the current lifetime."""
        return self._replayed

    def __len__(self) -> int:
        return len(self._buffers)

    def __repr__(self) -> str:
        return (
            f"GradientTape(slots={len(self._buffers)}, steps={len(self._steps)}, "
            f"replayed={self._replayed})"
        )

    # ------------------------------------------------------------------
    # Slot allocation and access
    # ------------------------------------------------------------------
    def register_gradient(self, shape: Sequence[int]) -> GradientSlot:
        """
        Allocate a zero-initialized gradient buffer and return its slot.

        Parameters
        ----------
        shape : Sequence[int]
            Shape of the buffer (the recorded value's type shape).

        Returns
        -------
        GradientSlot
            A fresh slot whose index is one past the previous one.

        Raises
        ------
        TapeAllocationError
            If the buffer cannot be allocated.
        """
        shape = tuple(int(d) for d in shape)
        try:
            buf = np.zeros(shape, dtype=DEFAULT_DTYPE)
        except MemoryError as e:
            raise TapeAllocationError(
                f"cannot allocate gradient buffer of shape {shape} "
                f"(slot {len(self._buffers)})"
            ) from e

        slot = GradientSlot(
            index=len(self._buffers), shape=shape, tape_token=self._token
        )
        self._buffers.append(buf)
        logger.debug("registered %r on tape %d", slot, self._token)
        return slot

    def owns(self, slot: GradientSlot) -> bool:
        """
        Return True if `slot` was issued by this tape's current lifetime.
        """
        return slot.tape_token == self._token and 0 <= slot.index < len(
            self._buffers
        )

    def _check_slot(self, slot: GradientSlot) -> None:
        """
        Raise `UnregisteredSlotError` unless `slot` belongs to this tape.
        """
        if slot.tape_token != self._token:
            raise UnregisteredSlotError(
                slot.index, "issued by another tape or before a reset"
            )
        if not 0 <= slot.index < len(self._buffers):
            raise UnregisteredSlotError(slot.index, "index out of range")

    def _read_only(self, slot: GradientSlot) -> np.ndarray:
        view = self._buffers[slot.index].view()
        view.flags.writeable = False
        return view

    def resolve(self, slot: GradientSlot) -> np.ndarray:
        """
        Return the accumulated gradient buffer of `slot`.

        Parameters
        ----------
        slot : GradientSlot
            A slot issued by this tape.

        Returns
        -------
        np.ndarray
            Read-only view of the buffer. Before backward replay this is the
            zero-initialized buffer.

        Raises
        ------
        UnregisteredSlotError
            If the slot was not issued by this tape's current lifetime.
        """
        self._check_slot(slot)
        return self._read_only(slot)

    def __getitem__(self, slot: GradientSlot) -> np.ndarray:
        return self.resolve(slot)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def watch(self, *values: Any) -> None:
        """
        Record leaf values on this tape ahead of any operation.

        Parameters
        ----------
        *values : IGradientCarrier
            Values to record. Already-recorded values are left untouched.
        """
        for v in values:
            record(v, self)

    def push_backward_step(
        self,
        reads: Sequence[GradientSlot],
        writes: Sequence[GradientSlot],
        derivative_fn: Callable[..., Sequence[np.ndarray]],
        *,
        name: str = "step",
    ) -> BackwardStep:
        """
        Append a backward step to the replay sequence.

        Parameters
        ----------
        reads : Sequence[GradientSlot]
            Slots supplying incoming gradient.
        writes : Sequence[GradientSlot]
            Slots accumulating the outgoing contributions.
        derivative_fn : Callable[..., Sequence[np.ndarray]]
            Maps the read buffers to one contribution per write slot.
        name : str, optional
            Label used in logs and reprs.

        Returns
        -------
        BackwardStep
            The recorded step.

        Raises
        ------
        UnregisteredSlotError
            If any slot does not belong to this tape.
        TapeStateError
            If the tape has already been replayed.
        """
        if self._replayed:
            raise TapeStateError(
                "cannot record new backward steps after backward replay; "
                "reset() the tape first."
            )
        for slot in itertools.chain(reads, writes):
            self._check_slot(slot)

        step = BackwardStep(
            reads=tuple(reads),
            writes=tuple(writes),
            derivative_fn=derivative_fn,
            name=name,
        )
        self._steps.append(step)
        logger.debug("pushed %r on tape %d", step, self._token)
        return step

    # ------------------------------------------------------------------
    # Backward replay
    # ------------------------------------------------------------------
    def execute_backward(self, seed_slot: GradientSlot, seed_value: Any) -> None:
        """
        Seed one slot and replay every recorded step in reverse push order.

        Parameters
        ----------
        seed_slot : GradientSlot
            Slot of the value the backward pass starts from.
        seed_value : array-like
            Initial gradient for `seed_slot`, shaped like the slot (typically
            all ones).

        Raises
        ------
        UnregisteredSlotError
            If `seed_slot` (or a slot a contribution targets) does not belong
            to this tape.
        ShapeMismatchError
            If the seed or a contribution does not match its slot's shape.
        TapeStateError
            If the tape has already been replayed in this lifetime.

        Notes
        -----
        Contributions to the same slot are summed, never overwritten. Every
        derivative function receives read-only views of the read buffers.
        """
        if self._replayed:
            raise TapeStateError("backward replay already executed on this tape.")
        self._check_slot(seed_slot)

        seed = np.asarray(seed_value, dtype=DEFAULT_DTYPE)
        if seed.shape != seed_slot.shape:
            raise ShapeMismatchError(seed_slot.shape, seed.shape, what="seed")
        self._buffers[seed_slot.index][...] = seed

        logger.debug(
            "replaying %d step(s) on tape %d from %r",
            len(self._steps),
            self._token,
            seed_slot,
        )
        self._replayed = True
        for step in reversed(self._steps):
            contributions = step(*(self._read_only(s) for s in step.reads))
            for slot, contribution in zip(step.writes, contributions):
                c = np.asarray(contribution, dtype=DEFAULT_DTYPE)
                if c.shape != slot.shape:
                    raise ShapeMismatchError(
                        slot.shape, c.shape, what=f"{step.name} contribution"
                    )
                self._buffers[slot.index] += c
        logger.debug("replay finished on tape %d", self._token)

    def backward(self, value: Any) -> None:
        """
        Run the backward pass from `value`, seeding its slot with ones.

        Parameters
        ----------
        value : IGradientCarrier
            A value recorded on this tape (usually the loss).

        Raises
        ------
        MissingGradientError
            If `value` has never been recorded.
        """
        slot = value.grad.slot
        if slot is None:
            raise MissingGradientError(type(value).__name__)
        self.execute_backward(slot, np.ones(slot.shape, dtype=DEFAULT_DTYPE))

    def gradient(self, value: Any) -> np.ndarray:
        """
        Resolve the gradient of `value` without consuming its handle.

        Raises
        ------
        MissingGradientError
            If `value` has no attached slot.
        """
        slot = value.grad.slot
        if slot is None:
            raise MissingGradientError(type(value).__name__)
        return self.resolve(slot)

    # ------------------------------------------------------------------
    # Post-replay utilities
    # ------------------------------------------------------------------
    def scale_gradients(
        self, factor: float, slots: Optional[Iterable[GradientSlot]] = None
    ) -> None:
        """
        Multiply gradient buffers in place by `factor`.

        This is the explicit seam where a learning rate is applied before the
        parameter-update primitive subtracts the gradient.

        Parameters
        ----------
        factor : float
            Scaling factor.
        slots : Optional[Iterable[GradientSlot]], optional
            Slots to scale. Defaults to every slot on the tape.
        """
        f = DEFAULT_DTYPE(factor)
        if slots is None:
            for buf in self._buffers:
                buf *= f
            return
        for slot in slots:
            self._check_slot(slot)
            self._buffers[slot.index] *= f

    def reset(self) -> None:
        """
        Drop every buffer and step and start a new tape lifetime.

        Slots issued before the reset are rejected afterwards.
        """
        logger.debug(
            "reset tape %d (%d slot(s), %d step(s))",
            self._token,
            len(self._buffers),
            len(self._steps),
        )
        self._token = next(_TAPE_TOKENS)
        self._buffers = []
        self._steps = []
        self._replayed = False
