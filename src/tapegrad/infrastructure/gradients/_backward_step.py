from typing import Any, Callable, Sequence
from dataclasses import dataclass

import numpy as np

from ._slot import GradientSlot


@dataclass(frozen=True)
class BackwardStep:
    """
    One recorded unit of backward work on a `GradientTape`.

    A `BackwardStep` captures everything the tape needs to replay a single
    differentiable operation in reverse.

    Attributes
    ----------
    reads : Sequence[GradientSlot]
        Slots supplying incoming gradient, typically the operation's output.
    writes : Sequence[GradientSlot]
        Slots that accumulate the outgoing contributions, typically the
        operation's inputs.
    derivative_fn : Callable[..., Sequence[np.ndarray]]
        Called with one read-only buffer per `reads` slot. Must return one
        contribution per `writes` slot, in the same order, each shaped like
        the corresponding write slot.
    name : str
        Human-readable label of the operation (used in logs and reprs).

    Notes
    -----
    The step never holds gradient buffers; it refers to them through slots
    and receives them from the tape during replay.
    """

    reads: Sequence[GradientSlot]
    writes: Sequence[GradientSlot]
    derivative_fn: Callable[..., Sequence[np.ndarray]]
    name: str = "step"

    def __call__(self, *read_grads: np.ndarray) -> Sequence[Any]:
        """
        Evaluate the derivative function on the given incoming gradients.

        Returns
        -------
        Sequence[np.ndarray]
            One contribution per write slot.

        Raises
        ------
        ValueError
            If the number of contributions differs from the number of write
            slots.
        """
        contributions = tuple(self.derivative_fn(*read_grads))
        if len(contributions) != len(self.writes):
            raise ValueError(
                f"{self.name}: derivative produced {len(contributions)} "
                f"contribution(s) for {len(self.writes)} write slot(s)."
            )
        return contributions

    def __repr__(self) -> str:
        reads = [s.index for s in self.reads]
        writes = [s.index for s in self.writes]
        return f"BackwardStep({self.name}, reads={reads}, writes={writes})"
