"""
Gradient mixin: a tensor's attachment point to the gradient tape.

Every tensor value owns one `GradientHandle`. The mixin exposes it read-only
through `grad` (the `IGradientCarrier` contract), mutably through
`mut_grad()`, and wires the two tape primitives (`record`, `update`) as
methods so user code can write ``x.update(tape)``.

Copies never share a handle: `clone`, `copy.copy` and `copy.deepcopy` all
produce a value whose handle is empty.
"""

from __future__ import annotations

from abc import ABC
from typing import Any

from typing_extensions import Self

from ....gradients._handle import GradientHandle
from ....gradients._recorder import record
from ....gradients._slot import GradientSlot
from ....gradients._taped import update


class TensorMixinGradient(ABC):
    """
    Mixin implementing `IGradientCarrier` and `ITaped`.

    Notes
    -----
    The concrete class must set ``self._grad`` to a fresh `GradientHandle`
    in its initializer and must provide `_data` / `_from_owned`.
    """

    _grad: GradientHandle

    @property
    def grad(self) -> GradientHandle:
        """Return this value's gradient handle."""
        return self._grad

    def mut_grad(self) -> GradientHandle:
        """
        Return this value's gradient handle for mutation.

        Only the recorder (`attach_if_absent`) and the update primitive
        (`take`) are expected to mutate it.
        """
        return self._grad

    @property
    def requires_grad(self) -> bool:
        """True while a gradient slot is attached."""
        return not self._grad.is_empty

    def record(self, tape: Any) -> GradientSlot:
        """
        Register this value on `tape`, replacing a slot from an older tape lifetime.

        See Also
        --------
        tapegrad.infrastructure.gradients.record
        """
        return record(self, tape)

    def update(self, tape: Any) -> None:
        """
        Subtract this value's resolved gradient from its data and detach the
        handle.

        Raises
        ------
        MissingGradientError
            If the handle is empty (never recorded, or already updated).
        """
        update(self, tape)

    def zero_grad(self) -> None:
        """Detach the gradient handle without touching the data."""
        self._grad.take()

    def clone(self) -> Self:
        """
        Return a copy of this value with its own buffer and an empty handle.
        """
        return type(self)._from_owned(self._data.copy())

    def __copy__(self) -> Self:
        return self.clone()

    def __deepcopy__(self, memo: dict) -> Self:
        out = self.clone()
        memo[id(self)] = out
        return out
