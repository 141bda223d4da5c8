"""
Stochastic gradient descent on top of the tape's update primitive.

The tape leaves the learning rate to the caller: `update` subtracts the
resolved gradient as-is. `SGD` supplies that policy by scaling the gradient
buffers of its parameters on the tape, then consuming each parameter's
handle through `update`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)


class SGD:
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each parameter ``p`` with resolved gradient ``g``:

    - If ``weight_decay > 0`` (classical L2 regularization, coupled):
        ``p <- p * (1 - lr * weight_decay)``
    - Parameter update:
        ``p <- p - lr * g``

    which together equal ``p - lr * (g + weight_decay * p)``.

    Parameters
    ----------
    params : Iterable[Tensor]
        Parameters to be optimized. The iterable is consumed and stored;
        repeated entries of the same object are kept once.
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    weight_decay : float, optional
        L2 coefficient. Must be non-negative. Defaults to 0.0.

    Raises
    ------
    ValueError
        If ``lr <= 0`` or ``weight_decay < 0``.

    Notes
    -----
    - Parameters with an empty gradient handle are skipped.
    - Momentum and Nesterov variants are not provided.
    """

    params: Sequence[Any]
    lr: float
    weight_decay: float

    def __init__(
        self,
        params: Iterable[Any],
        *,
        lr: float = 1e-3,
        weight_decay: float = 0.0,
    ) -> None:
        # dedupe by identity
        seen: set[int] = set()
        self.params = []
        for p in params:
            if id(p) not in seen:
                seen.add(id(p))
                self.params.append(p)
        self.lr = float(lr)
        self.weight_decay = float(weight_decay)

        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")

    def zero_grad(self) -> None:
        """
        Detach the gradient handles of all managed parameters.

        Call this instead of `step` to discard a backward pass, so the
        parameters can be recorded on a fresh tape.
        """
        for p in self.params:
            p.mut_grad().take()

    def step(self, tape: Any) -> None:
        """
        Apply one SGD update from the gradients resolved on `tape`.

        Parameters
        ----------
        tape : GradientTape
            A tape whose backward pass has run.

        Raises
        ------
        UnregisteredSlotError
            If a parameter holds a slot issued by a different tape.
        """
        active = [p for p in self.params if not p.grad.is_empty]
        if not active:
            logger.debug("SGD step skipped: no parameter carries a gradient")
            return

        tape.scale_gradients(self.lr, slots=[p.grad.slot for p in active])
        decay = 1.0 - self.lr * self.weight_decay
        for p in active:
            if self.weight_decay != 0.0:
                p.mut_data()[...] *= decay
            p.update(tape)
        logger.debug("SGD step updated %d parameter(s)", len(active))

    def __repr__(self) -> str:
        return (
            f"SGD(num_params={len(self.params)}, lr={self.lr}, "
            f"weight_decay={self.weight_decay})"
        )
