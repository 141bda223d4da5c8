"""
Domain-level optimizer contracts for tapegrad.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for optimizer implementations layered above the tape's
parameter-update primitive.

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- The update primitive itself is a plain subtraction of the resolved
  gradient. Learning-rate scaling and any other policy (weight decay, ...)
  belong to the optimizer, which applies them before handing the values to
  the primitive.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ._gradient import IGradientTape


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    Required methods
    ----------------
    - `step(tape)` applies one update to the managed parameters from the
      gradients resolved on `tape`.
    - `zero_grad()` detaches the gradient handles of the managed parameters
      without updating them.
    """

    def step(self, tape: IGradientTape) -> None:
        """
        Apply one optimization step from a tape whose backward pass ran.

        Implementations should skip parameters that were never recorded on
        the tape (empty handle).
        """
        ...

    def zero_grad(self) -> None:
        """
        Detach the gradient handles of all managed parameters.
        """
        ...

    @property
    def params(self) -> Iterable[object]:
        """
        Return the parameters managed by this optimizer.
        """
        ...
