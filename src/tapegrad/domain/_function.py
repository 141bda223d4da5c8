"""
Differentiable function interface definitions.

This module defines the abstract base class for differentiable elementwise
operations. A `Function` subclass implements both the forward computation
and the local derivative used during backward replay.

Unlike graph-based autograd systems, a `Function` here never touches the
tape. The functional wrappers in the infrastructure layer record the inputs
and the result on the active tape and push a backward step that delegates to
`Function.backward`.
"""

from abc import ABC, abstractmethod
from typing import Any


class Function(ABC):
    """
    Abstract base class for differentiable operations.

    Subclasses implement `forward` and `backward` as static methods. Any
    intermediate values required for the backward computation should be
    stored on the provided `ctx` object during the forward pass.

    Notes
    -----
    - Methods are static so a `Function` class carries no per-call state.
    - `ctx` is a per-invocation context, so the same class can be used in
      many recorded steps.
    """

    @staticmethod
    @abstractmethod
    def forward(ctx, *inputs: Any) -> Any:
        """
        Compute the forward result from raw input buffers.

        Parameters
        ----------
        ctx : OpContext
            Context used to save buffers for the backward pass.
        *inputs : Any
            Raw input buffers.

        Returns
        -------
        Any
            The raw output buffer.
        """
        ...

    @staticmethod
    @abstractmethod
    def backward(ctx, grad_out: Any) -> Any:
        """
        Compute the contribution(s) to the inputs' gradients.

        Parameters
        ----------
        ctx : OpContext
            Context populated during the forward pass.
        grad_out : Any
            Accumulated gradient of the output.

        Returns
        -------
        Any
            One contribution per input, in `forward` order. Single-input
            functions return a single buffer.
        """
        ...
