from typing import Any
from dataclasses import dataclass, field

import numpy as np


@dataclass
class OpContext:
    """
    Per-invocation context of a differentiable operation.

    An `OpContext` carries the values a `Function` needs to compute its local
    derivative when the tape replays the operation's backward step.

    Attributes
    ----------
    saved_arrays : list[np.ndarray]
        Buffers explicitly saved during the forward pass (inputs, outputs,
        masks, ...). They are private copies, so later in-place changes to a
        tensor do not leak into its recorded derivative.
    saved_meta : dict[str, Any]
        Non-array metadata required for backward (e.g. shapes, constants).

    Notes
    -----
    The context never references gradient buffers or slots. Those belong to
    the tape and reach the derivative through `BackwardStep`.
    """

    saved_arrays: list[np.ndarray] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)

    def save_for_backward(self, *arrays: np.ndarray) -> None:
        """
        Save buffers for use during the backward computation.

        Parameters
        ----------
        *arrays : np.ndarray
            Any number of buffers to be stored in `saved_arrays`.
        """
        self.saved_arrays.extend(arrays)
