"""
Abstract interfaces for tensor initialization.

This module defines `IDistribution`, the sampling interface used by
`randomize` and by the random named fills.

Initialization has no differentiation semantics. It only writes values into
a tensor's buffer, so it never touches a gradient handle or a tape.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IDistribution(Protocol):
    """
    Sampling interface for random initialization.
    """

    def sample(self, rng: Any, shape: tuple[int, ...]) -> Any:
        """
        Draw an array of `shape` using the random generator `rng`.

        Parameters
        ----------
        rng : Any
            Backend random generator (e.g. ``numpy.random.Generator``).
        shape : tuple[int, ...]
            Requested output shape.

        Returns
        -------
        Any
            Backend-native array of `shape`.
        """
        ...

