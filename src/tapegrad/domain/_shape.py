"""
Shaped-array interface definitions.

This module defines the domain-level contract that every tensor type must
satisfy so the gradient tape can treat arbitrary shapes uniformly. The shape
of a tensor is a property of its *type*, not of its instances: all instances
of a given tensor type share the same shape, dimensionality and element
count.

Notes
-----
- The protocol is structural (duck-typed) and backend-agnostic; it does not
  mention NumPy. Infrastructure implementations back the buffer with a NumPy
  ndarray.
- Correctness relies on the buffer's runtime shape always equalling `SHAPE`.
  Implementations must guarantee this at construction time rather than
  checking on every access.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable


@runtime_checkable
class IShapedArray(Protocol):
    """
    Shape contract for fixed-shape tensor types.

    Attributes
    ----------
    SHAPE : tuple[int, ...]
        Shape shared by every instance of the type.
    NDIM : int
        Number of dimensions (``len(SHAPE)``).
    NUM_ELEMENTS : int
        Total element count (product of ``SHAPE``; 1 for a scalar).
    """

    SHAPE: ClassVar[tuple[int, ...]]
    NDIM: ClassVar[int]
    NUM_ELEMENTS: ClassVar[int]

    @property
    def data(self) -> Any:
        """
        Return read-only access to the backing buffer.

        Returns
        -------
        Any
            Backend-native array whose shape equals `SHAPE`. Writing through
            it is not permitted.
        """
        ...

    def mut_data(self) -> Any:
        """
        Return exclusive mutable access to the backing buffer.

        Returns
        -------
        Any
            The owned backend-native array. Callers may mutate elements in
            place but must not change its shape.
        """
        ...
