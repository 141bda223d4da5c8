"""
Gradient bookkeeping exceptions for tapegrad.

This module defines the error taxonomy of the gradient tape machinery. Every
error raised here signals a programming mistake in the calling code (a
mismatch between the tape and the operations or optimizers layered above it)
and is meant to abort the current operation immediately.

None of these errors are caught inside the tape, the handle, or the recorder.
Numeric conditions such as NaN or Inf are not errors at this layer; they
propagate through the arithmetic untouched.
"""


class GradientContractError(RuntimeError):
    """
    Base class for fatal gradient-contract violations.

    Raised when the caller breaks the rules of the tape / handle lifecycle
    (e.g. updating an untracked value, or using a slot that the tape never
    issued).
    """


class MissingGradientError(GradientContractError):
    """
    Raised when a value without an attached gradient handle is updated.

    Attributes
    ----------
    type_name : str
        Name of the tensor type that was updated.
    """

    def __init__(self, type_name: str) -> None:
        """
        Initialize the MissingGradientError.

        Parameters
        ----------
        type_name : str
            Name of the tensor type whose handle was empty.
        """
        super().__init__(
            f"{type_name} has no attached gradient handle; "
            "record it on a tape before calling update()."
        )
        self.type_name = type_name


class UnregisteredSlotError(GradientContractError):
    """
    Raised when a gradient slot is used with a tape that did not issue it.

    This covers slots issued by another tape, slots issued before the tape
    was reset, and indices beyond the tape's storage.

    Attributes
    ----------
    index : int
        Index of the offending slot.
    """

    def __init__(self, index: int, reason: str) -> None:
        """
        Initialize the UnregisteredSlotError.

        Parameters
        ----------
        index : int
            Index of the offending slot.
        reason : str
            Short human-readable explanation.
        """
        super().__init__(f"Gradient slot {index} is not registered: {reason}.")
        self.index = index


class TapeStateError(GradientContractError):
    """
    Raised when a tape operation is invoked in the wrong lifecycle phase.

    The only phase rule enforced today is that backward replay runs at most
    once per tape lifetime.
    """


class ShapeMismatchError(ValueError):
    """
    Raised when a buffer does not have the shape required by its owner.

    Attributes
    ----------
    expected : tuple[int, ...]
        Shape required by the tensor type, slot, or seed.
    actual : tuple[int, ...]
        Shape that was provided.
    """

    def __init__(self, expected: tuple, actual: tuple, what: str = "buffer") -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        expected : tuple[int, ...]
            Required shape.
        actual : tuple[int, ...]
            Provided shape.
        what : str, optional
            Description of the offending object (used in the message).
        """
        super().__init__(
            f"{what} shape mismatch: expected {tuple(expected)}, got {tuple(actual)}."
        )
        self.expected = tuple(expected)
        self.actual = tuple(actual)


class TapeAllocationError(MemoryError):
    """
    Raised when the tape cannot allocate storage for a new gradient slot.

    This is a hard failure. There is no retry or partial-allocation path.
    """
