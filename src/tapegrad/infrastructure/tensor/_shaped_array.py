"""
Fixed-shape array storage and tensor-type specialization.

This module provides `ShapedArray`, the NumPy-backed implementation of the
`IShapedArray` contract, together with the machinery that turns a dimension
family into concrete fixed-shape types:

    Tensor1D[3]          -> shape (3,)
    Tensor2D[2, 5]       -> shape (2, 5)
    tensor_type((4, 2))  -> Tensor2D[4, 2]

Design notes
------------
- A family class (e.g. `Tensor2D`) declares only its dimensionality. It is
  specialized by subscription; specializations are memoized, so
  ``Tensor1D[3] is Tensor1D[3]``.
- `SHAPE`, `NDIM` and `NUM_ELEMENTS` are class attributes of the
  specialization. Instances never carry their own shape.
- A buffer whose shape differs from `SHAPE` is rejected at construction, so
  accessors never need to re-check it.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar, Optional

import numpy as np
from typing_extensions import Self

from ...domain._errors import ShapeMismatchError
from .._constants import DEFAULT_DTYPE, MAX_NDIM

# ndim -> family class
_FAMILIES: dict[int, type] = {}

# (family, shape) -> specialized class
_SPECIALIZATIONS: dict[tuple[type, tuple[int, ...]], type] = {}


def _normalize_dims(dims: Any) -> tuple[int, ...]:
    if not isinstance(dims, tuple):
        dims = (dims,)
    out = []
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, (int, np.integer)):
            raise TypeError(f"tensor dimensions must be ints, got {d!r}")
        if d <= 0:
            raise ValueError(f"tensor dimensions must be positive, got {d}")
        out.append(int(d))
    return tuple(out)


def tensor_type(shape: tuple[int, ...]) -> type:
    """
    Return the tensor type whose `SHAPE` equals `shape`.

    Parameters
    ----------
    shape : tuple[int, ...]
        Requested shape. ``()`` maps to `Tensor0D`.

    Returns
    -------
    type
        The memoized specialization of the matching dimension family.

    Raises
    ------
    TypeError
        If no family of ``len(shape)`` dimensions exists.
    """
    shape = tuple(shape)
    family = _FAMILIES.get(len(shape))
    if family is None:
        raise TypeError(
            f"no tensor family with {len(shape)} dimension(s) "
            f"(supported: 0..{MAX_NDIM})"
        )
    if len(shape) == 0:
        return family
    return family[shape]


class ShapedArray:
    """
    Fixed-shape, float32 NumPy buffer owner.

    Satisfies `IShapedArray` structurally.

    Parameters
    ----------
    data : array-like, optional
        Initial contents. Must have exactly the type's `SHAPE`. When omitted
        the buffer is zero-filled.
    copy : bool, optional
        If False and `data` is already a float32 ndarray, it is adopted
        without copying. Defaults to True.

    Raises
    ------
    TypeError
        If the class is an unspecialized family (e.g. bare `Tensor2D`).
    ShapeMismatchError
        If `data` does not have the type's shape.
    """

    SHAPE: ClassVar[tuple[int, ...]]
    NDIM: ClassVar[int]
    NUM_ELEMENTS: ClassVar[int]

    _family: ClassVar[Optional[type]] = None

    def __init_subclass__(cls, ndim: Optional[int] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if ndim is None:
            return
        if not 0 <= ndim <= MAX_NDIM:
            raise ValueError(f"ndim must be in [0, {MAX_NDIM}], got {ndim}")
        cls.NDIM = ndim
        cls._family = cls
        _FAMILIES[ndim] = cls
        if ndim == 0:
            cls.SHAPE = ()
            cls.NUM_ELEMENTS = 1

    def __class_getitem__(cls, dims: Any) -> type:
        if cls._family is not cls or "SHAPE" in cls.__dict__:
            raise TypeError(f"{cls.__name__} cannot be specialized further")

        shape = _normalize_dims(dims)
        if len(shape) != cls.NDIM:
            raise TypeError(
                f"{cls.__name__} takes {cls.NDIM} dimension(s), got {len(shape)}"
            )

        key = (cls, shape)
        specialized = _SPECIALIZATIONS.get(key)
        if specialized is None:
            name = f"{cls.__name__}[{', '.join(map(str, shape))}]"
            specialized = type(cls)(
                name,
                (cls,),
                {
                    "SHAPE": shape,
                    "NUM_ELEMENTS": math.prod(shape),
                    "__module__": cls.__module__,
                    "__qualname__": name,
                },
            )
            _SPECIALIZATIONS[key] = specialized
        return specialized

    def __init__(self, data: Any = None, *, copy: bool = True) -> None:
        cls = type(self)
        if not hasattr(cls, "SHAPE"):
            raise TypeError(
                f"{cls.__name__} has no bound shape; "
                f"specialize it first (e.g. {cls.__name__}[...])"
            )

        if data is None:
            arr = np.zeros(cls.SHAPE, dtype=DEFAULT_DTYPE)
        elif copy:
            arr = np.array(data, dtype=DEFAULT_DTYPE)
        else:
            arr = np.asarray(data, dtype=DEFAULT_DTYPE)

        if arr.shape != cls.SHAPE:
            raise ShapeMismatchError(cls.SHAPE, arr.shape, what=cls.__name__)
        if not arr.flags.writeable:
            arr = arr.copy()
        self._data: np.ndarray = arr

    @classmethod
    def _from_owned(cls, arr: np.ndarray) -> Self:
        """
        Adopt `arr` as the buffer of a new instance without copying it.

        The caller must not keep another reference to `arr`.
        """
        return cls(arr, copy=False)

    @classmethod
    def from_numpy(cls, arr: Any) -> Self:
        """
        Construct an instance holding a copy of `arr`.

        Raises
        ------
        ShapeMismatchError
            If `arr` does not have the type's shape.
        """
        return cls(arr)

    @classmethod
    def batched(cls, batch_size: int) -> type:
        """
        Return the tensor type of shape ``(batch_size,) + cls.SHAPE``.

        Raises
        ------
        TypeError
            If the batched type would exceed the supported dimensionality.
        """
        (batch_size,) = _normalize_dims(batch_size)
        return tensor_type((batch_size,) + cls.SHAPE)

    # ------------------------------------------------------------------
    # Buffer access
    # ------------------------------------------------------------------
    @property
    def data(self) -> np.ndarray:
        """
        Return a read-only view of the backing buffer.
        """
        view = self._data.view()
        view.flags.writeable = False
        return view

    def mut_data(self) -> np.ndarray:
        """
        Return the backing buffer for in-place mutation.

        Notes
        -----
        Mutate elements only (``buf[...] = ...``, ``buf -= ...``); rebinding
        or reshaping the array breaks the shape contract.
        """
        return self._data

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the buffer."""
        return self._data.copy()

    @property
    def shape(self) -> tuple[int, ...]:
        return type(self).SHAPE

    @property
    def ndim(self) -> int:
        return type(self).NDIM

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def numel(self) -> int:
        return type(self).NUM_ELEMENTS

    def item(self) -> float:
        """
        Return the single element as a Python float.

        Raises
        ------
        ValueError
            If the type holds more than one element.
        """
        if type(self).NUM_ELEMENTS != 1:
            raise ValueError(
                f"item() requires exactly one element, "
                f"{type(self).__name__} has {type(self).NUM_ELEMENTS}"
            )
        return float(self._data.reshape(()))

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.array(self._data, dtype=dtype, copy=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({np.array2string(self._data, separator=', ')})"
