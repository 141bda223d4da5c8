"""
Initializer registry and dispatch utilities.

This module defines the concrete `Initializer` used to apply named fills
(zeros, ones, uniform, normal, ...) to tensor values in place.

Design
------
- Fills are registered by string name via a decorator-based registry.
- Each fill is a callable that mutates a tensor *in-place* and returns it.
- The dispatcher resolves a fill by name at construction time and invokes it
  via `__call__`.
- Random fills build an `IDistribution` and delegate to `Tensor.randomize`,
  so sampling lives in one place (`_distributions`).

Usage example
-------------
Registering a fill:

    @Initializer.register_initializer("half")
    def half(tensor):
        tensor.mut_data()[...] = 0.5
        return tensor

Applying a fill:

    Initializer("normal")(w, rng, std=0.1)

Notes
-----
- Registration keys must be unique unless explicitly overwritten.
- Fills write the buffer only; they never touch the gradient handle.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, TypeVar

from ....domain._shape import IShapedArray

T = TypeVar("T", bound=Callable[..., IShapedArray])


class Initializer:
    """
    Registry-backed fill dispatcher.

    Usage
    -----
    Register:
        @Initializer.register_initializer("zeros")
        def zeros(tensor): ...

    Dispatch:
        init = Initializer("zeros")
        init(tensor)
    """

    INITIALIZERS: ClassVar[Dict[str, Callable[..., IShapedArray]]] = {}

    def __init__(self, initializer_name: str) -> None:
        try:
            self._initializer: Callable[..., IShapedArray] = self.INITIALIZERS[
                initializer_name
            ]
        except KeyError as e:
            available = ", ".join(sorted(self.INITIALIZERS)) or "<none>"
            raise ValueError(
                f"Unsupported initializer name: {initializer_name!r}. "
                f"Available: {available}"
            ) from e
        self.name = initializer_name

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator to register a fill under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the fill later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.INITIALIZERS:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered initializer names (sorted)."""
        return tuple(sorted(cls.INITIALIZERS))

    @classmethod
    def get(cls, name: str) -> Callable[..., IShapedArray]:
        """Get a registered fill callable by name."""
        return cls.INITIALIZERS[name]

    def __call__(self, tensor: IShapedArray, *args: Any, **kwargs: Any) -> IShapedArray:
        return self._initializer(tensor, *args, **kwargs)

    def __repr__(self) -> str:
        return f"Initializer({self.name!r})"
