"""
Differentiable elementwise and reduction function implementations.

This module contains the infrastructure-level implementations of the
differentiable operations of tapegrad, expressed in a function-style API:

- Each operation is a `Function` subclass with `forward(ctx, ...)` and
  `backward(ctx, grad_out)` static methods working on raw NumPy buffers.
- An `OpContext` stores the buffers and metadata needed by `backward`.
- Public functional wrappers (e.g. `relu`, `add`, `reduce_sum`) are
  responsible for:
  - recording the inputs on the active tape,
  - invoking `forward` and wrapping the result in a tensor value,
  - recording the result,
  - pushing a backward step that delegates to `backward`.

When no tape is active, the wrappers only compute the forward value.

Notes
-----
- All binary operations require operands of the same tensor type; shapes are
  fixed per type, so no broadcasting is involved.
- Non-finite values (NaN, Inf) are not guarded; they propagate exactly as
  NumPy produces them.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from ..domain._function import Function
from ._constants import DEFAULT_DTYPE
from .gradients._recorder import record
from .gradients._tape import GradientTape
from .tensor._shaped_array import tensor_type
from .tensor._tensor_context import OpContext

Number = Union[int, float]


def _as_buffer(x: Any) -> np.ndarray:
    return np.asarray(x, dtype=DEFAULT_DTYPE)


# ---------------------------------------------------------------------------
# Unary activations
# ---------------------------------------------------------------------------
class ReLUFn(Function):
    """
    ReLU activation function.

    Implements:

        relu(x) = max(0, x)

    Backward:

        d(relu)/dx = 1 if x > 0 else 0

    Notes
    -----
    The forward pass saves the mask ``x > 0`` for backward.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        """
        Compute the ReLU activation.

        Parameters
        ----------
        ctx : OpContext
            Context used to save buffers for backward.
        x : np.ndarray
            Input buffer.

        Returns
        -------
        np.ndarray
            ``relu(x)`` elementwise.
        """
        mask = x > 0
        ctx.save_for_backward(mask)
        return np.where(mask, x, DEFAULT_DTYPE(0.0))

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        """
        Compute the contribution to the input's gradient.

        Parameters
        ----------
        ctx : OpContext
            Context containing the saved mask.
        grad_out : np.ndarray
            Accumulated gradient of the ReLU output.

        Returns
        -------
        np.ndarray
            ``grad_out * 1[x > 0]``.
        """
        (mask,) = ctx.saved_arrays
        return grad_out * mask


class SinFn(Function):
    """
    Elementwise sine. Backward: ``d(sin x)/dx = cos x``.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(x)
        return np.sin(x)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (x,) = ctx.saved_arrays
        return grad_out * np.cos(x)


class CosFn(Function):
    """
    Elementwise cosine. Backward: ``d(cos x)/dx = -sin x``.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(x)
        return np.cos(x)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (x,) = ctx.saved_arrays
        return -grad_out * np.sin(x)


class LnFn(Function):
    """
    Elementwise natural logarithm.

    Implements:

        ln(x)

    Backward:

        d(ln x)/dx = 1 / x

    Notes
    -----
    Non-positive inputs follow NumPy semantics (``-inf`` / ``nan``) and are
    not reported.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(x)
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.log(x)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (x,) = ctx.saved_arrays
        with np.errstate(divide="ignore", invalid="ignore"):
            return grad_out / x


class ExpFn(Function):
    """
    Elementwise exponential function.

    Implements:

        out = exp(x)

    Backward:

        d(exp(x))/dx = exp(x) = out

    Notes
    -----
    The output buffer is saved and reused in the backward pass.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        out = np.exp(x)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (out,) = ctx.saved_arrays
        return grad_out * out


class SigmoidFn(Function):
    """
    Sigmoid activation function.

    Implements:

        sigmoid(x) = 1 / (1 + exp(-x))

    Backward:

        d(sigmoid)/dx = sigmoid(x) * (1 - sigmoid(x))

    Notes
    -----
    The forward pass is evaluated as ``0.5 * (1 + tanh(x / 2))``, which is
    algebraically identical and does not overflow for large ``|x|``.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        half = DEFAULT_DTYPE(0.5)
        out = half * (np.tanh(half * x) + DEFAULT_DTYPE(1.0))
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (out,) = ctx.saved_arrays
        return grad_out * out * (DEFAULT_DTYPE(1.0) - out)


class TanhFn(Function):
    """
    Hyperbolic tangent activation function.

    Backward:

        d(tanh(x))/dx = 1 - tanh(x)^2
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        out = np.tanh(x)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (out,) = ctx.saved_arrays
        return grad_out * (DEFAULT_DTYPE(1.0) - out * out)


class SquareFn(Function):
    """
    Elementwise square. Backward: ``d(x^2)/dx = 2x``.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(x)
        return x * x

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (x,) = ctx.saved_arrays
        return DEFAULT_DTYPE(2.0) * x * grad_out


class AbsFn(Function):
    """
    Elementwise absolute value.

    Backward:

        d|x|/dx = sign(x)

    The derivative at ``x == 0`` is taken as 0.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(np.sign(x))
        return np.abs(x)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        (sign,) = ctx.saved_arrays
        return grad_out * sign


class NegFn(Function):
    """Elementwise negation. Backward: ``-grad_out``."""

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        return -x

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        return -grad_out


class ScaleFn(Function):
    """
    Multiplication by a Python scalar constant.

    Backward:

        d(c * x)/dx = c
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray, factor: Number) -> np.ndarray:
        c = DEFAULT_DTYPE(factor)
        ctx.saved_meta["factor"] = c
        return x * c

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        return grad_out * ctx.saved_meta["factor"]


class ShiftFn(Function):
    """
    Addition of a Python scalar constant. Backward: ``grad_out``.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray, offset: Number) -> np.ndarray:
        return x + DEFAULT_DTYPE(offset)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        return grad_out


# ---------------------------------------------------------------------------
# Binary elementwise ops
# ---------------------------------------------------------------------------
class AddFn(Function):
    """
    Elementwise addition of two same-shape tensors.

    Backward:

        d(a + b)/da = 1,  d(a + b)/db = 1
    """

    @staticmethod
    def forward(ctx: OpContext, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return a + b

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return grad_out, grad_out


class SubFn(Function):
    """
    Elementwise subtraction. Backward: ``(grad_out, -grad_out)``.
    """

    @staticmethod
    def forward(ctx: OpContext, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return a - b

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return grad_out, -grad_out


class MulFn(Function):
    """
    Elementwise (Hadamard) product.

    Backward:

        d(a * b)/da = b,  d(a * b)/db = a
    """

    @staticmethod
    def forward(ctx: OpContext, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        ctx.save_for_backward(a, b)
        return a * b

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        a, b = ctx.saved_arrays
        return grad_out * b, grad_out * a


# ---------------------------------------------------------------------------
# Reductions
# ---------------------------------------------------------------------------
class SumFn(Function):
    """
    Sum of all elements into a scalar.

    Backward:

        d(sum(x))/dx_i = 1, so the scalar upstream gradient is broadcast back
        to the input shape.
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.saved_meta["shape"] = x.shape
        return np.asarray(x.sum(dtype=DEFAULT_DTYPE), dtype=DEFAULT_DTYPE)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        return np.full(ctx.saved_meta["shape"], grad_out, dtype=DEFAULT_DTYPE)


class MeanFn(Function):
    """
    Mean of all elements into a scalar.

    Backward:

        d(mean(x))/dx_i = 1 / numel(x)
    """

    @staticmethod
    def forward(ctx: OpContext, x: np.ndarray) -> np.ndarray:
        ctx.saved_meta["shape"] = x.shape
        ctx.saved_meta["count"] = max(1, x.size)
        return np.asarray(x.mean(dtype=DEFAULT_DTYPE), dtype=DEFAULT_DTYPE)

    @staticmethod
    def backward(ctx: OpContext, grad_out: np.ndarray) -> np.ndarray:
        value = grad_out / DEFAULT_DTYPE(ctx.saved_meta["count"])
        return np.full(ctx.saved_meta["shape"], value, dtype=DEFAULT_DTYPE)


# ---------------------------------------------------------------------------
# Functional wrappers (tape wiring)
# ---------------------------------------------------------------------------
def _apply(
    fn: type,
    inputs: Sequence[Any],
    out_type: type,
    *args: Any,
) -> Any:
    """
    Run `fn` on `inputs` and wire it onto the active tape, if any.

    Parameters
    ----------
    fn : type[Function]
        The function class to apply.
    inputs : Sequence[Tensor]
        Tensor operands, in `fn.forward` order.
    out_type : type
        Tensor type of the result.
    *args : Any
        Extra non-tensor arguments forwarded to `fn.forward`.

    Returns
    -------
    Tensor
        The result value, recorded on the active tape when one exists.

    Notes
    -----
    The wiring follows a fixed order: record the inputs, compute the forward
    value, record the result, push the backward step. The backward step
    reads the result's slot and writes one contribution per input slot.
    """
    tape = GradientTape.active()
    in_slots = [record(x, tape) for x in inputs] if tape is not None else None

    ctx = OpContext()
    out = out_type._from_owned(
        _as_buffer(fn.forward(ctx, *(x.to_numpy() for x in inputs), *args))
    )
    if tape is None:
        return out

    out_slot = record(out, tape)
    if len(inputs) == 1:
        derivative = lambda grad_out: (fn.backward(ctx, grad_out),)
    else:
        derivative = lambda grad_out: tuple(fn.backward(ctx, grad_out))

    tape.push_backward_step(
        (out_slot,), in_slots, derivative, name=fn.__name__.removesuffix("Fn")
    )
    return out


def _check_same_type(a: Any, b: Any, op: str) -> None:
    if type(a) is not type(b):
        raise TypeError(
            f"{op} expects operands of the same tensor type; "
            f"got {type(a).__name__} and {type(b).__name__}"
        )


def relu(x: Any) -> Any:
    """
    Elementwise ReLU with tape recording.

    Parameters
    ----------
    x : Tensor
        Input tensor.

    Returns
    -------
    Tensor
        A tensor of the same type containing ``max(x, 0)``.
    """
    return _apply(ReLUFn, (x,), type(x))


def sin(x: Any) -> Any:
    """Elementwise sine with tape recording."""
    return _apply(SinFn, (x,), type(x))


def cos(x: Any) -> Any:
    """Elementwise cosine with tape recording."""
    return _apply(CosFn, (x,), type(x))


def ln(x: Any) -> Any:
    """Elementwise natural logarithm with tape recording."""
    return _apply(LnFn, (x,), type(x))


def exp(x: Any) -> Any:
    """
    Compute the elementwise exponential of a tensor with tape recording.

    This is the public functional wrapper around `ExpFn`.

    Parameters
    ----------
    x : Tensor
        Input tensor.

    Returns
    -------
    Tensor
        Output tensor ``exp(x)``.
    """
    return _apply(ExpFn, (x,), type(x))


def sigmoid(x: Any) -> Any:
    """Elementwise logistic sigmoid with tape recording."""
    return _apply(SigmoidFn, (x,), type(x))


def tanh(x: Any) -> Any:
    """Elementwise hyperbolic tangent with tape recording."""
    return _apply(TanhFn, (x,), type(x))


def square(x: Any) -> Any:
    """Elementwise square with tape recording."""
    return _apply(SquareFn, (x,), type(x))


def absolute(x: Any) -> Any:
    """Elementwise absolute value with tape recording."""
    return _apply(AbsFn, (x,), type(x))


def neg(x: Any) -> Any:
    """Elementwise negation with tape recording."""
    return _apply(NegFn, (x,), type(x))


def scale(x: Any, factor: Number) -> Any:
    """Multiply by a scalar constant, with tape recording."""
    return _apply(ScaleFn, (x,), type(x), factor)


def shift(x: Any, offset: Number) -> Any:
    """Add a scalar constant, with tape recording."""
    return _apply(ShiftFn, (x,), type(x), offset)


def add(a: Any, b: Any) -> Any:
    """
    Elementwise sum of two tensors of the same type, with tape recording.

    Raises
    ------
    TypeError
        If `a` and `b` are of different tensor types.
    """
    _check_same_type(a, b, "add")
    return _apply(AddFn, (a, b), type(a))


def sub(a: Any, b: Any) -> Any:
    """Elementwise difference of two tensors of the same type."""
    _check_same_type(a, b, "sub")
    return _apply(SubFn, (a, b), type(a))


def mul(a: Any, b: Any) -> Any:
    """Elementwise product of two tensors of the same type."""
    _check_same_type(a, b, "mul")
    return _apply(MulFn, (a, b), type(a))


def reduce_sum(x: Any) -> Any:
    """
    Sum all elements of `x` into a `Tensor0D`, with tape recording.
    """
    return _apply(SumFn, (x,), tensor_type(()))


def reduce_mean(x: Any) -> Any:
    """
    Average all elements of `x` into a `Tensor0D`, with tape recording.
    """
    return _apply(MeanFn, (x,), tensor_type(()))
