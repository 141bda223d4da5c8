"""
Activation mixin defining the elementwise Tensor activation API.

This module declares :class:`TensorMixinActivations`, the mixin that gives
every tensor type the `IActivations` capability. Each method delegates to the
functional wrapper in ``infrastructure._function``, which records the input
and the result on the active gradient tape and pushes the backward step.

Every method returns a new value of the same tensor type; the receiver is
never modified apart from having its gradient handle populated when a tape
is active.
"""

from abc import ABC


class TensorMixinActivations(ABC):
    """
    Mixin implementing the elementwise activations of `IActivations`.

    Notes
    -----
    Backward rules are documented on the corresponding `Function` classes
    (``ReLUFn``, ``SinFn``, ...).
    """

    def relu(self):
        """
        Elementwise rectified linear unit, ``max(x, 0)``.

        Backward rule:
            ``d(relu(x)) / dx = 1 if x > 0 else 0``
        """
        from ...._function import relu

        return relu(self)

    def sin(self):
        """Elementwise sine."""
        from ...._function import sin

        return sin(self)

    def cos(self):
        """Elementwise cosine."""
        from ...._function import cos

        return cos(self)

    def ln(self):
        """
        Elementwise natural logarithm.

        The behavior for non-positive values follows NumPy semantics
        (``-inf`` or ``nan``).
        """
        from ...._function import ln

        return ln(self)

    def exp(self):
        """
        Elementwise exponential.

        Backward rule:
            ``d(exp(x)) / dx = exp(x)``
        """
        from ...._function import exp

        return exp(self)

    def sigmoid(self):
        """
        Elementwise logistic sigmoid, ``1 / (1 + exp(-x))``.
        """
        from ...._function import sigmoid

        return sigmoid(self)

    def tanh(self):
        from ...._function import tanh

        return tanh(self)

    def square(self):
        """
        Elementwise square.

        Backward rule:
            ``d(x^2) / dx = 2x``
        """
        from ...._function import square

        return square(self)

    def abs(self):
        """Elementwise absolute value."""
        from ...._function import absolute

        return absolute(self)
