"""
Reduction mixin defining the public Tensor reduction API.

Reductions collapse a tensor of any type into a `Tensor0D`, which is the
usual seed point of a backward pass (a scalar loss).
"""

from abc import ABC


class TensorMixinReduction(ABC):
    """
    Mixin implementing full reductions (`sum`, `mean`).
    """

    def sum(self):
        """
        Sum all elements into a scalar tensor.

        Returns
        -------
        Tensor0D
            Scalar holding the sum.

        Notes
        -----
        Backward rule: the scalar upstream gradient is broadcast back to
        every input element.
        """
        from ...._function import reduce_sum

        return reduce_sum(self)

    def mean(self):
        """
        Average all elements into a scalar tensor.

        Notes
        -----
        Backward rule:
            ``d(mean(x)) / dx_i = 1 / numel(x)``
        """
        from ...._function import reduce_mean

        return reduce_mean(self)
