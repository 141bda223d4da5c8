import unittest

import numpy as np

from src.tapegrad.infrastructure._function import (
    AbsFn,
    AddFn,
    ExpFn,
    MeanFn,
    MulFn,
    ReLUFn,
    ScaleFn,
    SumFn,
    exp,
    mul,
)
from src.tapegrad.infrastructure.gradients import GradientTape
from src.tapegrad.infrastructure.tensor import OpContext, Tensor1D


class TestOpContext(unittest.TestCase):
    def test_save_for_backward_appends(self):
        ctx = OpContext()
        self.assertEqual(len(ctx.saved_arrays), 0)

        a, b = np.zeros(2), np.ones(2)
        ctx.save_for_backward(a, b)

        self.assertEqual(len(ctx.saved_arrays), 2)
        self.assertIs(ctx.saved_arrays[0], a)
        self.assertIs(ctx.saved_arrays[1], b)

    def test_contexts_do_not_share_state(self):
        c1, c2 = OpContext(), OpContext()
        c1.saved_meta["k"] = 1
        self.assertNotIn("k", c2.saved_meta)


class TestFunctionClasses(unittest.TestCase):
    def test_relu_saves_mask(self):
        ctx = OpContext()
        x = np.array([-1.0, 0.0, 2.0], dtype=np.float32)
        out = ReLUFn.forward(ctx, x)
        np.testing.assert_array_equal(out, [0.0, 0.0, 2.0])
        grad = ReLUFn.backward(ctx, np.ones(3, dtype=np.float32))
        np.testing.assert_array_equal(grad, [0.0, 0.0, 1.0])

    def test_exp_backward_reuses_output(self):
        ctx = OpContext()
        x = np.array([0.0, 1.0], dtype=np.float32)
        out = ExpFn.forward(ctx, x)
        self.assertIs(ctx.saved_arrays[0], out)
        np.testing.assert_allclose(
            ExpFn.backward(ctx, np.full(2, 2.0, dtype=np.float32)), 2.0 * np.exp(x)
        )

    def test_abs_derivative_at_zero_is_zero(self):
        ctx = OpContext()
        AbsFn.forward(ctx, np.array([-3.0, 0.0, 3.0], dtype=np.float32))
        np.testing.assert_array_equal(
            AbsFn.backward(ctx, np.ones(3, dtype=np.float32)), [-1.0, 0.0, 1.0]
        )

    def test_binary_backward_returns_pair(self):
        ctx = OpContext()
        a = np.array([2.0], dtype=np.float32)
        b = np.array([5.0], dtype=np.float32)
        AddFn.forward(ctx, a, b)
        self.assertEqual(len(AddFn.backward(ctx, np.ones(1, dtype=np.float32))), 2)

        ctx = OpContext()
        MulFn.forward(ctx, a, b)
        ga, gb = MulFn.backward(ctx, np.ones(1, dtype=np.float32))
        np.testing.assert_array_equal(ga, b)
        np.testing.assert_array_equal(gb, a)

    def test_scale_keeps_factor_in_meta(self):
        ctx = OpContext()
        out = ScaleFn.forward(ctx, np.array([1.0, 2.0], dtype=np.float32), 3)
        np.testing.assert_array_equal(out, [3.0, 6.0])
        self.assertEqual(ctx.saved_meta["factor"], 3.0)

    def test_reductions(self):
        x = np.arange(6, dtype=np.float32).reshape(2, 3)

        ctx = OpContext()
        self.assertEqual(float(SumFn.forward(ctx, x)), 15.0)
        np.testing.assert_array_equal(
            SumFn.backward(ctx, np.array(2.0, dtype=np.float32)), np.full((2, 3), 2.0)
        )

        ctx = OpContext()
        self.assertEqual(float(MeanFn.forward(ctx, x)), 2.5)
        np.testing.assert_allclose(
            MeanFn.backward(ctx, np.array(6.0, dtype=np.float32)), np.ones((2, 3))
        )


class TestFunctionalWrappers(unittest.TestCase):
    def test_wrapper_pushes_named_step(self):
        x = Tensor1D[2].from_numpy(np.array([0.0, 1.0]))
        with GradientTape() as tape:
            exp(x)
        self.assertEqual(tape.num_steps, 1)
        self.assertIn("Exp", repr(tape._steps[0]))

    def test_forward_uses_private_copy_of_inputs(self):
        a = Tensor1D[1].from_numpy(np.array([2.0]))
        b = Tensor1D[1].from_numpy(np.array([5.0]))
        with GradientTape() as tape:
            y = mul(a, b)
        # Mutating an input after the forward pass must not alter its
        # recorded derivative.
        b.mut_data()[...] = 100.0
        tape.backward(y)
        np.testing.assert_allclose(tape.gradient(a), [5.0])

    def test_mul_rejects_mixed_types(self):
        with self.assertRaises(TypeError):
            mul(Tensor1D[1](), Tensor1D[2]())


if __name__ == "__main__":
    unittest.main()
