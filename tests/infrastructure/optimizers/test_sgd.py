import unittest

import numpy as np

from src.tapegrad.domain._errors import UnregisteredSlotError
from src.tapegrad.infrastructure.gradients import GradientTape
from src.tapegrad.infrastructure.optimizers import SGD
from src.tapegrad.infrastructure.tensor import Tensor1D


class TestSGDConstruction(unittest.TestCase):
    def test_invalid_hyperparameters(self):
        with self.assertRaises(ValueError):
            SGD([], lr=0.0)
        with self.assertRaises(ValueError):
            SGD([], lr=-1.0)
        with self.assertRaises(ValueError):
            SGD([], lr=0.1, weight_decay=-0.5)

    def test_params_iterable_is_consumed(self):
        params = (Tensor1D[1]() for _ in range(3))
        opt = SGD(params, lr=0.1)
        self.assertEqual(len(opt.params), 3)
        self.assertIn("lr=0.1", repr(opt))


class TestSGDStep(unittest.TestCase):
    def test_step_matches_manual_update(self):
        w = Tensor1D[2].from_numpy(np.array([3.0, 4.0]))
        opt = SGD([w], lr=0.1)

        with GradientTape() as tape:
            loss = w.square().sum()
        tape.backward(loss)
        opt.step(tape)

        np.testing.assert_allclose(w.data, [2.4, 3.2], rtol=1e-6)
        self.assertTrue(w.grad.is_empty)

    def test_step_only_scales_parameter_slots(self):
        w = Tensor1D[2].from_numpy(np.array([1.0, 1.0]))
        opt = SGD([w], lr=0.5)
        with GradientTape() as tape:
            y = w.scale(3.0)
        tape.backward(y)
        opt.step(tape)

        np.testing.assert_allclose(w.data, [-0.5, -0.5])
        np.testing.assert_allclose(tape.gradient(y), [1.0, 1.0])

    def test_weight_decay(self):
        w = Tensor1D[1].from_numpy(np.array([2.0]))
        opt = SGD([w], lr=0.1, weight_decay=0.5)
        with GradientTape() as tape:
            loss = w.sum()
        tape.backward(loss)
        opt.step(tape)
        # 2 - 0.1 * (1 + 0.5 * 2)
        np.testing.assert_allclose(w.data, [1.8], rtol=1e-6)

    def test_unrecorded_params_are_skipped(self):
        used = Tensor1D[1].from_numpy(np.array([1.0]))
        unused = Tensor1D[1].from_numpy(np.array([1.0]))
        opt = SGD([used, unused], lr=1.0)
        with GradientTape() as tape:
            loss = used.sum()
        tape.backward(loss)
        opt.step(tape)
        np.testing.assert_allclose(used.data, [0.0])
        np.testing.assert_allclose(unused.data, [1.0])

    def test_step_with_foreign_tape(self):
        w = Tensor1D[1]()
        opt = SGD([w], lr=0.1)
        GradientTape().watch(w)
        with self.assertRaises(UnregisteredSlotError):
            opt.step(GradientTape())

    def test_zero_grad_allows_new_tape(self):
        w = Tensor1D[1]()
        opt = SGD([w], lr=0.1)
        GradientTape().watch(w)
        opt.zero_grad()
        self.assertTrue(w.grad.is_empty)
        GradientTape().watch(w)

    def test_cycles_reuse_data_tensor(self):
        w = Tensor1D[2].ones()
        x = Tensor1D[2].full(2.0)
        opt = SGD([w], lr=0.1)

        for _ in range(2):
            with GradientTape() as tape:
                loss = (w * x).sum()
            tape.backward(loss)
            opt.step(tape)

        np.testing.assert_allclose(w.data, [0.6, 0.6], rtol=1e-6)
        np.testing.assert_allclose(x.data, [2.0, 2.0])

    def test_duplicate_params_updated_once(self):
        w = Tensor1D[1].from_numpy(np.array([1.0]))
        opt = SGD([w, w], lr=0.5)
        self.assertEqual(len(opt.params), 1)

        with GradientTape() as tape:
            loss = w.sum()
        tape.backward(loss)
        opt.step(tape)

        np.testing.assert_allclose(w.data, [0.5])

    def test_training_loop_converges(self):
        rng = np.random.default_rng(0)
        w = Tensor1D[4].randn(rng)
        target = Tensor1D[4].from_numpy(np.array([1.0, -1.0, 0.5, 2.0]))
        opt = SGD([w], lr=0.2)

        for _ in range(200):
            with GradientTape() as tape:
                loss = (w - target).square().mean()
            tape.backward(loss)
            opt.step(tape)

        np.testing.assert_allclose(w.data, target.data, atol=1e-3)


if __name__ == "__main__":
    unittest.main()
