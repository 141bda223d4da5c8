import unittest

import numpy as np

from src.tapegrad.infrastructure.gradients import GradientTape
from src.tapegrad.infrastructure.tensor import Tensor0D, Tensor2D


def _sigmoid(x):
    return 1.0 / (1.0 + np.exp(-x))


# name -> (float64 reference, sample input)
ACTIVATIONS = {
    "relu": (lambda x: np.maximum(x, 0.0), [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "sin": (np.sin, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "cos": (np.cos, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "ln": (np.log, [[0.5, 1.0, 2.0], [3.0, 0.25, 1.5]]),
    "exp": (np.exp, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "sigmoid": (_sigmoid, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "tanh": (np.tanh, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "square": (np.square, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
    "abs": (np.abs, [[-1.5, 0.5, 2.0], [0.3, -0.7, 1.1]]),
}


def central_difference(f, x, eps=1e-4):
    """Elementwise derivative of an elementwise `f`, in float64."""
    x = np.asarray(x, dtype=np.float64)
    return (f(x + eps) - f(x - eps)) / (2.0 * eps)


class TestActivationForward(unittest.TestCase):
    def test_forward_matches_numpy(self):
        T = Tensor2D[2, 3]
        for name, (ref, sample) in ACTIVATIONS.items():
            with self.subTest(activation=name):
                x = T.from_numpy(np.array(sample))
                y = getattr(x, name)()
                self.assertIs(type(y), T)
                np.testing.assert_allclose(
                    y.data, ref(np.array(sample)), rtol=1e-5, atol=1e-6
                )

    def test_forward_without_tape_records_nothing(self):
        x = Tensor2D[2, 3].from_numpy(np.ones((2, 3)))
        y = x.exp()
        self.assertTrue(x.grad.is_empty)
        self.assertTrue(y.grad.is_empty)

    def test_input_buffer_unchanged(self):
        sample = np.array([[-1.0, 2.0, 3.0], [0.5, -0.5, 1.0]])
        x = Tensor2D[2, 3].from_numpy(sample)
        with GradientTape():
            x.relu()
            x.abs()
        np.testing.assert_array_equal(x.data, sample)


class TestActivationGradients(unittest.TestCase):
    def test_gradient_matches_finite_difference(self):
        T = Tensor2D[2, 3]
        for name, (ref, sample) in ACTIVATIONS.items():
            with self.subTest(activation=name):
                x = T.from_numpy(np.array(sample))
                with GradientTape() as tape:
                    y = getattr(x, name)()

                self.assertEqual(tape.num_slots, 2)
                self.assertEqual(tape.num_steps, 1)

                tape.backward(y)
                np.testing.assert_allclose(
                    tape.gradient(x),
                    central_difference(ref, sample),
                    rtol=1e-3,
                    atol=1e-4,
                )

    def test_gradient_with_non_unit_seed(self):
        x = Tensor2D[2, 3].from_numpy(np.full((2, 3), 0.5))
        with GradientTape() as tape:
            y = x.tanh()
        seed = np.arange(6, dtype=np.float32).reshape(2, 3)
        tape.execute_backward(y.grad.slot, seed)

        expected = seed * (1.0 - np.tanh(0.5) ** 2)
        np.testing.assert_allclose(tape.gradient(x), expected, rtol=1e-5)

    def test_chain_of_activations(self):
        # d/dx sigmoid(sin(x)) = s(1 - s) * cos(x), s = sigmoid(sin(x))
        sample = np.array([0.1, -0.4, 1.2])
        x = Tensor2D[1, 3].from_numpy(sample[None, :])
        with GradientTape() as tape:
            y = x.sin().sigmoid()
        tape.backward(y)

        s = _sigmoid(np.sin(sample))
        np.testing.assert_allclose(
            tape.gradient(x)[0], s * (1 - s) * np.cos(sample), rtol=1e-5
        )

    def test_reused_input_accumulates(self):
        # y = sin(x) + cos(x): both branches write into x's slot.
        x = Tensor2D[1, 2].from_numpy(np.array([[0.3, 1.7]]))
        with GradientTape() as tape:
            y = x.sin() + x.cos()
        tape.backward(y)
        np.testing.assert_allclose(
            tape.gradient(x),
            np.cos([[0.3, 1.7]]) - np.sin([[0.3, 1.7]]),
            rtol=1e-5,
        )

    def test_scalar_tensor(self):
        x = Tensor0D(2.0)
        with GradientTape() as tape:
            y = x.exp()
        tape.backward(y)
        self.assertAlmostEqual(float(tape.gradient(x)), np.exp(2.0), places=4)

    def test_ln_of_non_positive_propagates(self):
        x = Tensor2D[1, 2].from_numpy(np.array([[0.0, -1.0]]))
        y = x.ln()
        self.assertTrue(np.isneginf(y.data[0, 0]))
        self.assertTrue(np.isnan(y.data[0, 1]))


if __name__ == "__main__":
    unittest.main()
