import unittest

import numpy as np

from src.tapegrad.infrastructure.tensor import Tensor1D
from src.tapegrad.infrastructure.utils.initializer import (
    Initializer,
    Normal,
    Uniform,
)


class TestInitializerRegistry(unittest.TestCase):
    def test_available_contains_builtin_fills(self):
        names = Initializer.available()
        for name in ("zeros", "ones", "uniform", "normal"):
            self.assertIn(name, names)
        self.assertEqual(list(names), sorted(names))

    def test_get_returns_callable(self):
        self.assertTrue(callable(Initializer.get("normal")))

    def test_unknown_initializer_raises_value_error(self):
        with self.assertRaises(ValueError) as ctx:
            Initializer("___does_not_exist___")
        msg = str(ctx.exception)
        self.assertIn("Unsupported initializer name", msg)
        self.assertIn("Available:", msg)

    def test_register_initializer_no_overwrite_by_default(self):
        name = "__unit_test_initializer__"

        @Initializer.register_initializer(name, overwrite=True)
        def init_a(tensor):
            return tensor

        with self.assertRaises(ValueError):

            @Initializer.register_initializer(name)
            def init_b(tensor):
                return tensor

    def test_register_and_dispatch_custom_fill(self):
        name = "__unit_test_half__"

        @Initializer.register_initializer(name, overwrite=True)
        def half(tensor):
            tensor.mut_data()[...] = 0.5
            return tensor

        x = Tensor1D[3]()
        self.assertIs(Initializer(name)(x), x)
        np.testing.assert_array_equal(x.data, [0.5, 0.5, 0.5])

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            Initializer.register_initializer("")

    def test_builtin_fills(self):
        x = Tensor1D[4].from_numpy(np.arange(4.0))
        Initializer("zeros")(x)
        np.testing.assert_array_equal(x.data, np.zeros(4))
        Initializer("ones")(x)
        np.testing.assert_array_equal(x.data, np.ones(4))

        a = Initializer("normal")(Tensor1D[4](), np.random.default_rng(3))
        b = Initializer("normal")(Tensor1D[4](), np.random.default_rng(3))
        np.testing.assert_array_equal(a.data, b.data)

    def test_random_fills_match_randomize(self):
        a = Initializer("uniform")(Tensor1D[5](), np.random.default_rng(5), -1.0, 1.0)
        b = Tensor1D[5]().randomize(np.random.default_rng(5), Uniform(-1.0, 1.0))
        np.testing.assert_array_equal(a.data, b.data)

        c = Initializer("normal")(Tensor1D[5](), np.random.default_rng(5), std=2.0)
        d = Tensor1D[5]().randomize(np.random.default_rng(5), Normal(0.0, 2.0))
        np.testing.assert_array_equal(c.data, d.data)

    def test_repr(self):
        self.assertEqual(repr(Initializer("zeros")), "Initializer('zeros')")


if __name__ == "__main__":
    unittest.main()
