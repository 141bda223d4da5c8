import importlib
import unittest

import numpy as np


class TestPublicApi(unittest.TestCase):
    def test_top_level_package_imports(self):
        tapegrad = importlib.import_module("src.tapegrad")
        for name in tapegrad.__all__:
            self.assertTrue(hasattr(tapegrad, name), name)

    def test_mixin_packages_import(self):
        for group in ("activations", "arithmetic", "gradient", "init", "reduction"):
            module = importlib.import_module(
                f"src.tapegrad.infrastructure.tensor.mixins.{group}"
            )
            self.assertEqual(len(module.__all__), 1)

    def test_square_through_top_level_names(self):
        from src.tapegrad import GradientTape, Tensor1D

        x = Tensor1D[2].from_numpy(np.array([3.0, 4.0]))
        with GradientTape() as tape:
            y = x.square()
        tape.backward(y)
        tape.scale_gradients(0.1)
        x.update(tape)
        np.testing.assert_allclose(x.data, [2.4, 3.2], rtol=1e-6)

    def test_named_initializer_from_tensor(self):
        from src.tapegrad import Tensor1D

        x = Tensor1D[3]().initialize("ones")
        np.testing.assert_array_equal(x.data, np.ones(3))


if __name__ == "__main__":
    unittest.main()
