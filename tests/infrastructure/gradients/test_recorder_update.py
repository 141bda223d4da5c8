import unittest

import numpy as np

from src.tapegrad.domain._errors import (
    MissingGradientError,
    UnregisteredSlotError,
)
from src.tapegrad.infrastructure.gradients import GradientTape, record, update
from src.tapegrad.infrastructure.tensor import Tensor1D, Tensor2D


class TestRecord(unittest.TestCase):
    def test_record_allocates_once(self):
        tape = GradientTape()
        x = Tensor2D[2, 3]()

        first = record(x, tape)
        second = record(x, tape)

        self.assertIs(first, second)
        self.assertEqual(tape.num_slots, 1)
        self.assertEqual(first.shape, (2, 3))
        self.assertIs(x.grad.slot, first)

    def test_record_distinct_values_get_distinct_slots(self):
        tape = GradientTape()
        a, b = Tensor1D[4](), Tensor1D[4]()
        self.assertNotEqual(record(a, tape).index, record(b, tape).index)

    def test_record_on_second_tape_replaces_slot(self):
        x = Tensor1D[2]()
        first_tape, second_tape = GradientTape(), GradientTape()
        old = record(x, first_tape)

        new = record(x, second_tape)

        self.assertTrue(second_tape.owns(new))
        self.assertIs(x.grad.slot, new)
        self.assertNotEqual(old, new)
        self.assertEqual(second_tape.num_slots, 1)
        # the first tape's slot is left as it was
        self.assertTrue(first_tape.owns(old))

    def test_record_after_reset_replaces_slot(self):
        tape = GradientTape()
        x = Tensor1D[2]()
        old = record(x, tape)
        tape.reset()

        new = record(x, tape)

        self.assertFalse(tape.owns(old))
        self.assertTrue(tape.owns(new))
        self.assertEqual(new.index, 0)

    def test_replaced_slot_is_stable_within_lifetime(self):
        x = Tensor1D[2]()
        record(x, GradientTape())
        tape = GradientTape()
        self.assertIs(record(x, tape), record(x, tape))
        self.assertEqual(tape.num_slots, 1)

    def test_method_form(self):
        tape = GradientTape()
        x = Tensor1D[2]()
        self.assertIs(x.record(tape), x.grad.slot)


class TestUpdate(unittest.TestCase):
    def _recorded(self, values, grad):
        x = Tensor1D[len(values)].from_numpy(np.array(values))
        tape = GradientTape()
        slot = record(x, tape)
        tape.execute_backward(slot, grad)
        return x, tape

    def test_update_subtracts_gradient(self):
        x, tape = self._recorded([1.0, 2.0, 3.0], [0.5, 0.5, -1.0])
        update(x, tape)
        np.testing.assert_allclose(x.data, [0.5, 1.5, 4.0])

    def test_update_consumes_handle(self):
        x, tape = self._recorded([1.0], [1.0])
        update(x, tape)
        self.assertTrue(x.grad.is_empty)
        self.assertFalse(x.requires_grad)

    def test_update_twice_raises(self):
        x, tape = self._recorded([1.0], [1.0])
        x.update(tape)
        with self.assertRaises(MissingGradientError):
            x.update(tape)
        np.testing.assert_allclose(x.data, [0.0])

    def test_update_unrecorded_raises(self):
        with self.assertRaises(MissingGradientError):
            update(Tensor1D[2](), GradientTape())

    def test_update_with_wrong_tape(self):
        x, _ = self._recorded([1.0], [1.0])
        with self.assertRaises(UnregisteredSlotError):
            update(x, GradientTape())
        # The handle is detached before the tape lookup.
        self.assertTrue(x.grad.is_empty)
        np.testing.assert_allclose(x.data, [1.0])

    def test_value_can_be_recorded_again_after_update(self):
        x, tape = self._recorded([1.0], [1.0])
        x.update(tape)
        fresh = GradientTape()
        slot = record(x, fresh)
        self.assertTrue(fresh.owns(slot))

    def test_zero_grad_detaches_without_update(self):
        x, _ = self._recorded([2.0], [1.0])
        x.zero_grad()
        self.assertTrue(x.grad.is_empty)
        np.testing.assert_allclose(x.data, [2.0])


class TestSquareScenario(unittest.TestCase):
    def test_square_gradient_scale_and_update(self):
        x = Tensor1D[2].from_numpy(np.array([3.0, 4.0]))

        with GradientTape() as tape:
            y = x.square()

        self.assertEqual(tape.num_slots, 2)
        self.assertEqual(tape.num_steps, 1)

        tape.backward(y)
        np.testing.assert_allclose(tape.gradient(x), [6.0, 8.0])

        tape.scale_gradients(0.1)
        np.testing.assert_allclose(tape.gradient(x), [0.6, 0.8], rtol=1e-6)

        x.update(tape)
        np.testing.assert_allclose(x.data, [2.4, 3.2], rtol=1e-6)
        self.assertTrue(x.grad.is_empty)

    def test_square_of_square(self):
        # d/dx (x^2)^2 = 4x^3
        x = Tensor1D[2].from_numpy(np.array([1.0, -2.0]))
        with GradientTape() as tape:
            y = x.square().square()
        tape.backward(y)
        np.testing.assert_allclose(tape.gradient(x), [4.0, -32.0])


if __name__ == "__main__":
    unittest.main()
