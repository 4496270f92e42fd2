import unittest
from typing import Any
from counterpage.execution import Context, ContractViolation, Execution
from counterpage.state import ContextStateConsumer, CounterState, StateConsumer

class RecordingConsumer(StateConsumer):
  def __init__(self) -> None:
    self.values: list[int] = []
    self.detached = 0

  def consume(self, value: int) -> Any: self.values.append(value)
  def detach(self) -> Any: self.detached += 1

class TestCounterState(unittest.TestCase):
  def test_initial_value(self):
    self.assertEqual(CounterState().value, 0)
    self.assertEqual(CounterState(5).value, 5)

  def test_negative_initial_value(self):
    with self.assertRaises(ValueError):
      CounterState(-1)

  def test_increment(self):
    state = CounterState()
    self.assertEqual(state.increment(), 1)
    self.assertEqual(state.value, 1)

  def test_many_increments(self):
    state = CounterState()
    for i in range(1, 101):
      self.assertEqual(state.increment(), i)
    self.assertEqual(state.value, 100)

  def test_consumers_see_new_value(self):
    state = CounterState()
    seen: list[int] = []

    class Reader(StateConsumer):
      def consume(self, value: int): seen.append(state.value)

    state.add_consumer(Reader())
    state.increment()
    state.increment()
    self.assertEqual(seen, [1, 2])

  def test_consumer_registration(self):
    state = CounterState()
    consumer = RecordingConsumer()
    state.add_consumer(consumer)
    state.add_consumer(consumer)
    state.increment()
    self.assertEqual(consumer.values, [1])

    state.remove_consumer(consumer)
    self.assertEqual(consumer.detached, 1)
    state.increment()
    self.assertEqual(consumer.values, [1])

    state.remove_consumer(consumer)
    self.assertEqual(consumer.detached, 1)

  def test_destroy(self):
    state = CounterState()
    consumer = RecordingConsumer()
    state.add_consumer(consumer)
    state.increment()
    state.destroy()
    state.destroy()
    self.assertTrue(state.destroyed)
    self.assertEqual(consumer.detached, 1)
    self.assertEqual(state.value, 1)

    with self.assertRaises(ContractViolation):
      state.increment()
    with self.assertRaises(ContractViolation):
      state.add_consumer(RecordingConsumer())

  def test_failed_notification_rolls_back(self):
    class Failing(StateConsumer):
      def consume(self, value: int): raise KeyError("consumer failed")

    state = CounterState(3)
    recorder = RecordingConsumer()
    state.add_consumer(recorder)
    state.add_consumer(Failing())
    with self.assertRaises(KeyError):
      state.increment()
    self.assertEqual(state.value, 3)
    self.assertEqual(recorder.values, [4])

  def test_independent_instances(self):
    a, b = CounterState(), CounterState()
    a.increment()
    a.increment()
    b.increment()
    self.assertEqual((a.value, b.value), (2, 1))

class TestContextStateConsumer(unittest.TestCase):
  def test_requests_update(self):
    execution = Execution()
    context = Context(id=("root",), registry={}, execution=execution)
    context.register()
    state = CounterState()
    state.add_consumer(ContextStateConsumer.for_context(context))
    self.assertFalse(execution.update_pending)
    state.increment()
    self.assertEqual(execution.pop_pending_updates(), { ("root",) })

  def test_cached_per_context(self):
    context = Context(id=("root",), registry={}, execution=Execution())
    self.assertIs(ContextStateConsumer.for_context(context), ContextStateConsumer.for_context(context))
    other = Context(id=("root",), registry={}, execution=Execution())
    self.assertIsNot(ContextStateConsumer.for_context(context), ContextStateConsumer.for_context(other))

  def test_inactive_context(self):
    context = Context(id=("root",), registry={}, execution=Execution())
    state = CounterState()
    state.add_consumer(ContextStateConsumer.for_context(context))
    with self.assertRaises(ContractViolation):
      state.increment()
    self.assertEqual(state.value, 0)

  def test_detach_releases_context(self):
    context = Context(id=("root",), registry={}, execution=Execution())
    consumer = ContextStateConsumer.for_context(context)
    self.assertIn(context, ContextStateConsumer._context_cache)
    state = CounterState()
    state.add_consumer(consumer)
    state.destroy()
    self.assertNotIn(context, ContextStateConsumer._context_cache)
    self.assertIsNot(ContextStateConsumer.for_context(context), consumer)

if __name__ == "__main__":
  unittest.main()
