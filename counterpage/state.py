from abc import ABC, abstractmethod
from typing import Any
import weakref
from counterpage.execution import Context, ContractViolation

class StateConsumer(ABC):
  @abstractmethod
  def consume(self, value: int) -> Any: pass
  def detach(self) -> Any: pass

class CounterState:
  """
  Holds a single non-negative integer.
  The only transition is `increment`, consumers are notified after the new value has been stored, and the value is rolled back when a consumer raises.
  """

  def __init__(self, value: int = 0) -> None:
    if value < 0: raise ValueError("Counter value must not be negative!")
    self._value = value
    self._consumers: list[StateConsumer] = []
    self._destroyed = False

  @property
  def value(self): return self._value

  @property
  def destroyed(self): return self._destroyed

  def increment(self) -> int:
    if self._destroyed: raise ContractViolation("Counter state has been destroyed!")
    previous = self._value
    self._value = previous + 1
    try:
      for consumer in tuple(self._consumers):
        consumer.consume(self._value)
    except BaseException:
      self._value = previous
      raise
    return self._value

  def add_consumer(self, consumer: StateConsumer):
    if self._destroyed: raise ContractViolation("Counter state has been destroyed!")
    if consumer not in self._consumers:
      self._consumers.append(consumer)

  def remove_consumer(self, consumer: StateConsumer):
    try: self._consumers.remove(consumer)
    except ValueError: return
    consumer.detach()

  def destroy(self):
    for consumer in self._consumers:
      consumer.detach()
    self._consumers.clear()
    self._destroyed = True

class ContextStateConsumer(StateConsumer):
  _context_cache: weakref.WeakKeyDictionary[Context, 'ContextStateConsumer'] = weakref.WeakKeyDictionary()

  def __init__(self, context: Context) -> None: self.context = context
  def consume(self, value: int) -> Any: self.context.request_update()
  def detach(self) -> Any: ContextStateConsumer._context_cache.pop(self.context, None)

  @staticmethod
  def for_context(context: Context):
    if (consumer := ContextStateConsumer._context_cache.get(context)) is None:
      consumer = ContextStateConsumer(context)
      ContextStateConsumer._context_cache[context] = consumer
    return consumer
