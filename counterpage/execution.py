import dataclasses, functools, hashlib
from typing import Any
from pydantic import BaseModel, ConfigDict
from counterpage.helpers import T

ContextStackKey = str | int
ContextStack = tuple[ContextStackKey, ...]

class ContractViolation(RuntimeError):
  """Raised for any call made outside its documented preconditions, e.g. using a disposed screen."""

@functools.lru_cache(maxsize=2048)
def get_context_stack_sid(stack: ContextStack):
  hasher = hashlib.sha256()
  for k in stack:
    if isinstance(k, str): k = k.replace(";", ";;")
    else: k = str(k)
    hasher.update((k + ";").encode("utf-8"))
  return hashlib.sha256(hasher.digest()).hexdigest() # NOTE: double hash to prevent hash continuation

class InputEventDescriptor(BaseModel):
  model_config = ConfigDict(frozen=True)

  context_id: str
  handler_name: str

class InputEvent(BaseModel):
  context_id: str
  handler_name: str
  data: dict[str, int | float | str | bool] = {}

  @staticmethod
  def from_descriptor(descriptor: InputEventDescriptor, data: dict[str, int | float | str | bool] | None = None):
    return InputEvent(context_id=descriptor.context_id, handler_name=descriptor.handler_name, data=data or {})

@dataclasses.dataclass
class Execution:
  pending_updates: set[ContextStack] = dataclasses.field(default_factory=set)
  active_contexts: set[str] = dataclasses.field(default_factory=set)

  @property
  def update_pending(self): return len(self.pending_updates) > 0

  def request_update(self, id: ContextStack): self.pending_updates.add(id)

  def pop_pending_updates(self):
    result = set(self.pending_updates)
    self.pending_updates.clear()
    return result

  def register(self, sid: str): self.active_contexts.add(sid)
  def unregister(self, sid: str): self.active_contexts.discard(sid)
  def is_active(self, sid: str): return sid in self.active_contexts

@dataclasses.dataclass(frozen=True)
class Context:
  id: ContextStack
  registry: dict[str, Any]
  execution: Execution

  def __hash__(self) -> int:
    return id(self)

  @functools.cached_property
  def sid(self): return get_context_stack_sid(self.id)

  @property
  def active(self): return self.execution.is_active(self.sid)

  def sub(self, key: ContextStackKey): return dataclasses.replace(self, id=self.id + (key,))
  def update_registry(self, registry: dict[str, Any]): return dataclasses.replace(self, registry=self.registry | registry)
  def registered(self, name: str, t: type[T]) -> T:
    if not isinstance((val:=self.registry.get(name)), t):
      raise TypeError(f"Invalid type in get_registered '{type(val)}'!")
    return val

  def register(self): self.execution.register(self.sid)
  def unregister(self): self.execution.unregister(self.sid)

  def request_update(self):
    if not self.active: raise ContractViolation("Update requested for an inactive context!")
    self.execution.request_update(self.id)
