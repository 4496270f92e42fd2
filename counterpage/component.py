from abc import abstractmethod
from typing import Any, Callable, Generic, ParamSpec, TypeVar
from pydantic import validate_call
from counterpage.elements import Element, EventAttribute
from counterpage.execution import Context, ContractViolation, InputEvent, InputEventDescriptor
from counterpage.node import Node

EHP = ParamSpec('EHP')
EHR = TypeVar('EHR')

class ClassEventHandler(Generic[EHP, EHR]):
  def __init__(self, fn: Callable[EHP, EHR]) -> None:
    self.fn = fn
  def __get__(self, instance, owner):
    if instance is None: return self
    return InstanceEventHandler(self.fn, instance)
  def __call__(self, *args: EHP.args, **kwargs: EHP.kwargs) -> EHR: raise RuntimeError("The event handler can only be called when attached to an instance!")

class InstanceEventHandler(EventAttribute, Generic[EHP, EHR]):
  def __init__(self, fn: Callable[EHP, EHR], instance: Any) -> None:
    super().__init__()
    if not isinstance(instance, Component): raise ValueError("The provided instance must be a component!")
    self.name = fn.__name__
    self.fn = validate_call(fn)
    self.instance = instance

  def __call__(self, *args: EHP.args, **kwargs: EHP.kwargs) -> EHR: return self.fn(self.instance, *args, **kwargs)

  def get_descriptor(self, original_key: str):
    if not original_key.startswith("on"): raise ValueError("Event handler must be applied to an attribute starting with 'on'.")
    if self.instance.context is None: raise ContractViolation("The instance must have a context to create an event descriptor.")
    return original_key[2:], InputEventDescriptor(context_id=self.instance.context.sid, handler_name=self.name)

def event_handler():
  def _inner(fn) -> ClassEventHandler: return ClassEventHandler(fn)
  return _inner

class Component(Element):
  def __init__(self) -> None:
    super().__init__()
    self.context: Context | None = None

  @abstractmethod
  def render(self) -> Element: ...

  def request_update(self):
    if self.context is None: raise ContractViolation("Not configured!")
    self.context.request_update()

  def lc_configure(self, context: Context): self.context = context
  def lc_init(self) -> None: return self.on_init()
  def lc_before_destroyed(self) -> None: return self.on_before_destroy()
  def lc_after_destroy(self) -> None: return self.on_after_destroy()
  def lc_handle_event(self, handler_name: str, data: dict[str, Any]):
    handler = getattr(self, handler_name, None)
    if not isinstance(handler, InstanceEventHandler): raise ContractViolation(f"Component has no event handler named '{handler_name}'!")
    handler(**data)

  def on_init(self) -> None: ...
  def on_before_destroy(self) -> None: ...
  def on_after_destroy(self) -> None: ...

  def tonode(self, context: Context) -> Node: return ComponentNode(context, self)

class ComponentNode(Node):
  def __init__(self, context: Context, element: Component) -> None:
    super().__init__(context, [])
    self.element = element

  def expand(self):
    if len(self.children) > 0:
      raise ValueError("Can not expand already expanded element!")

    self.context.register()
    self.element.lc_configure(self.context)
    self.element.lc_init()
    self._render_inner()

  def update(self):
    for c in self.children: c.destroy()
    self.children.clear()
    self._render_inner()

  def handle_event(self, event: InputEvent):
    if event.context_id == self.context.sid:
      self.element.lc_handle_event(event.handler_name, dict(event.data))
    else: super().handle_event(event)

  def destroy(self):
    for c in self.children: c.destroy()
    self.children.clear()

    self.element.lc_before_destroyed()
    self.element.lc_after_destroy()
    self.context.unregister()

  def _render_inner(self):
    inner = self.element.render()
    self.children.append(inner.tonode(self.context.sub("inner")))
    self.children[0].expand()
