from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Protocol
from counterpage.execution import Context, InputEventDescriptor
from counterpage.node import ElementNode, FragmentNode, Node, TextNode, VoidElementNode
from counterpage.tree import tag_role

class CustomAttribute(ABC):
  @abstractmethod
  def get_key_value(self, original_key: str) -> tuple[str, str | None]: ...

class EventAttribute(ABC):
  @abstractmethod
  def get_descriptor(self, original_key: str) -> tuple[str, InputEventDescriptor]: ...

class Element(ABC):
  @abstractmethod
  def tonode(self, context: Context) -> Node: ...

ElementContent = tuple[Element | str, ...] | list[Element | str]
HTMLAttributeValue = str | bool | int | float | CustomAttribute | EventAttribute | None

def element_content_to_nodes(context: Context, content: ElementContent):
  nodes: list[Node] = []
  for idx, c in enumerate(content):
    scontext = context.sub(idx)
    if isinstance(c, Element): nodes.append(c.tonode(scontext))
    elif isinstance(c, str): nodes.append(TextNode(scontext, c))
    else: raise ValueError("Invalid child!")
  return nodes

class HTMLFragment(Element):
  def __init__(self, content: ElementContent) -> None:
    super().__init__()
    self._content = tuple(content)

  @property
  def content(self): return self._content

  def tonode(self, context: Context) -> Node:
    return FragmentNode(context, element_content_to_nodes(context, self._content))

class HTMLVoidElement(Element):
  """An element without content. Attributes are resolved once on construction and never change afterwards."""

  def __init__(self, tag: str, attributes: dict[str, HTMLAttributeValue]) -> None:
    super().__init__()
    self._tag = tag
    resolved: dict[str, str | None] = {}
    events: dict[str, InputEventDescriptor] = {}
    for k, v in attributes.items():
      if isinstance(v, EventAttribute):
        event_name, descriptor = v.get_descriptor(k)
        events[event_name] = descriptor
        continue
      if isinstance(v, CustomAttribute): k, v = v.get_key_value(k)
      elif isinstance(v, bool):
        if not v: continue
        v = None
      elif isinstance(v, (int, float)): v = str(v)
      resolved[k] = v
    self._attributes = tuple(resolved.items())
    self._events = tuple(events.items())
    self._role = tag_role(tag, resolved)

  @property
  def tag(self): return self._tag

  @property
  def role(self): return self._role

  @property
  def attributes(self): return MappingProxyType(dict(self._attributes))

  @property
  def events(self): return MappingProxyType(dict(self._events))

  def tonode(self, context: Context) -> Node:
    return VoidElementNode(context, self._tag, self._role, self._attributes, self._events)

class HTMLElement(HTMLVoidElement):
  def __init__(self, tag: str, attributes: dict[str, HTMLAttributeValue], content: ElementContent) -> None:
    super().__init__(tag, attributes)
    self._content = tuple(content)

  @property
  def content(self): return self._content

  def tonode(self, context: Context) -> Node:
    return ElementNode(context, self._tag, self._role, self._attributes, self._events, element_content_to_nodes(context, self._content))

class UnescapedHTMLElement(Element):
  def __init__(self, text: str) -> None:
    super().__init__()
    self._text = text

  def tonode(self, context: Context) -> Node:
    return TextNode(context, self._text, raw=True)

class CreateHTMLElement(Protocol):
  def __call__(self, content: ElementContent = (), **kwargs: HTMLAttributeValue) -> HTMLElement: ...

class _El(type):
  def __getitem__(cls, name: str) -> CreateHTMLElement:
    def _inner(content: ElementContent = (), **kwargs: HTMLAttributeValue) -> HTMLElement:
      return HTMLElement(name, attributes={ k.lstrip("_"): v for k,v in kwargs.items() }, content=content)
    return _inner
  def __getattribute__(cls, name: str): return cls[name]

class El(metaclass=_El): ...

class CreateHTMLVoidElement(Protocol):
  def __call__(self, **kwargs: HTMLAttributeValue) -> HTMLVoidElement: ...

class _VEl(type):
  def __getitem__(cls, name: str) -> CreateHTMLVoidElement:
    def _inner(**kwargs: HTMLAttributeValue) -> HTMLVoidElement:
      return HTMLVoidElement(name, attributes={ k.lstrip("_"): v for k,v in kwargs.items() })
    return _inner
  def __getattribute__(cls, name: str): return cls[name]

class VEl(metaclass=_VEl): ...
