from abc import ABC
from typing import Callable
from counterpage.execution import Context, InputEvent, InputEventDescriptor
from counterpage.tree import RenderItem, RenderNode, RenderText

class Node(ABC):
  def __init__(self, context: Context, children: list['Node']) -> None:
    self.context = context
    self.children = children

  def expand(self):
    for c in self.children: c.expand()

  def update(self):
    for c in self.children: c.update()

  def handle_event(self, event: InputEvent):
    for c in self.children: c.handle_event(event)

  def destroy(self):
    for c in self.children: c.destroy()

  def snapshot(self) -> tuple[RenderItem, ...]:
    return tuple(item for c in self.children for item in c.snapshot())

class LazyNode(Node):
  def __init__(self, context: Context, producer: Callable[[Context], Node]) -> None:
    super().__init__(context, [])
    self._producer: Callable[[Context], Node] = producer

  def expand(self):
    if len(self.children) == 0:
      self.children.append(self._producer(self.context))
    return super().expand()

class FragmentNode(Node): ...

class TextNode(Node):
  def __init__(self, context: Context, text: str, raw: bool = False) -> None:
    super().__init__(context, [])
    self.text = text
    self.raw = raw

  def snapshot(self) -> tuple[RenderItem, ...]: return (RenderText(text=self.text, raw=self.raw),)

class VoidElementNode(Node):
  def __init__(self, context: Context, tag: str, role: str, attributes: tuple[tuple[str, str | None], ...],
               events: tuple[tuple[str, InputEventDescriptor], ...], children: list[Node] | None = None) -> None:
    super().__init__(context, children or [])
    self.tag = tag
    self.role = role
    self.attributes = attributes
    self.events = events

  def snapshot(self) -> tuple[RenderItem, ...]:
    return (RenderNode(tag=self.tag, role=self.role, attributes=self.attributes, events=self.events, void=True),)

class ElementNode(VoidElementNode):
  def snapshot(self) -> tuple[RenderItem, ...]:
    return (RenderNode(tag=self.tag, role=self.role, attributes=self.attributes, events=self.events, children=super(VoidElementNode, self).snapshot()),)
