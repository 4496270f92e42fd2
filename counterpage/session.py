import logging
import secrets
from dataclasses import dataclass
from typing import Literal
from counterpage.elements import Element
from counterpage.execution import Context, ContextStack, ContractViolation, Execution, InputEvent
from counterpage.node import LazyNode, Node
from counterpage.screen import CounterScreen
from counterpage.tree import RenderNode, RenderTree

@dataclass(frozen=True)
class ScreenConfig:
  title: str = "Vite + React"
  stylesheet: str | None = "/index.css"

class Session:
  """
  Owns the live node tree of one screen instantiation.
  All operations run to completion before returning, so the tree returned by `render` always reflects every activation made so far.
  """

  def __init__(self, config: ScreenConfig, base: Element) -> None:
    self.config = config
    self.id = secrets.token_hex(8)
    self.execution = Execution()
    self._root_node = LazyNode(Context(id=("root", self.id), registry={ "config": config }, execution=self.execution), base.tonode)
    self._status: Literal["created", "ready", "disposed"] = "created"
    self._focused: RenderNode | None = None

  @property
  def ready(self): return self._status == "ready"

  @property
  def disposed(self): return self._status == "disposed"

  @property
  def update_pending(self): return self.execution.update_pending

  @property
  def focused(self): return self._focused

  def __enter__(self): return self
  def __exit__(self, *_):
    if not self.disposed: self.destroy()

  def init(self):
    if self._status != "created": raise ContractViolation(f"Session can not be initialized when {self._status}!")
    self._root_node.expand()
    self._status = "ready"
    self.update(optional=True)

  def destroy(self):
    if self.disposed: raise ContractViolation("Session has already been disposed!")
    if self.ready: self._root_node.destroy()
    self.execution.pop_pending_updates()
    self._status = "disposed"
    self._focused = None
    logging.debug("screen session disposed")

  def render(self) -> RenderTree:
    self._check_ready()
    return RenderTree(items=self._root_node.snapshot())

  def activate(self, node: RenderNode, event: str = "click") -> bool:
    """Delivers one activation to `node`. Returns False when the node carries no handler for `event`."""
    self._check_ready()
    descriptor = node.get_event(event)
    if descriptor is None:
      logging.debug(f"ignoring {event} on inert <{node.tag}>")
      return False
    if not self.execution.is_active(descriptor.context_id):
      raise ContractViolation("The event target does not belong to a live component of this session!")
    self._root_node.handle_event(InputEvent.from_descriptor(descriptor))
    self.update()
    return True

  def press_key(self, node: RenderNode, key: str) -> bool:
    """Focuses `node` and delivers a keydown. Only explicitly bound keydown handlers react to it."""
    self._check_ready()
    self._focused = node
    if node.get_event("keydown") is None:
      logging.debug(f"keydown '{key}' on <{node.tag}> is not bound to a handler")
      return False
    return self.activate(node, "keydown")

  def update(self, *, optional: bool = False):
    self._check_ready()
    if optional and not self.update_pending: return
    for node in self._find_roots(self.execution.pop_pending_updates()):
      node.update()

  def _check_ready(self):
    if self._status == "created": raise ContractViolation("Session has not been initialized!")
    if self._status == "disposed": raise ContractViolation("Session has been disposed!")

  def _find_roots(self, ids: set[ContextStack]):
    if self._root_node.context.id in ids:
      yield self._root_node
      return
    els: list[Node] = [self._root_node]
    while len(els) > 0:
      nels: list[Node] = []
      for nel in (nel for el in els for nel in el.children):
        if nel.context.id in ids: yield nel
        else: nels.append(nel)
      els = nels

def create_screen(config: ScreenConfig | None = None) -> Session:
  """Mounts a new counter screen. The returned session is the handle for every further operation."""
  session = Session(config or ScreenConfig(), CounterScreen())
  session.init()
  return session

def dispose_screen(session: Session):
  session.destroy()
