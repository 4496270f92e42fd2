import base64, html
from io import StringIO
from typing import Iterator, Union
from pydantic import BaseModel, ConfigDict
from counterpage.execution import InputEventDescriptor
from counterpage.helpers import Matcher, matches, normalize_text

_HEADING_TAGS = { "h1", "h2", "h3", "h4", "h5", "h6" }
_TAG_ROLES = { "button": "button", "img": "img", "p": "paragraph", "code": "code" }

def tag_role(tag: str, attributes: dict[str, str | None]) -> str:
  if tag == "a": return "link" if "href" in attributes else "generic"
  if tag in _HEADING_TAGS: return "heading"
  return _TAG_ROLES.get(tag, "generic")

class QueryError(LookupError): pass

class RenderText(BaseModel):
  model_config = ConfigDict(frozen=True)

  text: str
  raw: bool = False

  def write(self, io: StringIO):
    _ = io.write(self.text if self.raw else html.escape(self.text))

class RenderNode(BaseModel):
  model_config = ConfigDict(frozen=True)

  tag: str
  role: str
  attributes: tuple[tuple[str, str | None], ...] = ()
  events: tuple[tuple[str, InputEventDescriptor], ...] = ()
  children: tuple[Union['RenderNode', RenderText], ...] = ()
  void: bool = False

  def get_attribute(self, name: str) -> str | None:
    for k, v in self.attributes:
      if k == name: return v
    return None

  def has_attribute(self, name: str): return any(k == name for k, _ in self.attributes)

  def get_event(self, name: str) -> InputEventDescriptor | None:
    for k, v in self.events:
      if k == name: return v
    return None

  def iter_nodes(self) -> Iterator['RenderNode']:
    yield self
    for c in self.children:
      if isinstance(c, RenderNode): yield from c.iter_nodes()

  def write(self, io: StringIO):
    _ = io.write(f"<{html.escape(self.tag)}")
    for k, v in self.attributes:
      _ = io.write(f" {html.escape(k)}")
      if v is not None: _ = io.write(f"=\"{html.escape(v)}\"")
    for name, descriptor in self.events:
      v = base64.b64encode(descriptor.model_dump_json().encode("utf-8")).decode("utf-8")
      _ = io.write(f" counterpage-on-{html.escape(name)}=\"{html.escape(v)}\"")
    _ = io.write(">")
    if self.void: return
    for c in self.children:
      c.write(io)
    _ = io.write(f"</{html.escape(self.tag)}>")

RenderItem = RenderNode | RenderText

class RenderTree(BaseModel):
  """An immutable snapshot of everything visible for one state of the screen."""
  model_config = ConfigDict(frozen=True)

  items: tuple[RenderItem, ...] = ()

  def iter_nodes(self) -> Iterator[RenderNode]:
    """Yields every node in document order."""
    for item in self.items:
      if isinstance(item, RenderNode): yield from item.iter_nodes()

  def to_html(self):
    io = StringIO()
    for item in self.items:
      item.write(io)
    return io.getvalue()

# --- queries

def own_text(node: RenderNode):
  return "".join(c.text for c in node.children if isinstance(c, RenderText))

def text_content(node: RenderNode | RenderText) -> str:
  if isinstance(node, RenderText): return node.text
  return "".join(text_content(c) for c in node.children)

def accessible_name(node: RenderNode | RenderText) -> str:
  if isinstance(node, RenderText): return normalize_text(node.text)
  if node.tag == "img": return normalize_text(node.get_attribute("alt") or "")
  if (label := node.get_attribute("aria-label")) is not None: return normalize_text(label)
  return normalize_text(" ".join(accessible_name(c) for c in node.children))

def heading_level(node: RenderNode) -> int | None:
  return int(node.tag[1]) if node.tag in _HEADING_TAGS else None

def query_all_by_role(tree: RenderTree, role: str, name: Matcher | None = None, level: int | None = None):
  return [ n for n in tree.iter_nodes() if n.role == role and (name is None or matches(name, accessible_name(n)))
    and (level is None or heading_level(n) == level) ]

def get_all_by_role(tree: RenderTree, role: str, name: Matcher | None = None, level: int | None = None):
  return _require_any(query_all_by_role(tree, role, name, level), _describe_role(role, name, level))

def get_by_role(tree: RenderTree, role: str, name: Matcher | None = None, level: int | None = None):
  return _require_one(query_all_by_role(tree, role, name, level), _describe_role(role, name, level))

def query_all_by_text(tree: RenderTree, text: Matcher):
  return [ n for n in tree.iter_nodes() if (t := own_text(n)).strip() != "" and matches(text, t) ]

def get_all_by_text(tree: RenderTree, text: Matcher): return _require_any(query_all_by_text(tree, text), f"text {text!r}")
def get_by_text(tree: RenderTree, text: Matcher): return _require_one(query_all_by_text(tree, text), f"text {text!r}")

def query_all_by_alt_text(tree: RenderTree, alt: Matcher):
  return [ n for n in tree.iter_nodes() if (v := n.get_attribute("alt")) is not None and matches(alt, v) ]

def get_by_alt_text(tree: RenderTree, alt: Matcher): return _require_one(query_all_by_alt_text(tree, alt), f"alt text {alt!r}")

def _describe_role(role: str, name: Matcher | None, level: int | None):
  res = f"role '{role}'"
  if name is not None: res += f" with name {name!r}"
  if level is not None: res += f" at level {level}"
  return res

def _require_any(nodes: list[RenderNode], what: str):
  if len(nodes) == 0: raise QueryError(f"Unable to find an element by {what}!")
  return nodes

def _require_one(nodes: list[RenderNode], what: str):
  if len(_require_any(nodes, what)) > 1: raise QueryError(f"Found multiple elements by {what}!")
  return nodes[0]
