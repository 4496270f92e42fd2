from typing import Any
from counterpage.elements import Element
from counterpage.execution import Context, Execution
from counterpage.node import Node
from counterpage.tree import RenderTree

def element_to_node(el: Element, registry: dict[str, Any] | None = None):
  return el.tonode(Context(id=("root",), registry=registry or {}, execution=Execution()))

def snapshot_node(node: Node):
  return RenderTree(items=node.snapshot())

def render_tree(el: Element, registry: dict[str, Any] | None = None):
  node = element_to_node(el, registry)
  node.expand()
  tree = snapshot_node(node)
  node.destroy()
  return tree

def render_element(el: Element, registry: dict[str, Any] | None = None):
  return render_tree(el, registry).to_html()
