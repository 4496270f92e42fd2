import unittest
from counterpage.component import Component, event_handler
from counterpage.elements import CustomAttribute, El, HTMLFragment, UnescapedHTMLElement, VEl
from counterpage.execution import ContractViolation
from counterpage.tree import RenderNode, RenderText
from tests.helpers import render_element, render_tree

class TestElements(unittest.TestCase):
  def test_div(self):
    text = render_element(El.div(content=["Hello World!"]))
    self.assertEqual(text, "<div>Hello World!</div>")

  def test_input(self):
    text = render_element(VEl.input(type="text"))
    self.assertEqual(text, "<input type=\"text\">")

  def test_fragment(self):
    text = render_element(HTMLFragment([
      El.div(content=["Hello"]),
      El.div(content=["World"])
    ]))
    self.assertEqual(text, "<div>Hello</div><div>World</div>")

  def test_bool_attributes(self):
    self.assertEqual(render_element(VEl.input(disabled=True)), "<input disabled>")
    self.assertEqual(render_element(VEl.input(disabled=False)), "<input>")

  def test_numeric_attributes(self):
    self.assertEqual(render_element(VEl.img(width=256)), "<img width=\"256\">")

  def test_class_attribute(self):
    self.assertEqual(render_element(VEl.img(_class="logo react")), "<img class=\"logo react\">")

  def test_escaping(self):
    self.assertEqual(render_element(El.div(content=["<b>&</b>"])), "<div>&lt;b&gt;&amp;&lt;/b&gt;</div>")
    self.assertEqual(render_element(VEl.img(src="/a?b=1&c=2")), "<img src=\"/a?b=1&amp;c=2\">")

  def test_unescaped(self):
    self.assertEqual(render_element(El.div(content=[UnescapedHTMLElement("<b>bold</b>")])), "<div><b>bold</b></div>")

  def test_custom_attribute(self):
    class Upper(CustomAttribute):
      def __init__(self, value: str) -> None: self.value = value
      def get_key_value(self, original_key: str): return ("data-" + original_key, self.value.upper())

    self.assertEqual(render_element(El.span(title=Upper("hi"))), "<span data-title=\"HI\"></span>")

  def test_invalid_child(self):
    with self.assertRaises(ValueError):
      render_element(El.div(content=[42])) # type: ignore

  def test_roles(self):
    self.assertEqual(El.a(href="https://vite.dev").role, "link")
    self.assertEqual(El.a().role, "generic")
    self.assertEqual(VEl.img(alt="x").role, "img")
    self.assertEqual(El.h1().role, "heading")
    self.assertEqual(El.h3().role, "heading")
    self.assertEqual(El.button().role, "button")
    self.assertEqual(El.p().role, "paragraph")
    self.assertEqual(El.div().role, "generic")

  def test_descriptors_are_immutable(self):
    el = El.a(href="https://react.dev", target="_blank", content=["React"])
    with self.assertRaises(TypeError):
      el.attributes["href"] = "https://example.com" # type: ignore
    self.assertEqual(el.attributes["href"], "https://react.dev")
    self.assertEqual(el.content, ("React",))

  def test_snapshot(self):
    tree = render_tree(El.a(href="/doc.pdf", content=[El.h1(content=["Open"])]))
    self.assertEqual(tree.items, (
      RenderNode(tag="a", role="link", attributes=(("href", "/doc.pdf"),), children=(
        RenderNode(tag="h1", role="heading", children=(RenderText(text="Open"),)),
      )),
    ))

  def test_component(self):
    class TestComp(Component):
      def render(self):
        return El.div(content=["Hello World!"])

    text = render_element(TestComp())
    self.assertEqual(text, "<div>Hello World!</div>")

  def test_component_event_attribute(self):
    class TestComp(Component):
      @event_handler()
      def on_press(self): pass

      def render(self):
        return El.button(onclick=self.on_press, content=["press"])

    tree = render_tree(TestComp())
    button = next(tree.iter_nodes())
    descriptor = button.get_event("click")
    self.assertIsNotNone(descriptor)
    assert descriptor is not None
    self.assertEqual(descriptor.handler_name, "on_press")
    self.assertEqual(button.attributes, ())
    self.assertIn("counterpage-on-click=", tree.to_html())

  def test_event_handler_requires_on_prefix(self):
    class TestComp(Component):
      @event_handler()
      def on_press(self): pass

      def render(self):
        return El.button(click=self.on_press)

    with self.assertRaises(ValueError):
      render_tree(TestComp())

  def test_event_handler_requires_context(self):
    class TestComp(Component):
      @event_handler()
      def on_press(self): pass

      def render(self):
        return El.button(onclick=self.on_press)

    with self.assertRaises(ContractViolation):
      TestComp().render()

  def test_unbound_event_handler(self):
    class TestComp(Component):
      @event_handler()
      def on_press(self): pass

      def render(self):
        return El.div()

    with self.assertRaises(RuntimeError):
      TestComp.on_press()

if __name__ == "__main__":
  unittest.main()
