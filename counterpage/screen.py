from counterpage.component import Component, event_handler
from counterpage.elements import El, Element, EventAttribute, HTMLFragment, VEl
from counterpage.execution import ContractViolation
from counterpage.state import ContextStateConsumer, CounterState

VITE_URL = "https://vite.dev"
REACT_URL = "https://react.dev"
VITE_LOGO_SRC = "https://img.icons8.com/?size=256&id=V1Ja402KSwyz&format=png"
REACT_LOGO_SRC = "https://img.icons8.com/?size=256&id=aUZxT3Erwill&format=png"
DOCUMENT_HREF = "/Python Cheat Sheet.pdf"

HEADING_TEXT = "Vite + React + Rohit"
COUNTER_LABEL = "count is {}"

# static parts, shared by every render
LOGOS = El.div(content=[
  El.a(href=VITE_URL, target="_blank", content=[ VEl.img(src=VITE_LOGO_SRC, _class="logo", alt="Vite logo") ]),
  El.a(href=REACT_URL, target="_blank", content=[ VEl.img(src=REACT_LOGO_SRC, _class="logo react", alt="React logo") ])
])
HEADING = El.h1(content=[HEADING_TEXT])
CARD_TEXT = El.p(content=[ "changed from local ", El.code(content=["processing through"]), "test case and deployed directly" ])
READ_THE_DOCS = El.p(_class="read-the-docs", content=["Click on the Vite and React logos to learn more"])
DOCUMENT_LINK = El.a(href=DOCUMENT_HREF, target="_blank", rel="noopener noreferrer", content=[
  El.h1(content=["Click here to open the pdf"])
])

def counter_label(count: int): return COUNTER_LABEL.format(count)

def counter_button(count: int, on_activate: EventAttribute | None = None):
  if on_activate is None: return El.button(content=[counter_label(count)])
  return El.button(onclick=on_activate, content=[counter_label(count)])

def render_screen(count: int, on_activate: EventAttribute | None = None) -> Element:
  """
  Maps a counter value to the element tree of the screen.
  The result only depends on the arguments, the button is the single element carrying a handler.
  """
  return HTMLFragment([
    LOGOS,
    HEADING,
    El.div(_class="card", content=[ counter_button(count, on_activate), CARD_TEXT ]),
    READ_THE_DOCS,
    DOCUMENT_LINK
  ])

class CounterScreen(Component):
  def __init__(self) -> None:
    super().__init__()
    self.counter: CounterState | None = None

  def on_init(self) -> None:
    if self.context is None: raise ContractViolation("Not configured!")
    self.counter = CounterState()
    self.counter.add_consumer(ContextStateConsumer.for_context(self.context))

  def on_before_destroy(self) -> None:
    if self.counter is not None: self.counter.destroy()

  @event_handler()
  def on_activate(self):
    self._get_counter().increment()

  def render(self) -> Element:
    return render_screen(self._get_counter().value, self.on_activate)

  def _get_counter(self):
    if self.counter is None: raise ContractViolation("Counter screen has not been initialized!")
    if self.counter.destroyed: raise ContractViolation("Counter screen has been destroyed!")
    return self.counter
