import logging
from dataclasses import dataclass, field
from typing import Any
from pydantic import ValidationError

from counterpage.asgi import ASGIFnReceive, ASGIFnSend, ASGIScope, HTTPContext
from counterpage.elements import HTMLFragment, UnescapedHTMLElement
from counterpage.page import Page, PageFactory
from counterpage.session import ScreenConfig, Session, create_screen

INDEX_PATHS = { "/", "/index.html" }

@dataclass
class AppConfig:
  screen: ScreenConfig = field(default_factory=ScreenConfig)
  page_factory: PageFactory = Page

class App:
  """Serves the page shell around a freshly mounted screen. Interaction stays in-process, nothing is posted back."""

  def __init__(self, config: AppConfig | None = None) -> None:
    self.config = config or AppConfig()

  async def __call__(self, scope: ASGIScope, receive: ASGIFnReceive, send: ASGIFnSend) -> Any:
    if scope["type"] == "http":
      context = HTTPContext(scope, receive, send)
      try: return await self._handle_http(context)
      except (ValidationError, ValueError) as e:
        logging.debug(e)
        if not context.response_started: return await context.respond_status(400)
      except Exception as e:
        logging.debug(e)
        if not context.response_started: return await context.respond_status(500)

  async def _handle_http(self, context: HTTPContext):
    if context.path not in INDEX_PATHS: return await context.respond_status(404)
    if context.method != "GET": return await context.respond_status(405)
    await context.respond_text(self.render_index(), mime_type="text/html")

  def render_index(self) -> str:
    with create_screen(self.config.screen) as screen:
      content_html = screen.render().to_html()

    page = self.config.page_factory(HTMLFragment([]), UnescapedHTMLElement(content_html), HTMLFragment([]))
    with Session(self.config.screen, page) as page_session:
      page_session.init()
      return page_session.render().to_html()
