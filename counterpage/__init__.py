from counterpage.app import App as App, AppConfig as AppConfig
from counterpage.component import Component as Component, event_handler as event_handler
from counterpage.elements import CustomAttribute as CustomAttribute, El as El, Element as Element, HTMLFragment as HTMLFragment, \
  UnescapedHTMLElement as UnescapedHTMLElement, VEl as VEl
from counterpage.execution import ContractViolation as ContractViolation
from counterpage.page import Page as Page
from counterpage.screen import CounterScreen as CounterScreen, render_screen as render_screen
from counterpage.session import ScreenConfig as ScreenConfig, Session as Session, create_screen as create_screen, dispose_screen as dispose_screen
from counterpage.state import CounterState as CounterState, StateConsumer as StateConsumer
from counterpage.tree import QueryError as QueryError, RenderNode as RenderNode, RenderText as RenderText, RenderTree as RenderTree, \
  accessible_name as accessible_name, get_all_by_role as get_all_by_role, get_all_by_text as get_all_by_text, \
  get_by_alt_text as get_by_alt_text, get_by_role as get_by_role, get_by_text as get_by_text, query_all_by_role as query_all_by_role, \
  text_content as text_content
