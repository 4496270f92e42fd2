import re
from typing import TypeVar

T = TypeVar("T")

Matcher = str | re.Pattern[str]

def normalize_text(text: str): return " ".join(text.split())

def matches(matcher: Matcher, text: str):
  """Exact match on whitespace-normalized text for strings, search for compiled patterns."""
  text = normalize_text(text)
  if isinstance(matcher, str): return text == normalize_text(matcher)
  else: return matcher.search(text) is not None
