import logging, sys
from counterpage import create_screen, get_by_role, text_content

logging.basicConfig(level=logging.DEBUG)

clicks = int(sys.argv[1]) if len(sys.argv) > 1 else 3

with create_screen() as screen:
  button = get_by_role(screen.render(), "button")
  for _ in range(clicks):
    screen.activate(button)
  print(text_content(get_by_role(screen.render(), "button")))
  print(screen.render().to_html())
