import logging, os
import uvicorn
from counterpage import App

logging.basicConfig(level=logging.DEBUG)

app = App()
uvicorn.run(app, host=os.getenv("COUNTERPAGE_HOST", "127.0.0.1"), port=int(os.getenv("COUNTERPAGE_PORT", "8000")))
