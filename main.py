"""
HAMA Backend
============
Entry point. Run with: uvicorn main:app --reload
or ``python main.py`` to use HOST / PORT from the environment.
"""

import uvicorn

from hama.api.app import create_app
from hama.config import settings

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.reload)
