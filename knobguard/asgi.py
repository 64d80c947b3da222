# knobguard/asgi.py
"""
ASGI entrypoint para Uvicorn.

Exportamos tanto `fastapi_app` como `app` para que funcionen indistintamente:
  - uvicorn knobguard.asgi:fastapi_app ...
  - uvicorn knobguard.asgi:app ...
"""
from .app import app as fastapi_app

app = fastapi_app
