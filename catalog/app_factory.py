"""Entry point for uvicorn/gunicorn (``uvicorn catalog.app_factory:app``)."""
from catalog.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
