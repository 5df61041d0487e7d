"""ASGI entry point: ``uvicorn app:app``."""
from meetup.api.main import app

__all__ = ["app"]
