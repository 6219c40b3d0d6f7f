"""
HTTP serving for generated worlds.

- FastAPI app factory exposing world JSON, map images and statistics
- uvicorn entry point
"""

from .api import create_app, main

__all__ = ["create_app", "main"]
