"""
Web layer: FastAPI routers, Jinja2 templates and request dependencies.
"""

from .app import create_app, run

__all__ = ["create_app", "run"]
