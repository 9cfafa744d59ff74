"""
Async engine creation and session management for the clinic application.
"""

from .connection import DatabaseConfig, create_engine
from .session import SessionManager

__all__ = [
    "DatabaseConfig",
    "create_engine",
    "SessionManager",
]
