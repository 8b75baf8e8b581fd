"""HTTP API for laptop-saw."""

from .app import create_app, register_exception_handlers

__all__ = ["create_app", "register_exception_handlers"]
