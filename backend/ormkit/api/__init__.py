"""API helpers."""

from .errors import register_exception_handlers, to_http

__all__ = ["register_exception_handlers", "to_http"]
