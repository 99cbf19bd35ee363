"""Domain layer primitives (exceptions)."""

from . import exceptions

__all__ = ["exceptions"]
