"""Validated active-record models on top of SQLAlchemy."""

__version__ = "0.1.0"
