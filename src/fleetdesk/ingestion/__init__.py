"""Ingestion layer.

This package contains the lenient parsers that turn form input and backend
rows into values the validated models accept.
"""

__all__: list[str] = []
