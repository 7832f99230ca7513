"""State/store layer.

This package is the single source of truth for the committed vehicle
collection and for which console screen is visible.
"""
