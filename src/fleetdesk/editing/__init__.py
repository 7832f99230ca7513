"""Draft editing workflow shared by vehicle and profile edits."""

from fleetdesk.editing.draft import DraftEditor, Persister, Validator

__all__ = ["DraftEditor", "Persister", "Validator"]
