"""Offline-first notes: a note model, local storage with a sync queue, a REST API, HTML views, and small extras."""

__version__ = "0.1.0"