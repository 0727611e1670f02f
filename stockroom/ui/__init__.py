"""Textual user interface for stockroom."""
