"""Session and dispatch layer.

This package owns snapshot materialization and session lifecycle.
It chains per-file readers into one ordered record stream.
"""
