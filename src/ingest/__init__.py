"""Dataset file ingestion.

This package classifies snapshot files and streams records out of them.
Each reader turns one byte source into a lazy sequence of records.
"""
