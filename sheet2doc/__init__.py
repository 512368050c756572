"""Transcribe one spreadsheet row into a heading/paragraph document."""

__version__ = "0.1.0"
