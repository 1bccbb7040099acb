"""Bitmaps, linked lists and hash tables with a command interpreter, and a small job-control shell."""

__version__ = "0.1.0"