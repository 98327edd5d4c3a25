"""Todoo CLI - recurring task planning from the command line."""

__version__ = "0.3.0"
