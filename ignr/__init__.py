"""Detect a project's technologies and generate its .gitignore."""

__version__ = "0.1.0"
