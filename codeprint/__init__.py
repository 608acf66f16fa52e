"""Scan project source files and lay them out as compact, paginated Word documents."""

__version__ = "2.1.0"