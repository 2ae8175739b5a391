"""Roster, availability and selection tools for youth sports teams."""

__version__ = "0.1.0"
