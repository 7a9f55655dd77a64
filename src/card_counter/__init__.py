"""Summarize story points on kanban boards and chart their burndown."""

__version__ = "0.5.0"
