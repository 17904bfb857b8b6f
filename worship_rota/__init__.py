"""Worship team rotation and custom service scheduling API."""

__version__ = "1.0.0"
