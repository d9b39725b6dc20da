"""
Smart Bookmarks API package.

Provides the FastAPI application for the bookmark manager.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
