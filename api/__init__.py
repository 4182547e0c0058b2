"""
Club Events API package.

Provides the FastAPI application for publishing club events and taking
registrations.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
