"""
API package for photodupes.

Provides Flask routes and background scan orchestration for the web
interface.
"""

from __future__ import annotations

from .routes import api

__all__ = ['api']
