"""Browser front end for the checkers engine."""

from .app import create_app

__all__ = ["create_app"]
