"""
API Routers package.
"""

from . import sessions

__all__ = ["sessions"]
