"""
API v1 package.

Contains the versioned private routes for the name registration API.
"""

from src.api.v1.routes import router

__all__ = ["router"]
