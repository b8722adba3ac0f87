"""
Detour API Routers

Routers:
- redirect_router: Catch-all legacy catalogue redirect endpoint
"""

from .redirect_router import router as redirect_router

__all__ = [
    "redirect_router",
]
