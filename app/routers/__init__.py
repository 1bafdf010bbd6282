"""
API Routers
"""

from app.routers import kiosks, messages

__all__ = ["kiosks", "messages"]
