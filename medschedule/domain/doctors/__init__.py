"""Doctors domain - Doctor profiles linked to accounts"""

from .router import router

__all__ = ["router"]
