"""Patients domain - Patient records owned by doctors"""

from .router import router

__all__ = ["router"]
