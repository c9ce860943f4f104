"""Notifications domain - Lifecycle notifications for doctors and patients"""

from .router import router

__all__ = ["router"]
