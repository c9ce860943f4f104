"""Appointments domain - Appointment lifecycle workflow"""

from .router import router

__all__ = ["router"]
