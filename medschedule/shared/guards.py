"""Ownership guard shared by every mutating operation.

Answers one question: does the caller's identity own the doctor record that
owns the target entity. Missing session or missing doctor record fails closed.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..errors import NotAuthenticated, Unauthorized
from ..models import Doctor
from .context import CallerContext

logger = logging.getLogger(__name__)


def require_identity(ctx: CallerContext) -> str:
    if not ctx.is_authenticated:
        raise NotAuthenticated()
    return ctx.user_id


def find_caller_doctor(db: Session, ctx: CallerContext) -> Optional[Doctor]:
    """Doctor record for the caller, or None (read paths)"""
    if not ctx.is_authenticated:
        return None
    return db.query(Doctor).filter(Doctor.user_id == ctx.user_id).first()


def require_doctor_owner(db: Session, ctx: CallerContext, doctor_id: Optional[int]) -> Doctor:
    """Return the caller's doctor record if it is ``doctor_id``, else raise"""
    require_identity(ctx)
    doctor = find_caller_doctor(db, ctx)
    if doctor is None or doctor_id is None or doctor.id != doctor_id:
        logger.warning(f"⚠️ Caller {ctx.user_id} denied access to records of doctor {doctor_id}")
        raise Unauthorized()
    return doctor
