"""Doctor service - Business logic for doctor profiles"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import Conflict, NotFound
from ...models import Doctor
from ...shared.context import CallerContext
from ...shared.guards import require_doctor_owner, require_identity
from .repository import DoctorRepository
from .schemas import DoctorProfileBase, DoctorProfileCreate, DoctorProfileUpdate

logger = logging.getLogger(__name__)


def _profile_fields(data: DoctorProfileBase) -> dict:
    return {
        "name": data.name,
        "specialization": data.specialization,
        "phone": data.phone,
        "clinic_address": data.clinicAddress,
        "working_hours_start": data.workingHours.start,
        "working_hours_end": data.workingHours.end,
        "working_days": data.workingDays,
    }


class DoctorService:
    """Service layer for doctor profile business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DoctorRepository()

    def create_doctor_profile(self, ctx: CallerContext, data: DoctorProfileCreate) -> Doctor:
        """Create the caller's doctor profile (one per account)"""
        user_id = require_identity(ctx)

        if self.repo.get_doctor_by_user_id(self.db, user_id):
            raise Conflict("Doctor profile already exists")

        doctor = self.repo.create_doctor(self.db, user_id, **_profile_fields(data))
        logger.info(f"🩺 Doctor profile {doctor.id} created for account {user_id}")
        return doctor

    def get_doctor_profile(self, ctx: CallerContext) -> Optional[Doctor]:
        """Caller's doctor profile, or None when there is none"""
        if not ctx.is_authenticated:
            return None
        return self.repo.get_doctor_by_user_id(self.db, ctx.user_id)

    def get_doctor_by_id(self, doctor_id: int) -> Doctor:
        doctor = self.repo.get_doctor_by_id(self.db, doctor_id)
        if not doctor:
            raise NotFound("Doctor not found")
        return doctor

    def update_doctor_profile(
        self, ctx: CallerContext, doctor_id: int, data: DoctorProfileUpdate
    ) -> Doctor:
        """Replace a doctor profile; owner only"""
        doctor = require_doctor_owner(self.db, ctx, doctor_id)
        return self.repo.update_doctor(self.db, doctor, **_profile_fields(data))
