"""Per-request caller context passed explicitly into every service operation"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CallerContext:
    """Resolved caller identity for one request.

    ``user_id`` is the verified account identifier (Firebase UID), or ``None``
    for the unauthenticated sentinel. Anonymous Firebase sessions used by the
    patient portal are authenticated identities like any other.
    """

    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @classmethod
    def for_user(cls, user_id: str):
        return cls(user_id=user_id)


UNAUTHENTICATED = CallerContext()
