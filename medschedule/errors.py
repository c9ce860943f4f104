"""Named failures raised by the service layer.

Each one is an ``HTTPException`` so services can raise it directly and FastAPI
renders it with the right status code.
"""

from fastapi import HTTPException


class NotAuthenticated(HTTPException):
    """No caller identity was presented"""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail)


class Unauthorized(HTTPException):
    """Caller is authenticated but does not own the target record"""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class Invalid(HTTPException):
    """Malformed or out-of-range value"""

    def __init__(self, detail: str = "Invalid request", status_code: int = 422):
        super().__init__(status_code=status_code, detail=detail)


class InvalidTransition(Invalid):
    """Requested appointment status change is not allowed from the current status"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            detail=f"Cannot change appointment status from '{current}' to '{requested}'",
            status_code=409,
        )
        self.current = current
        self.requested = requested


class Conflict(HTTPException):
    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=409, detail=detail)
