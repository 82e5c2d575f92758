# spotfinder/exceptions.py
"""
Expected, caller-recoverable errors raised by the services.
main.py renders every AppError as {"error": ..., "code": ..., **extra}.
Anything that is not an AppError is a 500.
"""

from typing import Iterable, Optional


class AppError(Exception):
    status_code = 500
    code = "error"

    def __init__(self, message: str, code: Optional[str] = None, **extra):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.extra = extra
        self.headers: dict = {}

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, **self.extra}


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"


class AuthError(AppError):
    """
    401. `reason` is one of missing | malformed | invalid | expired —
    the client shows "please log in", "log in again" or "invalid credentials" from it.
    """
    status_code = 401

    MISSING = "missing"
    MALFORMED = "malformed"
    INVALID = "invalid"
    EXPIRED = "expired"

    def __init__(self, reason: str, message: str):
        super().__init__(message, code=f"auth_{reason}")
        self.reason = reason
        self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ConflictError(AppError):
    status_code = 409
    code = "conflict"


class ProximityError(AppError):
    status_code = 403
    code = "too_far"

    def __init__(self, distance_km: float, max_km: float):
        distance_m = round(distance_km * 1000)
        max_m = round(max_km * 1000)
        super().__init__(
            f"You must be within {max_m}m of the location to report occupancy. "
            f"You are currently {distance_m}m away.",
            distance_m=distance_m,
            max_distance_m=max_m,
        )
        self.distance_km = distance_km
        self.max_km = max_km


class ReportingPermissionError(AppError):
    """Authenticated, but not entitled to submit reports."""
    status_code = 403
    code = "permission_denied"


class MethodNotAllowedError(AppError):
    status_code = 405
    code = "method_not_allowed"

    def __init__(self, allowed: Iterable[str]):
        self.allowed = sorted(set(allowed))
        super().__init__("Method Not Allowed", allowed=self.allowed)
        self.headers = {"Allow": ", ".join(self.allowed)}
