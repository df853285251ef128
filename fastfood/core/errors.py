"""
Ordering error taxonomy.

Services raise these; the handlers registered in ``fastfood.main`` turn them
into JSON responses of the form ``{"detail": ..., "code": ..., **extra}``.
"""
from typing import Any, Dict, Optional


class OrderingError(Exception):
    """Base class for failures surfaced to the caller"""

    status_code = 400
    code = "INVALID_REQUEST"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_payload(self) -> Dict[str, Any]:
        payload = {"detail": self.message, "code": self.code}
        payload.update(self.extra)
        return payload


class InvalidRequest(OrderingError):
    status_code = 400
    code = "INVALID_REQUEST"


class PaymentMethodMissing(InvalidRequest):
    code = "PAYMENT_METHOD_MISSING"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        super().__init__(
            message or "Payment method is required to place an order. Set it in your profile.",
            **extra,
        )


class InvalidTransition(InvalidRequest):
    code = "INVALID_TRANSITION"


class Unauthorized(OrderingError):
    status_code = 401
    code = "UNAUTHORIZED"


class Forbidden(OrderingError):
    status_code = 403
    code = "FORBIDDEN"


class NotFound(OrderingError):
    status_code = 404
    code = "NOT_FOUND"


class Conflict(OrderingError):
    status_code = 409
    code = "CONFLICT"
