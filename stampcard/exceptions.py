"""Stampcard exceptions and store error translation."""

import logging

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.db import IntegrityError, OperationalError

logger = logging.getLogger(__name__)


class StampcardError(Exception):
    """
    Structured exception for card operations.

    Usage:
        try:
            CardService.redeem(card_id)
        except StampcardError as e:
            if e.code == "ALREADY_REDEEMED":
                show_already_redeemed()
    """

    _default_messages = {
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "BUSINESS_NOT_FOUND": "Business not found",
        "PROGRAM_NOT_FOUND": "Loyalty program not found",
        "CARD_NOT_FOUND": "Customer card not found",
        "ALREADY_ENROLLED": "Already enrolled in this loyalty program",
        "ALREADY_REDEEMED": "The reward was already redeemed",
        "INSUFFICIENT_STAMPS": "The card does not have enough stamps to redeem the reward",
        "INVALID_SLOTS": "Total stamp slots must be a positive number",
        "CODE_GENERATION_EXHAUSTED": "Unable to generate a unique card code. Please try again.",
        "ENROLLMENT_CONTENTION": "Could not reserve a card code. Please try again.",
        # Translated store failures
        "PERMISSION_DENIED": "Permission denied.",
        "UNAUTHENTICATED": "Authentication required. Please sign in and try again.",
        "NOT_FOUND": "Record not found. It may have been deleted.",
        "UNAVAILABLE": "The service is temporarily unavailable. Please try again.",
        "RESOURCE_EXHAUSTED": "Quota exceeded. Please try again later.",
        "DEADLINE_EXCEEDED": "The operation took too long. Please try again.",
        "FAILED_PRECONDITION": "Operation not valid in the current state. Please refresh.",
        "STORE_ERROR": "Unexpected storage error",
    }

    _retryable = frozenset({"UNAVAILABLE", "DEADLINE_EXCEEDED"})

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    @property
    def retryable(self) -> bool:
        """Whether the caller may reasonably retry the operation."""
        return self.code in self._retryable

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class CodeCollision(Exception):
    """Candidate code was reserved by someone else before commit. Internal."""

    def __init__(self, business_id, code: str):
        self.business_id = business_id
        self.code = code
        super().__init__(f"Code {code} already reserved for business {business_id}")


# Provider error codes (as carried by an exception's ``code`` attribute)
_PROVIDER_CODES = {
    "permission-denied": "PERMISSION_DENIED",
    "unauthenticated": "UNAUTHENTICATED",
    "not-found": "NOT_FOUND",
    "unavailable": "UNAVAILABLE",
    "resource-exhausted": "RESOURCE_EXHAUSTED",
    "deadline-exceeded": "DEADLINE_EXCEEDED",
    "failed-precondition": "FAILED_PRECONDITION",
}


def store_error_code(exc: BaseException) -> str:
    """Provider-style code for a store exception ("cancelled", "unavailable", ...)."""
    code = getattr(exc, "code", None)
    if isinstance(code, str) and (code in _PROVIDER_CODES or code == "cancelled"):
        return code
    if isinstance(exc, PermissionDenied):
        return "permission-denied"
    if isinstance(exc, ObjectDoesNotExist):
        return "not-found"
    if isinstance(exc, IntegrityError):
        return "failed-precondition"
    if isinstance(exc, OperationalError):
        return "unavailable"
    if isinstance(exc, TimeoutError):
        return "deadline-exceeded"
    return "unknown"


def translate_store_error(exc: BaseException, operation: str) -> StampcardError | None:
    """
    Map a store failure to a user-facing StampcardError.

    Returns None for cancelled operations (client went away mid-read), which
    callers treat as benign. StampcardError instances pass through unchanged.

    Usage:
        try:
            ...
        except DatabaseError as exc:
            error = translate_store_error(exc, "add stamp")
            if error is not None:
                raise error from exc
    """
    if isinstance(exc, StampcardError):
        return exc

    code = store_error_code(exc)
    if code == "cancelled":
        logger.warning("Store operation %s was cancelled", operation)
        return None

    logger.error("Store error during %s: %s", operation, exc)
    if code in _PROVIDER_CODES:
        return StampcardError(_PROVIDER_CODES[code], operation=operation)
    return StampcardError(
        "STORE_ERROR",
        message=f"Error while trying to {operation}: {exc}",
        operation=operation,
    )
