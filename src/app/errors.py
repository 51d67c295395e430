"""Error codes returned by use cases

Every code belongs to exactly one kind; the API layer maps the kind to an HTTP
status. Persistence failures never expose their internal reason to callers.
"""

from enum import Enum
from typing import Optional
from libs.result import Error


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DELIVERY = "delivery"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    PERSISTENCE = "persistence"


class ErrorCode(str, Enum):
    # Validation
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_LINE_ITEM = "INVALID_LINE_ITEM"
    UNKNOWN_CATALOG_REFERENCE = "UNKNOWN_CATALOG_REFERENCE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    GUEST_EMAIL_MISSING = "GUEST_EMAIL_MISSING"

    # Not found
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    MENU_ITEM_NOT_FOUND = "MENU_ITEM_NOT_FOUND"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    SETTINGS_NOT_FOUND = "SETTINGS_NOT_FOUND"

    # Conflict
    ORDER_ALREADY_INVOICED = "ORDER_ALREADY_INVOICED"
    NUMBER_GENERATION_EXHAUSTED = "NUMBER_GENERATION_EXHAUSTED"
    CATALOG_ENTRY_IN_USE = "CATALOG_ENTRY_IN_USE"

    # Delivery
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"

    # Access
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"

    # Persistence
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


_KIND_BY_CODE = {
    ErrorCode.INVALID_REQUEST: ErrorKind.VALIDATION,
    ErrorCode.INVALID_LINE_ITEM: ErrorKind.VALIDATION,
    ErrorCode.UNKNOWN_CATALOG_REFERENCE: ErrorKind.VALIDATION,
    ErrorCode.INVALID_DATE_RANGE: ErrorKind.VALIDATION,
    ErrorCode.GUEST_EMAIL_MISSING: ErrorKind.VALIDATION,
    ErrorCode.ORDER_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.INVOICE_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.MENU_ITEM_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.SERVICE_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.SETTINGS_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.ORDER_ALREADY_INVOICED: ErrorKind.CONFLICT,
    ErrorCode.NUMBER_GENERATION_EXHAUSTED: ErrorKind.CONFLICT,
    ErrorCode.CATALOG_ENTRY_IN_USE: ErrorKind.CONFLICT,
    ErrorCode.EMAIL_DELIVERY_FAILED: ErrorKind.DELIVERY,
    ErrorCode.UNAUTHENTICATED: ErrorKind.AUTHENTICATION,
    ErrorCode.FORBIDDEN: ErrorKind.PERMISSION,
    ErrorCode.PERSISTENCE_ERROR: ErrorKind.PERSISTENCE,
}


def kind_of(code: str) -> ErrorKind:
    """Kind of an error code; unknown codes are treated as persistence failures"""
    try:
        return _KIND_BY_CODE[ErrorCode(code)]
    except ValueError:
        return ErrorKind.PERSISTENCE


def error(code: ErrorCode, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code.value, message=message, reason=reason)


def persistence_error(message: str, exc: BaseException) -> Error:
    return Error(
        code=ErrorCode.PERSISTENCE_ERROR.value,
        message=message,
        reason=f"{type(exc).__name__}: {exc}",
    )


class ConstraintViolationError(Exception):
    """Raised by repositories when a write violates a database constraint"""
