"""
Catapult client errors.

Every failure raised by identity derivation, the binary codec, receipt mapping
and alias resolution is a local, deterministic caller-input error. None of them
subclass ValueError, so pydantic validators let them through unwrapped.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable numeric codes, grouped by hundreds per area."""

    OK = 0
    UNKNOWN = 1
    INTERNAL = 2

    # Naming
    INVALID_NAME = 100

    # Binary codec
    MALFORMED_PAYLOAD = 200

    # Receipts
    UNKNOWN_RECEIPT_TYPE = 300
    INVALID_STATEMENT = 301

    # Alias resolution
    ALIAS_NOT_FOUND = 400
    NO_APPLICABLE_BINDING = 401


class CatapultError(Exception):
    """
    Base class for all catapult client errors.

    Subclasses pin their `code`; `details` carries the offending offsets,
    heights or ids so callers can report without parsing the message.
    """

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        text = f"[{self.code.name}] {self.message}"
        if self.details:
            text += f" | Details: {self.details}"
        if self.cause:
            text += f" | Caused by: {self.cause}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class _CodedError(CatapultError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, details=details, cause=cause)


class InvalidNameError(_CodedError):
    """Namespace name is empty, too long, or uses characters outside [a-z0-9_-]."""
    code = ErrorCode.INVALID_NAME


class MalformedPayloadError(_CodedError):
    """Binary payload is truncated, has trailing bytes, or has inconsistent length fields."""
    code = ErrorCode.MALFORMED_PAYLOAD


class UnknownReceiptTypeError(_CodedError):
    """Receipt record carries a type discriminant outside the known receipt set."""
    code = ErrorCode.UNKNOWN_RECEIPT_TYPE


class InvalidStatementError(_CodedError):
    """Resolution statements cannot form a consistent index."""
    code = ErrorCode.INVALID_STATEMENT


class ResolutionError(_CodedError):
    """Base class for alias resolution failures."""


class UnresolvedAliasNotFoundError(ResolutionError):
    """The alias has no resolution entry at all."""
    code = ErrorCode.ALIAS_NOT_FOUND


class NoApplicableBindingError(ResolutionError):
    """The alias exists, but every binding comes after the queried receipt source."""
    code = ErrorCode.NO_APPLICABLE_BINDING


__all__ = [
    "ErrorCode",
    "CatapultError",
    "InvalidNameError",
    "MalformedPayloadError",
    "UnknownReceiptTypeError",
    "InvalidStatementError",
    "ResolutionError",
    "UnresolvedAliasNotFoundError",
    "NoApplicableBindingError",
]
