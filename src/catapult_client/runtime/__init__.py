"""Runtime helpers for the catapult client core"""

from .errors import (
    ErrorCode,
    CatapultError,
    InvalidNameError,
    MalformedPayloadError,
    UnknownReceiptTypeError,
    InvalidStatementError,
    ResolutionError,
    UnresolvedAliasNotFoundError,
    NoApplicableBindingError,
)

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
