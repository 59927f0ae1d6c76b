"""
Transfer errors

Every rejection raised by the transfer engine is a TransferError carrying
a TransferErrorKind, so callers can branch on `error.kind` without
matching on exception classes.
"""

from enum import Enum
from typing import Any, Dict, Optional


class TransferErrorKind(Enum):
    """Reasons a transfer can be rejected"""
    ACCOUNT_NOT_FOUND = "account_not_found"
    SAME_ACCOUNT = "same_account"
    INVALID_AMOUNT = "invalid_amount"
    PAST_DATE = "past_date"
    NO_FX_ROUTE = "no_fx_route"
    INSUFFICIENT_FUNDS = "insufficient_funds"


class TransferError(Exception):
    """Base class for rejected transfers. Never leaves state mutated."""

    kind: TransferErrorKind

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class AccountNotFoundError(TransferError):
    kind = TransferErrorKind.ACCOUNT_NOT_FOUND


class SameAccountError(TransferError):
    kind = TransferErrorKind.SAME_ACCOUNT


class InvalidAmountError(TransferError):
    kind = TransferErrorKind.INVALID_AMOUNT


class PastDateError(TransferError):
    kind = TransferErrorKind.PAST_DATE


class NoFxRouteError(TransferError):
    kind = TransferErrorKind.NO_FX_ROUTE


class InsufficientFundsError(TransferError):
    kind = TransferErrorKind.INSUFFICIENT_FUNDS
