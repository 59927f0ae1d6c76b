"""
Transaction Log Module

Append-only record of completed transfers, newest first. Entries are
immutable facts: once recorded they are never changed or removed.
"""

from decimal import Decimal
from datetime import date
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from .currency import Currency, format_amount


@dataclass(frozen=True)
class CompletedTransaction:
    """
    Completed transfer between two accounts
    `amount` is in the source currency, `converted_amount` in the target
    """
    id: str
    from_account: str
    to_account: str
    amount: Decimal
    converted_amount: Decimal
    from_currency: Currency
    to_currency: Currency
    note: str
    date: date
    rate: Decimal = Decimal('1')
    scheduled_id: Optional[str] = None  # Set when executed by the scheduler

    @property
    def is_cross_currency(self) -> bool:
        return self.from_currency != self.to_currency

    def involves_account(self, identifier: str) -> bool:
        return identifier in (self.from_account, self.to_account)

    def involves_currency(self, currency: Currency) -> bool:
        return currency in (self.from_currency, self.to_currency)

    def describe(self) -> str:
        """One-line summary, e.g. 'A (USD) -> B (KES): USD 10.00 -> KES 1,470.00'"""
        return (
            f"{self.from_account} ({self.from_currency.code}) -> "
            f"{self.to_account} ({self.to_currency.code}): "
            f"{format_amount(self.amount, self.from_currency)} -> "
            f"{format_amount(self.converted_amount, self.to_currency)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from_account": self.from_account,
            "to_account": self.to_account,
            "amount": str(self.amount),
            "converted_amount": str(self.converted_amount),
            "from_currency": self.from_currency.code,
            "to_currency": self.to_currency.code,
            "rate": str(self.rate),
            "note": self.note,
            "date": self.date.isoformat(),
            "scheduled_id": self.scheduled_id,
        }


class TransactionLog:
    """Newest-first log of completed transactions"""

    def __init__(self):
        self._entries: List[CompletedTransaction] = []

    def record(self, transaction: CompletedTransaction) -> None:
        """Prepend a completed transaction"""
        self._entries.insert(0, transaction)

    def query(
        self,
        account: Optional[str] = None,
        currency: Optional[Currency] = None
    ) -> Iterator[CompletedTransaction]:
        """
        Lazily iterate entries matching the filters, newest first

        Args:
            account: Keep entries where this account is the sender or receiver
            currency: Keep entries where this is the source or target currency
        """
        for transaction in list(self._entries):
            if account and not transaction.involves_account(account):
                continue
            if currency and not transaction.involves_currency(currency):
                continue
            yield transaction

    def latest(self) -> Optional[CompletedTransaction]:
        return self._entries[0] if self._entries else None

    def get(self, transaction_id: str) -> Optional[CompletedTransaction]:
        for transaction in self._entries:
            if transaction.id == transaction_id:
                return transaction
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CompletedTransaction]:
        return iter(list(self._entries))
