"""
Account Ledger Module

Holds the treasury accounts and owns balance mutation. Readers get copies
of account records; the only write path is `apply_transfer`, called by the
transfer engine inside `atomic()` so the debit and credit land together
or not at all.
"""

from decimal import Decimal
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional
from contextlib import contextmanager

from .currency import Currency, ZERO, to_decimal
from .errors import AccountNotFoundError, InsufficientFundsError


@dataclass
class Account:
    """
    Treasury account denominated in a single currency
    Balance is never negative after a committed operation
    """
    identifier: str
    currency: Currency
    balance: Decimal = ZERO

    def __post_init__(self):
        if not self.identifier:
            raise ValueError("Account identifier must be non-empty")
        if not isinstance(self.balance, Decimal):
            self.balance = to_decimal(self.balance)
        if not self.balance.is_finite() or self.balance < ZERO:
            raise ValueError(f"Account {self.identifier} balance must be a non-negative number")

    def can_cover(self, amount: Decimal) -> bool:
        """Check if the balance covers a debit of `amount`"""
        return self.balance >= amount


class AccountLedger:
    """
    Mapping of account identifier to account record
    Insertion order is preserved for listing
    """

    def __init__(self, accounts: Optional[List[Account]] = None):
        self._accounts: Dict[str, Account] = {}
        for account in accounts or []:
            self.create_account(account.identifier, account.currency, account.balance)

    def create_account(
        self,
        identifier: str,
        currency: Currency,
        opening_balance: Decimal = ZERO
    ) -> Account:
        """
        Open an account (initialisation only)

        Raises:
            ValueError: If the identifier is already taken or the balance is negative
        """
        if identifier in self._accounts:
            raise ValueError(f"Account {identifier} already exists")

        account = Account(identifier=identifier, currency=currency, balance=opening_balance)
        self._accounts[identifier] = account
        return replace(account)

    def get_account(self, identifier: str) -> Optional[Account]:
        """Get a copy of an account, or None"""
        account = self._accounts.get(identifier)
        return replace(account) if account else None

    def require_account(self, identifier: str) -> Account:
        """Get a copy of an account or raise AccountNotFoundError"""
        account = self.get_account(identifier)
        if account is None:
            raise AccountNotFoundError(
                f"Account {identifier} not found",
                {"account": identifier}
            )
        return account

    def get_balance(self, identifier: str) -> Decimal:
        return self.require_account(identifier).balance

    def list_accounts(self) -> List[Account]:
        """Copies of all accounts in creation order"""
        return [replace(account) for account in self._accounts.values()]

    def currencies(self) -> List[Currency]:
        """Distinct currencies held, in order of first appearance"""
        seen: List[Currency] = []
        for account in self._accounts.values():
            if account.currency not in seen:
                seen.append(account.currency)
        return seen

    @contextmanager
    def atomic(self):
        """
        Context manager for atomic balance updates

        Balances are snapshotted on entry and restored if the block raises.
        """
        snapshot = {identifier: account.balance for identifier, account in self._accounts.items()}
        try:
            yield
        except Exception:
            for identifier, balance in snapshot.items():
                self._accounts[identifier].balance = balance
            raise

    def apply_transfer(
        self,
        from_identifier: str,
        to_identifier: str,
        debit_amount: Decimal,
        credit_amount: Decimal
    ) -> None:
        """
        Debit one account and credit another

        Callers must hold `atomic()`; this method re-checks funds so the
        no-overdraft invariant holds even if validation was skipped.

        Raises:
            AccountNotFoundError: If either account is missing
            InsufficientFundsError: If the debit would overdraw the source
        """
        from_account = self._accounts.get(from_identifier)
        to_account = self._accounts.get(to_identifier)
        if from_account is None or to_account is None:
            missing = from_identifier if from_account is None else to_identifier
            raise AccountNotFoundError(f"Account {missing} not found", {"account": missing})

        if not from_account.can_cover(debit_amount):
            raise InsufficientFundsError(
                f"Insufficient funds in {from_identifier}",
                {"account": from_identifier, "balance": str(from_account.balance),
                 "requested": str(debit_amount)}
            )

        from_account.balance -= debit_amount
        to_account.balance += credit_amount

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self.list_accounts())
