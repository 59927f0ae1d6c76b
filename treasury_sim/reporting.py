"""
Balance Reporting Module

Per-currency balance totals derived from the account ledger. Totals are
always recomputed from the accounts, never patched incrementally.
"""

from decimal import Decimal
from typing import Dict, Optional

from .accounts import AccountLedger
from .currency import Currency, ZERO, format_amount


CurrencyTotals = Dict[Currency, Decimal]


def currency_totals(ledger: AccountLedger) -> CurrencyTotals:
    """
    Sum account balances grouped by currency

    Currencies with no accounts have no entry.
    """
    totals: CurrencyTotals = {}
    for account in ledger.list_accounts():
        totals[account.currency] = totals.get(account.currency, ZERO) + account.balance
    return totals


class BalanceAggregator:
    """
    Cached currency totals

    `refresh()` re-derives the totals from the ledger and is called right
    after every committed transfer; `totals()` returns the cached copy.
    """

    def __init__(self, ledger: AccountLedger):
        self.ledger = ledger
        self._totals: Optional[CurrencyTotals] = None
        self.refresh_count = 0

    def refresh(self) -> CurrencyTotals:
        self._totals = currency_totals(self.ledger)
        self.refresh_count += 1
        return dict(self._totals)

    def invalidate(self) -> None:
        self._totals = None

    def totals(self) -> CurrencyTotals:
        if self._totals is None:
            return self.refresh()
        return dict(self._totals)

    def formatted(self) -> Dict[str, str]:
        """Totals keyed by currency code, formatted for display"""
        return {
            currency.code: format_amount(amount, currency)
            for currency, amount in self.totals().items()
        }
