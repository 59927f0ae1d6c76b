"""
Shared treasury state

The ledger, the transaction log and the cached currency totals travel
together as one object handed to the engine, the scheduler and the
reporting layer.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .accounts import Account, AccountLedger
from .reporting import BalanceAggregator
from .transactions import TransactionLog


@dataclass
class TreasuryState:
    ledger: AccountLedger = field(default_factory=AccountLedger)
    log: TransactionLog = field(default_factory=TransactionLog)
    aggregator: Optional[BalanceAggregator] = None

    def __post_init__(self):
        if self.aggregator is None:
            self.aggregator = BalanceAggregator(self.ledger)
        elif self.aggregator.ledger is not self.ledger:
            raise ValueError("Aggregator must read the same ledger")

    @classmethod
    def with_accounts(cls, accounts: Iterable[Account]) -> 'TreasuryState':
        return cls(ledger=AccountLedger(list(accounts)))
