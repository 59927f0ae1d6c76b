"""
Test suite for the transaction log

The log is newest-first and filtering never reorders entries.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from treasury_sim.currency import Currency
from treasury_sim.transactions import CompletedTransaction, TransactionLog


def make_transaction(tx_id, from_account, to_account, from_currency, to_currency,
                     amount='10', converted='10', rate='1'):
    return CompletedTransaction(
        id=tx_id,
        from_account=from_account,
        to_account=to_account,
        amount=Decimal(amount),
        converted_amount=Decimal(converted),
        from_currency=from_currency,
        to_currency=to_currency,
        note="",
        date=date(2024, 5, 1),
        rate=Decimal(rate)
    )


class TestCompletedTransaction:
    """Test CompletedTransaction record"""

    def test_is_immutable(self):
        transaction = make_transaction("t1", "A", "B", Currency.USD, Currency.USD)
        with pytest.raises(FrozenInstanceError):
            transaction.amount = Decimal('1')

    def test_to_dict(self):
        transaction = make_transaction(
            "t1", "A", "B", Currency.USD, Currency.KES,
            amount='10', converted='1470.0', rate='147.0'
        )
        data = transaction.to_dict()
        assert data["converted_amount"] == "1470.0"
        assert data["from_currency"] == "USD"
        assert data["to_currency"] == "KES"
        assert data["date"] == "2024-05-01"
        assert transaction.is_cross_currency

    def test_describe(self):
        transaction = make_transaction(
            "t1", "A", "B", Currency.USD, Currency.KES,
            amount='10', converted='1470', rate='147'
        )
        assert transaction.describe() == "A (USD) -> B (KES): USD 10.00 -> KES 1,470.00"


class TestTransactionLog:
    """Test log ordering and filtering"""

    def setup_method(self):
        self.log = TransactionLog()
        self.log.record(make_transaction("t1", "A", "B", Currency.USD, Currency.USD))
        self.log.record(make_transaction("t2", "B", "C", Currency.USD, Currency.KES))
        self.log.record(make_transaction("t3", "C", "D", Currency.KES, Currency.NGN))

    def test_newest_first(self):
        assert [t.id for t in self.log] == ["t3", "t2", "t1"]
        assert self.log.latest().id == "t3"
        assert len(self.log) == 3

    def test_query_without_filters(self):
        assert [t.id for t in self.log.query()] == ["t3", "t2", "t1"]

    def test_query_by_account_matches_sender_or_receiver(self):
        assert [t.id for t in self.log.query(account="B")] == ["t2", "t1"]
        assert [t.id for t in self.log.query(account="D")] == ["t3"]

    def test_query_by_currency_matches_either_side(self):
        assert [t.id for t in self.log.query(currency=Currency.KES)] == ["t3", "t2"]
        assert [t.id for t in self.log.query(currency=Currency.NGN)] == ["t3"]

    def test_query_combined_filters(self):
        assert [t.id for t in self.log.query(account="C", currency=Currency.USD)] == ["t2"]
        assert list(self.log.query(account="A", currency=Currency.NGN)) == []

    def test_query_is_lazy(self):
        results = self.log.query(account="B")
        assert next(results).id == "t2"

    def test_get(self):
        assert self.log.get("t2").from_account == "B"
        assert self.log.get("missing") is None
