"""
Demo seed data: ten accounts across three currencies and the FX table
between them. The table is directional and deliberately not an exact
inverse in each direction (spread).
"""

from decimal import Decimal
from typing import List

from .accounts import Account
from .currency import Currency
from .fx import FxRateTable

SEED_ACCOUNTS = [
    ("Mpesa_KES_1", Currency.KES, "50000"),
    ("Mpesa_KES_2", Currency.KES, "30000"),
    ("Bank_KES_3", Currency.KES, "100000"),
    ("Bank_USD_1", Currency.USD, "20000"),
    ("Bank_USD_2", Currency.USD, "15000"),
    ("Wallet_USD_3", Currency.USD, "10000"),
    ("Bank_NGN_1", Currency.NGN, "800000"),
    ("Bank_NGN_2", Currency.NGN, "500000"),
    ("Wallet_NGN_3", Currency.NGN, "300000"),
    ("Reserve_NGN_4", Currency.NGN, "200000"),
]

SEED_FX_RATES = {
    Currency.KES: {Currency.USD: "0.0068", Currency.NGN: "5.7"},
    Currency.USD: {Currency.KES: "147.0", Currency.NGN: "840.0"},
    Currency.NGN: {Currency.KES: "0.175", Currency.USD: "0.0012"},
}


def seed_accounts() -> List[Account]:
    """Fresh copies of the demo accounts"""
    return [
        Account(identifier=identifier, currency=currency, balance=Decimal(balance))
        for identifier, currency, balance in SEED_ACCOUNTS
    ]


def seed_fx_rates() -> FxRateTable:
    return FxRateTable.from_nested(SEED_FX_RATES)
