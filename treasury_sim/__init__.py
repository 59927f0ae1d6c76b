"""
Treasury Movement Simulator

Immediate and scheduled fund transfers across multi-currency accounts,
with static FX conversion, atomic balance mutation and per-currency
balance reporting. All monetary values use Decimal.
"""

__version__ = "1.0.0"
