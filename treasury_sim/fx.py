"""
FX Rate Table

Static (from, to) -> rate lookup used for currency conversion. The table
makes no symmetry or transitivity promise: a missing pair simply means
the conversion is unsupported. Same-currency conversion is identity and
never consults the table.
"""

from decimal import Decimal, InvalidOperation, Overflow
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .currency import Currency, to_decimal
from .errors import InvalidAmountError, NoFxRouteError

ONE = Decimal('1')

CurrencyPair = Tuple[Currency, Currency]


class FxRateTable:
    """Immutable table of directional exchange rates"""

    def __init__(self, rates: Optional[Mapping[CurrencyPair, object]] = None):
        self._rates: Dict[CurrencyPair, Decimal] = {}
        for (from_currency, to_currency), raw_rate in (rates or {}).items():
            rate = to_decimal(raw_rate)
            if not rate.is_finite() or rate <= 0:
                raise ValueError(
                    f"Rate for {from_currency.code}->{to_currency.code} must be positive, got {raw_rate}"
                )
            if from_currency == to_currency:
                raise ValueError(f"Same-currency rate for {from_currency.code} is implicit")
            self._rates[(from_currency, to_currency)] = rate

    @classmethod
    def from_nested(cls, rates: Mapping[Currency, Mapping[Currency, object]]) -> 'FxRateTable':
        """Build from {from: {to: rate}} form"""
        return cls({
            (from_currency, to_currency): rate
            for from_currency, targets in rates.items()
            for to_currency, rate in targets.items()
        })

    def rate(self, from_currency: Currency, to_currency: Currency) -> Optional[Decimal]:
        """Get the rate for a pair, or None when no route exists"""
        if from_currency == to_currency:
            return ONE
        return self._rates.get((from_currency, to_currency))

    def has_route(self, from_currency: Currency, to_currency: Currency) -> bool:
        return self.rate(from_currency, to_currency) is not None

    def convert(
        self,
        amount: Decimal,
        from_currency: Currency,
        to_currency: Currency
    ) -> Tuple[Decimal, Decimal]:
        """
        Convert an amount between currencies

        Args:
            amount: Amount in from_currency
            from_currency: Source currency
            to_currency: Target currency

        Returns:
            Tuple of (converted amount, rate applied). Same currency returns
            the amount unchanged with rate 1.

        Raises:
            NoFxRouteError: If the table has no rate for the pair
            InvalidAmountError: If the converted amount overflows the Decimal context
        """
        if from_currency == to_currency:
            return amount, ONE

        rate = self._rates.get((from_currency, to_currency))
        if rate is None:
            raise NoFxRouteError(
                f"No FX rate for {from_currency.code} -> {to_currency.code}",
                {"from_currency": from_currency.code, "to_currency": to_currency.code}
            )
        try:
            return amount * rate, rate
        except (InvalidOperation, Overflow):
            raise InvalidAmountError(
                f"Amount {amount} cannot be converted {from_currency.code} -> {to_currency.code}",
                {"amount": str(amount), "rate": str(rate)}
            )

    def pairs(self) -> Iterator[CurrencyPair]:
        return iter(self._rates)

    def as_dict(self) -> Dict[CurrencyPair, Decimal]:
        return dict(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __contains__(self, pair: object) -> bool:
        return pair in self._rates
