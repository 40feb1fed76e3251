"""Pure loan amount derivation, no I/O.

A loan line either has a fixed conversion (oracle set to the zero address,
1 unit of collateral buys 1000 units of loan) or is quoted against a price
oracle, in which case ``gross = collateral / price``.
"""
from __future__ import annotations

import math
import re
from decimal import (
    ROUND_DOWN,
    ROUND_HALF_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)

from .models import LoanQuantities

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
FIXED_RATE_MULTIPLIER = 1000
AMOUNT_QUANTUM = Decimal(1).scaleb(-18)

_WORKING_PRECISION = 80
_MAX_GROSS_DIGITS = 40

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def is_zero_address(address: str | None) -> bool:
    """Return True for the zero-address sentinel (or an unset oracle)."""
    if not address:
        return True
    return address.lower() == ZERO_ADDRESS


def to_number(text: str) -> float | None:
    """Parse user text the way a browser ``Number()`` call would.

    Surrounding whitespace is ignored and an empty string is 0. Anything that
    is not a plain decimal literal returns None.
    """
    text = text.strip()
    if not text:
        return 0.0
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def count_decimals(text: str) -> int:
    """Effective number of fractional digits, exponent included.

    ``"1.25"`` has 2, ``"1e-19"`` has 19 and ``"1.5e3"`` has 0.
    """
    try:
        exponent = Decimal(text.strip()).as_tuple().exponent
    except InvalidOperation:
        return 0
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def _to_decimal(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def derive_loan(
    collateral_value: float | str | Decimal,
    oracle_address: str,
    price: float | None,
    origination_fee_rate: float,
) -> LoanQuantities:
    """Derive gross loan, origination fee and net loan for a collateral value.

    Amounts are Decimals quantized to the token's 18 decimals, the gross loan
    rounded down and the fee half-up, so ``net + fee == gross`` exactly.

    With a market oracle a missing, zero, negative or non-finite price makes
    the loan not computable: the result is ``LoanQuantities.invalid()``.
    So is a gross loan too large to represent at token precision.
    """
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        collateral = _to_decimal(collateral_value)

        if is_zero_address(oracle_address):
            gross = collateral * FIXED_RATE_MULTIPLIER
        else:
            if price is None or not math.isfinite(price) or price <= 0:
                return LoanQuantities.invalid()
            gross = collateral / _to_decimal(price)

        if gross.adjusted() > _MAX_GROSS_DIGITS:
            return LoanQuantities.invalid()

        gross = gross.quantize(AMOUNT_QUANTUM, rounding=ROUND_DOWN)
        fee = (gross * _to_decimal(origination_fee_rate)).quantize(
            AMOUNT_QUANTUM, rounding=ROUND_HALF_UP
        )
        net = gross - fee

    return LoanQuantities(
        gross_loan=gross,
        origination_fee_amount=fee,
        net_loan=net,
        is_valid=True,
    )
