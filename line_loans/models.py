"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CollateralInput:
    """Collateral field contents as typed by the user."""

    raw_text: str
    numeric_value: float
    is_valid: bool

    @classmethod
    def empty(cls) -> CollateralInput:
        return cls(raw_text="", numeric_value=0.0, is_valid=False)


@dataclass(frozen=True)
class LoanQuantities:
    """Loan amounts derived from a collateral value, at token precision."""

    gross_loan: Decimal
    origination_fee_amount: Decimal
    net_loan: Decimal
    is_valid: bool

    @classmethod
    def invalid(cls) -> LoanQuantities:
        return cls(
            gross_loan=Decimal(0),
            origination_fee_amount=Decimal(0),
            net_loan=Decimal(0),
            is_valid=False,
        )


@dataclass(frozen=True)
class ProtocolParams:
    """Protocol parameter snapshot used for one derivation."""

    oracle_address: str
    origination_fee_rate: float
    interest_rate_yearly: float


@dataclass(frozen=True)
class FormLimits:
    """Hard input filter applied before any validation."""

    max_decimals: int = 18
    max_collateral: float = 1_000_000
    init_collateral: float = 1


@dataclass(frozen=True)
class Notification:
    """User-facing notification payload."""

    title: str
    type: str = "info"
    description: str = ""
