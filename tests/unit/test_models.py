"""Unit tests for data models."""
from __future__ import annotations

import pytest

from line_loans.models import (
    CollateralInput,
    FormLimits,
    LoanQuantities,
    Notification,
    ProtocolParams,
)


class TestCollateralInput:
    def test_empty(self) -> None:
        c = CollateralInput.empty()
        assert c.raw_text == ""
        assert c.numeric_value == 0.0
        assert c.is_valid is False

    def test_frozen(self) -> None:
        c = CollateralInput(raw_text="1", numeric_value=1.0, is_valid=True)
        with pytest.raises(AttributeError):
            c.raw_text = "2"  # type: ignore[misc]


class TestLoanQuantities:
    def test_invalid_is_all_zero(self) -> None:
        loan = LoanQuantities.invalid()
        assert loan.gross_loan == 0
        assert loan.origination_fee_amount == 0
        assert loan.net_loan == 0
        assert loan.is_valid is False

    def test_equality(self) -> None:
        assert LoanQuantities.invalid() == LoanQuantities.invalid()


class TestProtocolParams:
    def test_frozen(self, fixed_rate_params: ProtocolParams) -> None:
        with pytest.raises(AttributeError):
            fixed_rate_params.origination_fee_rate = 0.5  # type: ignore[misc]


class TestDefaults:
    def test_form_limits(self) -> None:
        limits = FormLimits()
        assert limits.max_decimals == 18
        assert limits.max_collateral == 1_000_000
        assert limits.init_collateral == 1

    def test_notification(self) -> None:
        n = Notification(title="Hi")
        assert n.type == "info"
        assert n.description == ""
