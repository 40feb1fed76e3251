"""Open-loan form: collateral validation state machine and submit flow.

The form state is an immutable ``FormState`` advanced by the pure
``transition`` function. ``OpenLoanForm`` holds the current state for one
view instance and wires it to the external collaborators (price feed,
params store, transaction submitter, notifiers, metrics).

States of the collateral field::

    Empty --> Invalid <--> Valid

Text that fails the hard input filter (too many decimals, too large, not a
number) is dropped and the previous state is kept.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable

from ..calculator import count_decimals, derive_loan, to_number
from ..interfaces.metrics import MetricsSink
from ..interfaces.notifier import Notifier
from ..interfaces.params_store import ParamsStore
from ..interfaces.price_feed import PriceFeed
from ..interfaces.transaction import TransactionSubmitter
from ..models import (
    CollateralInput,
    FormLimits,
    LoanQuantities,
    Notification,
    ProtocolParams,
)
from ..notifications.errors import classify_submission_error
from ..units import format_amount, format_percent, parse_units

logger = logging.getLogger(__name__)

DECIMAL_SENTINELS = (".", ",")
DECIMAL_PLACEHOLDER = "0."
SUBMIT_KEYS = ("Enter", "NumpadEnter")


@dataclass(frozen=True)
class FormState:
    collateral: CollateralInput = field(default_factory=CollateralInput.empty)
    loan: LoanQuantities = field(default_factory=LoanQuantities.invalid)

    @property
    def is_empty(self) -> bool:
        return not self.collateral.raw_text

    @property
    def is_submit_enabled(self) -> bool:
        return (
            self.collateral.is_valid
            and self.loan.is_valid
            and self.loan.gross_loan != 0
            and self.collateral.numeric_value != 0
        )


def transition(
    state: FormState,
    raw_text: str,
    params: ProtocolParams,
    price: float | None,
    limits: FormLimits = FormLimits(),
) -> FormState:
    """Advance the form for new collateral text."""
    text = raw_text.strip()

    if text in DECIMAL_SENTINELS:
        return FormState(
            collateral=CollateralInput(
                raw_text=DECIMAL_PLACEHOLDER, numeric_value=0.0, is_valid=False
            ),
            loan=LoanQuantities.invalid(),
        )

    number = to_number(text)
    if (
        number is None
        or count_decimals(text) > limits.max_decimals
        or number > limits.max_collateral
    ):
        return state

    if number <= 0:
        return FormState(
            collateral=CollateralInput(raw_text=text, numeric_value=number, is_valid=False),
            loan=LoanQuantities.invalid(),
        )

    loan = derive_loan(
        Decimal(text), params.oracle_address, price, params.origination_fee_rate
    )
    return FormState(
        collateral=CollateralInput(raw_text=text, numeric_value=number, is_valid=True),
        loan=loan,
    )


def recompute_text(state: FormState, limits: FormLimits = FormLimits()) -> str:
    """Collateral text to re-run the machine with after a price change.

    Keeps the last numeric collateral; an empty, zero or placeholder field
    falls back to the default collateral.
    """
    if state.collateral.raw_text and state.collateral.numeric_value:
        return state.collateral.raw_text
    return f"{limits.init_collateral:g}"


@dataclass(frozen=True)
class LoanFormDisplay:
    """Everything the view renders, already formatted."""

    collateral_text: str
    field_error: bool
    interest_rate: str
    origination_fee_rate: str
    loan_amount: str
    origination_fee_amount: str
    net_loan: str
    send_label: str
    submit_enabled: bool
    loading: bool


class OpenLoanForm:
    """View-model for the open-loan form."""

    def __init__(
        self,
        params_store: ParamsStore,
        price_feed: PriceFeed,
        submitter: TransactionSubmitter,
        notifiers: list[Notifier] | None = None,
        metrics: MetricsSink | None = None,
        limits: FormLimits = FormLimits(),
        classify_error: Callable[[BaseException], Notification] = classify_submission_error,
        symbol: str = "LINE",
        collateral_symbol: str = "GBYTE",
    ) -> None:
        self._params_store = params_store
        self._price_feed = price_feed
        self._submitter = submitter
        self._notifiers: list[Notifier] = list(notifiers or [])
        self._metrics = metrics
        self._limits = limits
        self._classify_error = classify_error
        self.symbol = symbol
        self.collateral_symbol = collateral_symbol

        self._state = FormState()
        self.loading = False

    @property
    def state(self) -> FormState:
        return self._state

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def mount(self) -> None:
        """Fill the field with the default collateral for the current price."""
        self.on_price_change(self._price_feed.current_price())

    def on_collateral_input(self, raw_text: str) -> None:
        if self.loading:
            return
        self._apply(raw_text, self._price_feed.current_price())

    def on_price_change(self, price: float | None) -> None:
        self._apply(recompute_text(self._state, self._limits), price)

    def refresh_price(self) -> None:
        """Re-derive the loan from whatever price the feed holds now."""
        self.on_price_change(self._price_feed.current_price())

    def _apply(self, raw_text: str, price: float | None) -> None:
        params = self._params_store.protocol_params()
        new_state = transition(self._state, raw_text, params, price, self._limits)
        if new_state is self._state:
            logger.debug("Collateral input rejected: %r", raw_text)
        self._state = new_state

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def current_loan_quantities(self) -> LoanQuantities:
        return self._state.loan

    def is_submit_enabled(self) -> bool:
        return self._state.is_submit_enabled

    def validated_collateral_amount(self) -> str:
        """Collateral string for the submitter, empty when submit is disabled."""
        if not self._state.is_submit_enabled:
            return ""
        return self._state.collateral.raw_text

    def display(self) -> LoanFormDisplay:
        params = self._params_store.protocol_params()
        collateral = self._state.collateral
        loan = self._state.loan
        return LoanFormDisplay(
            collateral_text=collateral.raw_text,
            field_error=bool(collateral.raw_text) and not collateral.is_valid,
            interest_rate=f"{format_percent(params.interest_rate_yearly)}%",
            origination_fee_rate=f"{format_percent(params.origination_fee_rate)}%",
            loan_amount=f"{format_amount(loan.gross_loan)} {self.symbol}",
            origination_fee_amount=(
                f"{format_amount(loan.origination_fee_amount)} {self.symbol}"
            ),
            net_loan=f"{format_amount(loan.net_loan)} {self.symbol}",
            send_label=" ".join(
                part
                for part in (
                    "Send",
                    format_amount(collateral.raw_text) if collateral.is_valid else "",
                    self.collateral_symbol,
                )
                if part
            ),
            submit_enabled=self.is_submit_enabled() and not self.loading,
            loading=self.loading,
        )

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def on_key_down(self, code: str) -> bool:
        """Enter submits the form, like clicking the send button."""
        if code in SUBMIT_KEYS:
            return await self.open_loan()
        return False

    async def open_loan(self) -> bool:
        """Broadcast the borrow transaction for the validated collateral."""
        if self.loading or not self.is_submit_enabled():
            return False

        amount = self.validated_collateral_amount()
        self.loading = True
        try:
            await self._submitter.borrow(parse_units(amount))
        except Exception as e:
            logger.warning("Open loan for %s %s failed: %s", amount, self.collateral_symbol, e)
            await self._notify(self._classify_error(e))
            return False
        finally:
            self.loading = False

        logger.info("Loan opened with %s %s collateral", amount, self.collateral_symbol)
        await self._notify(Notification(title="Transaction successful", type="success"))
        await self._track("loan", "open_loan", amount)
        return True

    async def _notify(self, notification: Notification) -> None:
        for notifier in self._notifiers:
            try:
                await notifier.send_notification(notification)
            except Exception as e:
                logger.error("Notifier send_notification failed: %s", e)

    async def _track(self, category: str, action: str, value: str) -> None:
        if self._metrics is None:
            return
        try:
            await self._metrics.event(category, action, value)
        except Exception as e:
            logger.error("Metrics event failed: %s", e)
