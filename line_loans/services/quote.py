"""Loan quote orchestration: wires config, price feed and the loan form."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..analytics import GA4MetricsSink, LoggingMetricsSink
from ..calculator import is_zero_address
from ..config import AppConfig
from ..forms.open_loan import LoanFormDisplay, OpenLoanForm
from ..interfaces.metrics import MetricsSink
from ..interfaces.notifier import Notifier
from ..interfaces.price_feed import PriceFeed
from ..interfaces.transaction import TransactionSubmitter
from ..notifications import TelegramNotifier
from ..oracles import PythPriceFeed, StaticPriceFeed
from ..params import ConfigParamsStore

logger = logging.getLogger(__name__)


class WalletNotConnectedError(RuntimeError):
    pass


class _NoWalletSubmitter:
    """Submitter used when no wallet is attached: every borrow fails."""

    async def borrow(self, collateral_amount: int) -> Any:
        raise WalletNotConnectedError("No wallet connected")


class QuoteService:
    """Builds the open-loan form from config and keeps it fed with prices."""

    def __init__(
        self,
        config: AppConfig,
        submitter: TransactionSubmitter | None = None,
    ) -> None:
        self._config = config
        self._params_store = ConfigParamsStore(config.protocol)

        # Zero-oracle lines convert at a fixed rate and need no market price
        self._price_feed: PriceFeed
        if is_zero_address(config.protocol.oracle_address):
            self._price_feed = StaticPriceFeed()
        else:
            self._price_feed = PythPriceFeed(config.price_feed.pyth)

        self._notifiers: list[Notifier] = []
        if config.notifications.telegram.enabled:
            self._notifiers.append(TelegramNotifier(config.notifications.telegram))

        self._metrics: MetricsSink
        if config.analytics.enabled:
            self._metrics = GA4MetricsSink(config.analytics)
        else:
            self._metrics = LoggingMetricsSink()

        self.form = OpenLoanForm(
            params_store=self._params_store,
            price_feed=self._price_feed,
            submitter=submitter or _NoWalletSubmitter(),
            notifiers=self._notifiers,
            metrics=self._metrics,
            limits=config.form.to_limits(),
            symbol=config.protocol.symbol,
            collateral_symbol=config.protocol.collateral_symbol,
        )
        self._mounted = False

    @property
    def price_feed(self) -> PriceFeed:
        return self._price_feed

    async def refresh_price(self) -> bool:
        """Fetch a new price; re-derive the loan if it moved. Returns True on change."""
        previous = self._price_feed.current_price()
        price = await self._price_feed.fetch_price()

        if not self._mounted:
            self.form.mount()
            self._mounted = True
            return price != previous

        if price == previous:
            return False

        logger.info("Price changed %s -> %s, re-deriving loan", previous, price)
        self.form.on_price_change(price)
        return True

    async def quote(self, raw_collateral: str) -> LoanFormDisplay:
        """Current quote for a collateral amount as typed by the user."""
        await self.refresh_price()
        self.form.on_collateral_input(raw_collateral)
        return self.form.display()

    def format_quote(self, display: LoanFormDisplay) -> str:
        lines = [
            f"Collateral:      {display.collateral_text or '—'} "
            f"{self._config.protocol.collateral_symbol}"
            + ("  (invalid)" if display.field_error else ""),
            f"Interest rate:   {display.interest_rate}",
            f"Loan amount:     {display.loan_amount}",
            f"Origination fee: {display.origination_fee_amount} "
            f"({display.origination_fee_rate})",
            f"You get:         {display.net_loan}",
            f"Submit:          {'enabled' if display.submit_enabled else 'disabled'}",
        ]
        return "\n".join(lines)

    async def run_continuous(
        self,
        raw_collateral: str,
        interval_seconds: int | None = None,
        max_checks: int | None = None,
    ) -> None:
        """Poll the price feed and print a fresh quote whenever the price moves."""
        interval = interval_seconds or self._config.price_feed.poll_interval_seconds
        logger.info("Watching loan quote (polling every %d seconds)", interval)

        await self.quote(raw_collateral)
        print(self.format_quote(self.form.display()))

        checks = 0
        while max_checks is None or checks < max_checks:
            checks += 1
            try:
                await asyncio.sleep(interval)
                if await self.refresh_price():
                    print(self.format_quote(self.form.display()))
            except Exception as e:
                logger.error("Error in quote loop: %s", e)
