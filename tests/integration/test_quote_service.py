"""Integration tests for QuoteService, from config to displayed quote."""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from line_loans.analytics import LoggingMetricsSink
from line_loans.config import AppConfig
from line_loans.notifications import TelegramNotifier
from line_loans.oracles import PythPriceFeed, StaticPriceFeed
from line_loans.services.quote import QuoteService


class TestConstruction:
    def test_fixed_rate_line_uses_static_feed(self, sample_app_config: AppConfig) -> None:
        service = QuoteService(sample_app_config)
        assert isinstance(service.price_feed, StaticPriceFeed)
        assert isinstance(service._metrics, LoggingMetricsSink)
        assert isinstance(service._notifiers[0], TelegramNotifier)

    def test_oracle_line_uses_pyth(self, oracle_app_config: AppConfig) -> None:
        service = QuoteService(oracle_app_config)
        assert isinstance(service.price_feed, PythPriceFeed)
        assert service._notifiers == []


class TestQuote:
    @pytest.mark.asyncio
    async def test_fixed_rate_quote(self, sample_app_config: AppConfig) -> None:
        service = QuoteService(sample_app_config)

        display = await service.quote("2")

        assert display.loan_amount == "2,000 LINE"
        assert display.origination_fee_amount == "20 LINE"
        assert display.net_loan == "1,980 LINE"
        assert display.submit_enabled is True

        text = service.format_quote(display)
        assert "You get:         1,980 LINE" in text
        assert "Submit:          enabled" in text

    @pytest.mark.asyncio
    async def test_first_refresh_mounts_default(self, sample_app_config: AppConfig) -> None:
        service = QuoteService(sample_app_config)
        await service.refresh_price()
        assert service.form.state.collateral.raw_text == "1"

    @pytest.mark.asyncio
    async def test_oracle_quote_follows_price(self, oracle_app_config: AppConfig) -> None:
        service = QuoteService(oracle_app_config)
        feed = service.price_feed
        feed.fetch_price = AsyncMock(return_value=10.0)  # type: ignore[method-assign]
        feed.current_price = lambda: 10.0  # type: ignore[method-assign]

        await service.quote("5")
        assert service.form.current_loan_quantities().gross_loan == 0.5

        feed.fetch_price = AsyncMock(return_value=20.0)  # type: ignore[method-assign]
        changed = await service.refresh_price()

        assert changed is True
        assert service.form.state.collateral.raw_text == "5"
        assert service.form.current_loan_quantities().gross_loan == 0.25

    @pytest.mark.asyncio
    async def test_unchanged_price_is_not_reported(self, sample_app_config: AppConfig) -> None:
        service = QuoteService(sample_app_config)
        await service.refresh_price()
        assert await service.refresh_price() is False

    @pytest.mark.asyncio
    async def test_oracle_without_price_disables_submit(
        self, oracle_app_config: AppConfig
    ) -> None:
        service = QuoteService(oracle_app_config)
        service.price_feed.fetch_price = AsyncMock(return_value=None)  # type: ignore[method-assign]

        display = await service.quote("5")

        assert display.submit_enabled is False
        assert "Submit:          disabled" in service.format_quote(display)


class TestSubmitWithoutWallet:
    @pytest.mark.asyncio
    async def test_open_loan_fails_gracefully(self, sample_app_config: AppConfig) -> None:
        service = QuoteService(sample_app_config)
        notifier = AsyncMock()
        service.form._notifiers = [notifier]
        await service.quote("2")

        assert await service.form.open_loan() is False

        sent = notifier.send_notification.call_args[0][0]
        assert sent.title == "Transaction failed"
        assert sent.description == "No wallet connected"


class TestRunContinuous:
    @pytest.mark.asyncio
    async def test_prints_on_price_change(
        self, oracle_app_config: AppConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        service = QuoteService(oracle_app_config)
        prices = iter([10.0, 10.0, 20.0])
        current = {"price": None}

        async def fetch() -> float:
            current["price"] = next(prices)
            return current["price"]

        service.price_feed.fetch_price = fetch  # type: ignore[method-assign]
        service.price_feed.current_price = lambda: current["price"]  # type: ignore[method-assign]

        with patch("line_loans.services.quote.asyncio.sleep", new=AsyncMock()):
            await service.run_continuous("5", interval_seconds=1, max_checks=2)

        out = capsys.readouterr().out
        assert out.count("Loan amount:") == 2
        assert service.form.current_loan_quantities().gross_loan == 0.25

    @pytest.mark.asyncio
    async def test_loop_survives_errors(self, oracle_app_config: AppConfig) -> None:
        service = QuoteService(oracle_app_config)
        service.price_feed.fetch_price = AsyncMock(  # type: ignore[method-assign]
            side_effect=[10.0, RuntimeError("boom"), 10.0]
        )

        with patch("line_loans.services.quote.asyncio.sleep", new=AsyncMock()):
            await service.run_continuous("5", interval_seconds=1, max_checks=2)

        assert service.price_feed.fetch_price.await_count == 3
