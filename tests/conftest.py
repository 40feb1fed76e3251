"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from line_loans.calculator import ZERO_ADDRESS
from line_loans.config import (
    AnalyticsConfig,
    AppConfig,
    FormConfig,
    NotificationsConfig,
    PriceFeedConfig,
    ProtocolConfig,
    PythConfig,
    TelegramConfig,
)
from line_loans.forms.open_loan import OpenLoanForm
from line_loans.models import ProtocolParams
from line_loans.oracles.static import StaticPriceFeed
from line_loans.params import ConfigParamsStore

ORACLE_ADDRESS = "0x1234567890abcdef1234567890abcdef12345678"


# ---------------------------------------------------------------------------
# Protocol params fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fixed_rate_params() -> ProtocolParams:
    return ProtocolParams(
        oracle_address=ZERO_ADDRESS,
        origination_fee_rate=0.01,
        interest_rate_yearly=0.05,
    )


@pytest.fixture()
def oracle_params() -> ProtocolParams:
    return ProtocolParams(
        oracle_address=ORACLE_ADDRESS,
        origination_fee_rate=0.01,
        interest_rate_yearly=0.05,
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_protocol_config() -> ProtocolConfig:
    return ProtocolConfig(
        oracle_address=ZERO_ADDRESS,
        origination_fee=0.01,
        interest_rate=0.05,
        symbol="LINE",
        collateral_symbol="GBYTE",
    )


@pytest.fixture()
def sample_app_config(sample_protocol_config: ProtocolConfig) -> AppConfig:
    return AppConfig(
        protocol=sample_protocol_config,
        form=FormConfig(),
        price_feed=PriceFeedConfig(poll_interval_seconds=5),
        notifications=NotificationsConfig(
            telegram=TelegramConfig(enabled=True, bot_token="tok", chat_id="999"),
        ),
        analytics=AnalyticsConfig(enabled=False),
    )


@pytest.fixture()
def oracle_app_config(sample_app_config: AppConfig) -> AppConfig:
    return AppConfig(
        protocol=ProtocolConfig(
            oracle_address=ORACLE_ADDRESS,
            origination_fee=0.01,
            interest_rate=0.05,
        ),
        form=sample_app_config.form,
        price_feed=PriceFeedConfig(
            poll_interval_seconds=5,
            pyth=PythConfig(hermes_url="https://hermes.example.com", feed_id="feed1"),
        ),
        notifications=NotificationsConfig(),
        analytics=AnalyticsConfig(),
    )


SAMPLE_YAML = textwrap.dedent("""\
    protocol:
      oracle_address: "0x1234567890abcdef1234567890abcdef12345678"
      origination_fee: 0.02
      interest_rate: 0.1
      symbol: LINE
      collateral_symbol: GBYTE
    form:
      max_decimals: 9
      max_collateral: 5000
      init_collateral: 2
    price_feed:
      provider: pyth
      poll_interval_seconds: 15
      pyth:
        hermes_url: "https://hermes.example.com"
        feed_id: "abc123"
        timeout: 10
    notifications:
      telegram:
        enabled: true
        bot_token: "tok1"
        chat_id: 999
    analytics:
      enabled: false
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Form fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def price_feed() -> StaticPriceFeed:
    return StaticPriceFeed(10.0)


@pytest.fixture()
def submitter() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def metrics() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def fixed_rate_form(
    sample_protocol_config: ProtocolConfig,
    submitter: AsyncMock,
    notifier: AsyncMock,
    metrics: AsyncMock,
) -> OpenLoanForm:
    return OpenLoanForm(
        params_store=ConfigParamsStore(sample_protocol_config),
        price_feed=StaticPriceFeed(),
        submitter=submitter,
        notifiers=[notifier],
        metrics=metrics,
    )


@pytest.fixture()
def oracle_form(
    price_feed: StaticPriceFeed,
    submitter: AsyncMock,
    notifier: AsyncMock,
    metrics: AsyncMock,
) -> OpenLoanForm:
    store = ConfigParamsStore(
        ProtocolConfig(oracle_address=ORACLE_ADDRESS, origination_fee=0.01)
    )
    return OpenLoanForm(
        params_store=store,
        price_feed=price_feed,
        submitter=submitter,
        notifiers=[notifier],
        metrics=metrics,
    )


# ---------------------------------------------------------------------------
# History stub for the staking page
# ---------------------------------------------------------------------------


class FakeHistory:
    def __init__(self, pathname: str = "/staking/all") -> None:
        self._pathname = pathname
        self.pushed: list[str] = []
        self.replaced: list[str] = []

    @property
    def pathname(self) -> str:
        return self._pathname

    def navigate(self, pathname: str) -> None:
        self._pathname = pathname

    def push(self, path: str) -> None:
        self.pushed.append(path)
        self._pathname = path

    def replace(self, path: str) -> None:
        self.replaced.append(path)
        self._pathname = path


@pytest.fixture()
def history() -> FakeHistory:
    return FakeHistory()
