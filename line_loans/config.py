"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .calculator import ZERO_ADDRESS, is_zero_address
from .models import FormLimits, ProtocolParams

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProtocolConfig:
    oracle_address: str = ZERO_ADDRESS
    origination_fee: float = 0.01
    interest_rate: float = 0.05
    symbol: str = "LINE"
    collateral_symbol: str = "GBYTE"

    def to_params(self) -> ProtocolParams:
        return ProtocolParams(
            oracle_address=self.oracle_address,
            origination_fee_rate=self.origination_fee,
            interest_rate_yearly=self.interest_rate,
        )


@dataclass(frozen=True)
class FormConfig:
    max_decimals: int = 18
    max_collateral: float = 1_000_000
    init_collateral: float = 1

    def to_limits(self) -> FormLimits:
        return FormLimits(
            max_decimals=self.max_decimals,
            max_collateral=self.max_collateral,
            init_collateral=self.init_collateral,
        )


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    feed_id: str = ""
    timeout: int = 30


@dataclass(frozen=True)
class PriceFeedConfig:
    provider: str = "pyth"
    poll_interval_seconds: int = 60
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class TelegramConfig:
    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""


@dataclass(frozen=True)
class NotificationsConfig:
    telegram: TelegramConfig = field(default_factory=TelegramConfig)


@dataclass(frozen=True)
class AnalyticsConfig:
    enabled: bool = False
    measurement_id: str = ""
    api_secret: str = ""
    client_id: str = "line-loans"
    endpoint: str = "https://www.google-analytics.com/mp/collect"


@dataclass(frozen=True)
class AppConfig:
    protocol: ProtocolConfig = field(default_factory=ProtocolConfig)
    form: FormConfig = field(default_factory=FormConfig)
    price_feed: PriceFeedConfig = field(default_factory=PriceFeedConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_protocol(raw: dict[str, Any]) -> ProtocolConfig:
    return ProtocolConfig(
        oracle_address=str(raw.get("oracle_address", ZERO_ADDRESS)),
        origination_fee=float(raw.get("origination_fee", 0.01)),
        interest_rate=float(raw.get("interest_rate", 0.05)),
        symbol=raw.get("symbol", "LINE"),
        collateral_symbol=raw.get("collateral_symbol", "GBYTE"),
    )


def _build_form(raw: dict[str, Any]) -> FormConfig:
    return FormConfig(
        max_decimals=int(raw.get("max_decimals", 18)),
        max_collateral=float(raw.get("max_collateral", 1_000_000)),
        init_collateral=float(raw.get("init_collateral", 1)),
    )


def _build_price_feed(raw: dict[str, Any]) -> PriceFeedConfig:
    pyth_raw = raw.get("pyth", {})
    return PriceFeedConfig(
        provider=raw.get("provider", "pyth"),
        poll_interval_seconds=int(raw.get("poll_interval_seconds", 60)),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            feed_id=pyth_raw.get("feed_id", ""),
            timeout=int(pyth_raw.get("timeout", 30)),
        ),
    )


def _build_notifications(raw: dict[str, Any]) -> NotificationsConfig:
    tg = raw.get("telegram", {})
    return NotificationsConfig(
        telegram=TelegramConfig(
            enabled=bool(tg.get("enabled", False)),
            bot_token=tg.get("bot_token", ""),
            chat_id=str(tg.get("chat_id", "")),
        ),
    )


def _build_analytics(raw: dict[str, Any]) -> AnalyticsConfig:
    return AnalyticsConfig(
        enabled=bool(raw.get("enabled", False)),
        measurement_id=raw.get("measurement_id", ""),
        api_secret=raw.get("api_secret", ""),
        client_id=raw.get("client_id", "line-loans"),
        endpoint=raw.get("endpoint", AnalyticsConfig.endpoint),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        protocol=_build_protocol(raw.get("protocol", {})),
        form=_build_form(raw.get("form", {})),
        price_feed=_build_price_feed(raw.get("price_feed", {})),
        notifications=_build_notifications(raw.get("notifications", {})),
        analytics=_build_analytics(raw.get("analytics", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    proto = cfg.protocol
    if not 0 <= proto.origination_fee <= 1:
        raise ValueError(
            f"origination_fee must be between 0 and 1, got {proto.origination_fee}"
        )
    if not 0 <= proto.interest_rate <= 1:
        raise ValueError(
            f"interest_rate must be between 0 and 1, got {proto.interest_rate}"
        )
    if not is_zero_address(proto.oracle_address) and not cfg.price_feed.pyth.feed_id:
        raise ValueError(
            f"Oracle {proto.oracle_address} requires price_feed.pyth.feed_id"
        )

    form = cfg.form
    if form.max_decimals < 0:
        raise ValueError("form.max_decimals must not be negative")
    if form.max_collateral <= 0:
        raise ValueError("form.max_collateral must be positive")
    if not 0 < form.init_collateral <= form.max_collateral:
        raise ValueError("form.init_collateral must be in (0, max_collateral]")

    if cfg.analytics.enabled and not (
        cfg.analytics.measurement_id and cfg.analytics.api_secret
    ):
        raise ValueError("Analytics enabled but measurement_id/api_secret missing")
