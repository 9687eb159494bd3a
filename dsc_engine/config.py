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

from .errors import ConfigError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeedConfig:
    decimals: int = 8
    initial_answer: int | None = None
    pyth_id: str = ""


@dataclass(frozen=True)
class CollateralConfig:
    symbol: str = ""
    address: str = ""
    decimals: int = 18
    feed: FeedConfig = field(default_factory=FeedConfig)


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    timeout: int = 10


@dataclass(frozen=True)
class NetworkConfig:
    name: str = ""
    deployer: str = ""
    engine_address: str = "dsc-engine"
    dsc_address: str = "dsc"
    max_price_age: int | None = None
    collateral: tuple[CollateralConfig, ...] = ()
    pyth: PythConfig | None = None


@dataclass(frozen=True)
class AppConfig:
    active_network: str = ""
    networks: dict[str, NetworkConfig] = field(default_factory=dict)

    @property
    def network(self) -> NetworkConfig:
        return self.networks[self.active_network]


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


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_feed(raw: dict[str, Any]) -> FeedConfig:
    return FeedConfig(
        decimals=int(raw.get("decimals", 8)),
        initial_answer=_optional_int(raw.get("initial_answer")),
        pyth_id=str(raw.get("pyth_id", "") or ""),
    )


def _build_collateral(raw: list[dict[str, Any]]) -> tuple[CollateralConfig, ...]:
    assets: list[CollateralConfig] = []
    for c in raw:
        assets.append(
            CollateralConfig(
                symbol=c.get("symbol", ""),
                address=str(c.get("address", "") or ""),
                decimals=int(c.get("decimals", 18)),
                feed=_build_feed(c.get("feed", {})),
            )
        )
    return tuple(assets)


def _build_pyth(raw: dict[str, Any] | None) -> PythConfig | None:
    if raw is None:
        return None
    return PythConfig(
        hermes_url=raw.get("hermes_url", PythConfig.hermes_url),
        timeout=int(raw.get("timeout", 10)),
    )


def _build_networks(raw: dict[str, Any]) -> dict[str, NetworkConfig]:
    networks: dict[str, NetworkConfig] = {}
    for name, cfg in raw.items():
        networks[name] = NetworkConfig(
            name=name,
            deployer=cfg.get("deployer", ""),
            engine_address=cfg.get("engine_address", "dsc-engine"),
            dsc_address=cfg.get("dsc_address", "dsc"),
            max_price_age=_optional_int(cfg.get("max_price_age")),
            collateral=_build_collateral(cfg.get("collateral", [])),
            pyth=_build_pyth(cfg.get("pyth")),
        )
    return networks


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    config_path: str | Path | None = None, network: str | None = None
) -> AppConfig:
    """Load and validate deployment configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
        network: Overrides ``active_network`` from the file.
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
        active_network=network or raw.get("active_network", ""),
        networks=_build_networks(raw.get("networks", {})),
    )

    _validate(cfg)
    logger.info(
        "Configuration loaded from %s (network: %s)", config_path, cfg.active_network
    )
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration of the active network.

    Other networks may be incomplete, e.g. missing secrets from .env.
    """
    if cfg.active_network not in cfg.networks:
        raise ConfigError(f"Unknown network '{cfg.active_network}'")

    net = cfg.network
    if not net.deployer:
        raise ConfigError(f"Network '{net.name}' has no deployer")
    if not net.collateral:
        raise ConfigError(
            f"Network '{net.name}' must configure at least one collateral asset"
        )

    seen: set[str] = set()
    for asset in net.collateral:
        if not asset.address:
            raise ConfigError(f"Collateral '{asset.symbol}' has no address")
        if asset.address in seen:
            raise ConfigError(f"Duplicate collateral address '{asset.address}'")
        seen.add(asset.address)

        feed = asset.feed
        if not 0 < feed.decimals <= 18:
            raise ConfigError(
                f"Feed for '{asset.symbol}' has invalid decimals {feed.decimals}"
            )
        if feed.initial_answer is None and not feed.pyth_id:
            raise ConfigError(
                f"Feed for '{asset.symbol}' needs an initial_answer or a pyth_id"
            )
        if feed.pyth_id and net.pyth is None:
            raise ConfigError(
                f"Collateral '{asset.symbol}' uses Pyth but network "
                f"'{net.name}' has no pyth section"
            )
