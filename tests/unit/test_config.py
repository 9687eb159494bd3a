"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from dsc_engine.config import (
    AppConfig,
    CollateralConfig,
    FeedConfig,
    NetworkConfig,
    _interpolate_env,
    load_config,
)
from dsc_engine.errors import ConfigError


def _write(tmp_path: Path, content: str) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(content)
    return cfg_file


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        result = _interpolate_env({"key": "${TOK}", "plain": "text"})
        assert result == {"key": "secret", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.active_network == "anvil"
        net = cfg.network
        assert net.deployer == "0xDEPLOYER"
        assert net.engine_address == "engine"
        assert [c.symbol for c in net.collateral] == ["WETH", "WBTC"]
        assert net.collateral[0].feed.initial_answer == 200000000000
        assert net.collateral[0].decimals == 18
        assert net.max_price_age is None
        assert net.pyth is None

    def test_network_override(
        self, sample_yaml_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SEPOLIA_DEPLOYER", "0xSEP")
        cfg = load_config(sample_yaml_path, network="sepolia")
        net = cfg.network
        assert net.deployer == "0xSEP"
        assert net.max_price_age == 10800
        assert net.pyth is not None
        assert net.pyth.hermes_url == "https://hermes.example.com"
        assert net.pyth.timeout == 5
        assert net.collateral[0].feed.pyth_id == "aaa111"
        assert net.collateral[0].feed.initial_answer is None

    def test_inactive_network_may_be_incomplete(
        self, sample_yaml_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SEPOLIA_DEPLOYER", raising=False)
        cfg = load_config(sample_yaml_path)
        assert cfg.networks["sepolia"].deployer == ""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_DEPLOYER", "0xABCDEF")
        monkeypatch.setenv("TEST_ETH_PRICE", "300000000000")
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "${TEST_DEPLOYER}"
    collateral:
      - symbol: WETH
        address: weth
        feed: {decimals: 8, initial_answer: "${TEST_ETH_PRICE}"}
""")
        cfg = load_config(cfg_file)
        assert cfg.network.deployer == "0xABCDEF"
        assert cfg.network.collateral[0].feed.initial_answer == 300000000000

    def test_repository_config_loads(self) -> None:
        cfg = load_config(Path(__file__).resolve().parents[2] / "config.yaml")
        assert cfg.active_network == "anvil"
        assert {c.symbol for c in cfg.network.collateral} == {"WETH", "WBTC"}


class TestValidation:
    def test_unknown_network_raises(self, sample_yaml_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown network"):
            load_config(sample_yaml_path, network="mainnet")

    def test_config_error_is_value_error(self, sample_yaml_path: Path) -> None:
        with pytest.raises(ValueError):
            load_config(sample_yaml_path, network="mainnet")

    def test_no_deployer_raises(
        self, sample_yaml_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SEPOLIA_DEPLOYER", raising=False)
        with pytest.raises(ConfigError, match="no deployer"):
            load_config(sample_yaml_path, network="sepolia")

    def test_no_collateral_raises(self, tmp_path: Path) -> None:
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "0x1"
    collateral: []
""")
        with pytest.raises(ConfigError, match="at least one collateral"):
            load_config(cfg_file)

    def test_duplicate_address_raises(self, tmp_path: Path) -> None:
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "0x1"
    collateral:
      - {symbol: A, address: same, feed: {decimals: 8, initial_answer: 1}}
      - {symbol: B, address: same, feed: {decimals: 8, initial_answer: 1}}
""")
        with pytest.raises(ConfigError, match="Duplicate"):
            load_config(cfg_file)

    def test_feed_without_price_source_raises(self, tmp_path: Path) -> None:
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "0x1"
    collateral:
      - {symbol: A, address: a, feed: {decimals: 8}}
""")
        with pytest.raises(ConfigError, match="initial_answer or a pyth_id"):
            load_config(cfg_file)

    def test_invalid_feed_decimals_raises(self, tmp_path: Path) -> None:
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "0x1"
    collateral:
      - {symbol: A, address: a, feed: {decimals: 19, initial_answer: 1}}
""")
        with pytest.raises(ConfigError, match="invalid decimals"):
            load_config(cfg_file)

    def test_pyth_feed_without_pyth_section_raises(self, tmp_path: Path) -> None:
        cfg_file = _write(tmp_path, """\
active_network: local
networks:
  local:
    deployer: "0x1"
    collateral:
      - {symbol: A, address: a, feed: {decimals: 8, pyth_id: "abc"}}
""")
        with pytest.raises(ConfigError, match="no pyth section"):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_feed_config_immutable(self) -> None:
        f = FeedConfig()
        with pytest.raises(AttributeError):
            f.decimals = 6  # type: ignore[misc]

    def test_collateral_config_immutable(self) -> None:
        c = CollateralConfig(symbol="WETH", address="weth")
        with pytest.raises(AttributeError):
            c.address = "other"  # type: ignore[misc]

    def test_network_config_immutable(self) -> None:
        n = NetworkConfig(name="x", deployer="0x1")
        with pytest.raises(AttributeError):
            n.deployer = "0x2"  # type: ignore[misc]
