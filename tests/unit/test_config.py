"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from crosschain_positions.config import (
    AggregatorConfig,
    AppConfig,
    NetworkConfig,
    WalletConfig,
    _interpolate_env,
    load_config,
)


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ADDR", "0xabc")
        result = _interpolate_env({"key": "${ADDR}", "plain": "text"})
        assert result == {"key": "0xabc", "plain": "text"}

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
        assert cfg.aggregator.fetch_timeout_seconds == 12.0
        assert cfg.aggregator.min_usd_value == 1.5
        assert list(cfg.networks) == ["ethereum", "base"]
        assert cfg.networks["ethereum"].timeout == 10
        assert cfg.networks["base"].timeout == 30
        assert cfg.networks["base"].endpoints == (
            "https://base.example.com",
            "https://base2.example.com",
        )
        assert len(cfg.wallets) == 2
        assert cfg.wallets[0].networks == ()
        assert cfg.wallets[1].networks == ("base",)
        assert cfg.default_wallet == "main"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_defaults_when_sections_missing(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "networks:\n  base:\n    endpoints: ['https://base.example.com']\n"
        )
        cfg = load_config(cfg_file)
        assert cfg.aggregator == AggregatorConfig()
        assert cfg.wallets == ()
        assert cfg.default_wallet == ""

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_ADDR", "0xABCDEF")
        yaml_content = """\
networks:
  base:
    endpoints: ["https://base.example.com"]
wallets:
  - wallet_id: w1
    address: "${TEST_ADDR}"
"""
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(yaml_content)
        cfg = load_config(cfg_file)
        assert cfg.wallets[0].address == "0xABCDEF"


class TestValidation:
    def _write(self, tmp_path: Path, content: str) -> Path:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(content)
        return cfg_file

    def test_no_networks_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "networks: {}\n")
        with pytest.raises(ValueError, match="At least one network"):
            load_config(path)

    def test_network_without_endpoints_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "networks:\n  base:\n    endpoints: []\n")
        with pytest.raises(ValueError, match="no endpoints"):
            load_config(path)

    def test_unknown_network_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
networks:
  base:
    endpoints: ["https://base.example.com"]
wallets:
  - wallet_id: w
    address: "0x1"
    networks: [solana]
""",
        )
        with pytest.raises(ValueError, match="unknown network"):
            load_config(path)

    def test_wallet_networks_compared_normalized(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
networks:
  base:
    endpoints: ["https://base.example.com"]
wallets:
  - wallet_id: w
    address: "0x1"
    networks: [Base, "0x2105.base"]
""",
        )
        cfg = load_config(path)
        assert cfg.wallets[0].networks == ("Base", "0x2105.base")

    def test_empty_address_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
networks:
  base:
    endpoints: ["https://base.example.com"]
wallets:
  - wallet_id: w
    address: ""
""",
        )
        with pytest.raises(ValueError, match="no address"):
            load_config(path)

    def test_duplicate_wallet_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
networks:
  base:
    endpoints: ["https://base.example.com"]
wallets:
  - wallet_id: main
    address: "0x1"
  - wallet_id: MAIN
    address: "0x2"
""",
        )
        with pytest.raises(ValueError, match="Duplicate wallet_id"):
            load_config(path)

    def test_unknown_default_wallet_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
networks:
  base:
    endpoints: ["https://base.example.com"]
default_wallet: ghost
""",
        )
        with pytest.raises(ValueError, match="default_wallet"):
            load_config(path)

    def test_non_positive_timeout_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            """\
aggregator:
  fetch_timeout_seconds: 0
networks:
  base:
    endpoints: ["https://base.example.com"]
""",
        )
        with pytest.raises(ValueError, match="fetch_timeout_seconds"):
            load_config(path)


class TestFrozenConfigs:
    def test_aggregator_config_immutable(self) -> None:
        a = AggregatorConfig()
        with pytest.raises(AttributeError):
            a.min_usd_value = 5.0  # type: ignore[misc]

    def test_network_config_immutable(self) -> None:
        n = NetworkConfig(endpoints=("a",))
        with pytest.raises(AttributeError):
            n.timeout = 999  # type: ignore[misc]

    def test_wallet_config_immutable(self) -> None:
        w = WalletConfig(wallet_id="x", address="0x1")
        with pytest.raises(AttributeError):
            w.address = "0x2"  # type: ignore[misc]
