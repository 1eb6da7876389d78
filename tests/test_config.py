"""Tests for the configuration loader."""

import json
from pathlib import Path

import pytest

from tests.helpers import address, checksum
from warp_routes.config import ConfigError, WarpRoutesConfig, load_config, parse_config


class TestParseConfig:
    def test_valid_config(self, config: WarpRoutesConfig) -> None:
        assert set(config.chains) == {"alpha", "beta", "gamma", "delta"}
        assert config.chains["gamma"].rpc_url is None
        assert [token.symbol for token in config.collateral_tokens] == ["USDC", "WETH"]
        usdc = config.collateral_tokens[0]
        assert usdc.chain_id == 1
        assert usdc.decimals == 6
        assert usdc.address == checksum(address(1001))
        assert usdc.hyp_collateral_address == checksum(address(1002))
        assert usdc.name == "USD Coin"
        assert config.collateral_tokens[1].logo_uri == "/logos/weth.png"
        assert config.anchor_chain_ids == [1, 5]

    def test_defaults_applied(self, config: WarpRoutesConfig) -> None:
        assert config.defaults.router_workers == 4
        assert config.defaults.rpc_timeout == 30

    def test_defaults_overridden(self, config_data) -> None:
        config_data["defaults"] = {"router_workers": 1, "rpc_timeout": 5}
        config = parse_config(config_data)
        assert config.defaults.router_workers == 1
        assert config.defaults.rpc_timeout == 5

    def test_null_defaults_applied(self, config_data) -> None:
        config_data["defaults"] = None
        config = parse_config(config_data)
        assert config.defaults.router_workers == 4
        assert config.defaults.rpc_timeout == 30

    @pytest.mark.parametrize("defaults", [["router_workers"], "fast", 7])
    def test_defaults_must_be_mapping(self, config_data, defaults) -> None:
        config_data["defaults"] = defaults
        with pytest.raises(ConfigError, match="defaults must be a mapping"):
            parse_config(config_data)

    @pytest.mark.parametrize("key", ["router_workers", "rpc_timeout"])
    def test_defaults_must_be_positive(self, config_data, key) -> None:
        config_data["defaults"] = {key: 0}
        with pytest.raises(ConfigError, match=key):
            parse_config(config_data)

    def test_synthetic_tokens_skipped(self, config_data) -> None:
        config_data["tokens"].append(
            {"chain": "beta", "standard": "EvmHypSynthetic", "symbol": "USDC", "decimals": 6, "address": address(2001)}
        )
        assert len(parse_config(config_data).collateral_tokens) == 2

    def test_unknown_standard(self, config_data) -> None:
        config_data["tokens"][0]["standard"] = "EvmHypNative"
        with pytest.raises(ConfigError, match="unsupported standard"):
            parse_config(config_data)

    def test_requires_collateral_token(self, config_data) -> None:
        config_data["tokens"] = [{"chain": "beta", "standard": "EvmHypSynthetic"}]
        with pytest.raises(ConfigError, match="at least one collateral token"):
            parse_config(config_data)

    @pytest.mark.parametrize("key", ["chains", "tokens"])
    def test_missing_top_level_key(self, config_data, key) -> None:
        del config_data[key]
        with pytest.raises(ConfigError, match=key):
            parse_config(config_data)

    def test_missing_token_key(self, config_data) -> None:
        del config_data["tokens"][0]["hyp_collateral_address"]
        with pytest.raises(ConfigError, match="hyp_collateral_address"):
            parse_config(config_data)

    def test_unknown_chain(self, config_data) -> None:
        config_data["tokens"][0]["chain"] = "omega"
        with pytest.raises(ConfigError, match="unknown chain omega"):
            parse_config(config_data)

    def test_invalid_address(self, config_data) -> None:
        config_data["tokens"][0]["address"] = "0x1234"
        with pytest.raises(ConfigError, match="Invalid address"):
            parse_config(config_data)

    @pytest.mark.parametrize("decimals", [-1, 256, "six"])
    def test_invalid_decimals(self, config_data, decimals) -> None:
        config_data["tokens"][0]["decimals"] = decimals
        with pytest.raises(ConfigError, match="decimals"):
            parse_config(config_data)

    @pytest.mark.parametrize("entry", [1, "alpha", None, [1]])
    def test_chain_entry_must_be_mapping(self, config_data, entry) -> None:
        config_data["chains"]["alpha"] = entry
        with pytest.raises(ConfigError, match="chain alpha must be a mapping"):
            parse_config(config_data)

    def test_duplicate_chain_id(self, config_data) -> None:
        config_data["chains"]["epsilon"] = {"chain_id": 1}
        with pytest.raises(ConfigError, match="reuses chain_id 1"):
            parse_config(config_data)


class TestChainLookup:
    def test_chain_by_id(self, config: WarpRoutesConfig) -> None:
        assert config.chain(5).name == "delta"

    def test_unknown_chain_id(self, config: WarpRoutesConfig) -> None:
        with pytest.raises(ConfigError, match="chain_id 42"):
            config.chain(42)

    def test_ensure_rpc_url(self, config: WarpRoutesConfig) -> None:
        assert config.chain(1).ensure_rpc_url() == "http://alpha.invalid"
        with pytest.raises(ConfigError, match="gamma"):
            config.chain(3).ensure_rpc_url()

    def test_rpc_overrides(self, config: WarpRoutesConfig) -> None:
        updated = config.with_rpc_overrides({3: "http://gamma.invalid"})
        assert updated.chain(3).rpc_url == "http://gamma.invalid"
        assert updated.chain(1).rpc_url == "http://alpha.invalid"
        assert config.chain(3).rpc_url is None


class TestLoadConfig:
    def test_load_from_file(self, tmp_path: Path, config_data) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config_data), encoding="utf-8")
        config = load_config(path)
        assert config.to_dict() == config_data

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(path)

    def test_example_config_parses(self) -> None:
        example = Path(__file__).resolve().parent.parent / "config.example.json"
        config = load_config(example)
        assert [token.chain_id for token in config.collateral_tokens] == [11155111]
