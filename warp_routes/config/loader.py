"""Config loader for warp route discovery."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional

from web3 import Web3

from warp_routes.core.types import CollateralToken
from warp_routes.core.utils import get_logger

LOGGER = get_logger("warp_routes.config")

COLLATERAL_STANDARD = "EvmHypCollateral"
SYNTHETIC_STANDARD = "EvmHypSynthetic"


class ConfigError(ValueError):
    """Raised when configuration data is invalid or missing."""


def _require_keys(data: Mapping[str, Any], keys: Iterable[str], context: str) -> None:
    missing = [key for key in keys if key not in data]
    if missing:
        raise ConfigError(f"{context} missing required keys: {', '.join(missing)}")


def _to_checksum(value: str, *, field_name: str) -> str:
    try:
        return Web3.to_checksum_address(value)
    except Exception as exc:  # web3 raises ValueError for malformed inputs
        raise ConfigError(f"Invalid address for {field_name}: {value}") from exc


def _positive_int(value: Any, *, field_name: str) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc
    if result <= 0:
        raise ConfigError(f"{field_name} must be positive")
    return result


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain network."""

    name: str
    chain_id: int
    rpc_url: Optional[str] = None

    def ensure_rpc_url(self) -> str:
        """Return the RPC URL or raise if it is missing."""
        if not self.rpc_url:
            raise ConfigError(f"RPC URL required for chain {self.name} but not configured")
        return self.rpc_url


@dataclass(frozen=True)
class DefaultsConfig:
    """Default operational parameters."""

    router_workers: int = 4
    rpc_timeout: int = 30


@dataclass(frozen=True)
class WarpRoutesConfig:
    """Typed wrapper around the warp route configuration."""

    chains: Dict[str, ChainConfig]
    collateral_tokens: List[CollateralToken]
    defaults: DefaultsConfig
    raw: Mapping[str, Any] = field(repr=False)

    @property
    def anchor_chain_ids(self) -> List[int]:
        return [token.chain_id for token in self.collateral_tokens]

    def chain(self, chain_id: int) -> ChainConfig:
        """Return the chain configured with ``chain_id``."""
        for chain in self.chains.values():
            if chain.chain_id == chain_id:
                return chain
        raise ConfigError(f"No chain configured with chain_id {chain_id}")

    def with_rpc_overrides(self, overrides: Mapping[int, str]) -> "WarpRoutesConfig":
        """Return a copy whose chains use the RPC URLs in ``overrides`` (keyed by chain id)."""
        chains = {
            name: ChainConfig(name=chain.name, chain_id=chain.chain_id, rpc_url=overrides.get(chain.chain_id, chain.rpc_url))
            for name, chain in self.chains.items()
        }
        return WarpRoutesConfig(
            chains=chains,
            collateral_tokens=self.collateral_tokens,
            defaults=self.defaults,
            raw=self.raw,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the original configuration mapping."""
        return dict(self.raw)


def _normalize_chains(chains: Any) -> Dict[str, ChainConfig]:
    if not isinstance(chains, Mapping) or not chains:
        raise ConfigError("chains must be a non-empty mapping of chain name to chain settings")

    result: Dict[str, ChainConfig] = {}
    seen_ids: Dict[int, str] = {}
    for name, chain_data in chains.items():
        if not isinstance(chain_data, Mapping):
            raise ConfigError(f"chain {name} must be a mapping")
        _require_keys(chain_data, ["chain_id"], f"chain {name}")
        chain_id = _positive_int(chain_data["chain_id"], field_name=f"chain {name} chain_id")
        if chain_id in seen_ids:
            raise ConfigError(f"chain {name} reuses chain_id {chain_id} of chain {seen_ids[chain_id]}")
        seen_ids[chain_id] = name
        rpc_url = chain_data.get("rpc_url")
        result[name] = ChainConfig(name=name, chain_id=chain_id, rpc_url=str(rpc_url) if rpc_url else None)
    return result


def _normalize_token(index: int, token_data: Any, chains: Mapping[str, ChainConfig]) -> Optional[CollateralToken]:
    context = f"token #{index}"
    if not isinstance(token_data, Mapping):
        raise ConfigError(f"{context} must be a mapping")

    standard = token_data.get("standard", COLLATERAL_STANDARD)
    if standard == SYNTHETIC_STANDARD:
        LOGGER.debug("Skipping synthetic %s; remote tokens are discovered on-chain", context)
        return None
    if standard != COLLATERAL_STANDARD:
        raise ConfigError(f"{context} has unsupported standard {standard}")

    _require_keys(token_data, ["chain", "symbol", "decimals", "address", "hyp_collateral_address"], context)
    chain_name = token_data["chain"]
    if chain_name not in chains:
        raise ConfigError(f"{context} references unknown chain {chain_name}")

    try:
        decimals = int(token_data["decimals"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{context} decimals must be an integer") from exc
    if decimals < 0 or decimals > 255:
        raise ConfigError(f"{context} decimals must be between 0 and 255")

    symbol = str(token_data["symbol"])
    return CollateralToken(
        chain_id=chains[chain_name].chain_id,
        symbol=symbol,
        decimals=decimals,
        address=_to_checksum(token_data["address"], field_name=f"{symbol} address"),
        hyp_collateral_address=_to_checksum(
            token_data["hyp_collateral_address"], field_name=f"{symbol} hyp_collateral_address"
        ),
        name=token_data.get("name"),
        logo_uri=token_data.get("logo_uri"),
    )


def _load_json(path: Path) -> MutableMapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file contains invalid JSON: {path}") from exc


def parse_config(data: MutableMapping[str, Any]) -> WarpRoutesConfig:
    """Validate an already decoded configuration mapping."""
    _require_keys(data, ["chains", "tokens"], "config")
    chains = _normalize_chains(data["chains"])

    tokens_data = data["tokens"]
    if not isinstance(tokens_data, list):
        raise ConfigError("tokens must be a list")
    tokens = [
        token
        for token in (_normalize_token(idx, token_data, chains) for idx, token_data in enumerate(tokens_data))
        if token is not None
    ]
    if not tokens:
        raise ConfigError("tokens must contain at least one collateral token")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, Mapping):
        raise ConfigError("defaults must be a mapping")
    defaults_config = DefaultsConfig(
        router_workers=_positive_int(defaults.get("router_workers", 4), field_name="defaults.router_workers"),
        rpc_timeout=_positive_int(defaults.get("rpc_timeout", 30), field_name="defaults.rpc_timeout"),
    )

    return WarpRoutesConfig(chains=chains, collateral_tokens=tokens, defaults=defaults_config, raw=data)


def load_config(config_path: Optional[Path] = None) -> WarpRoutesConfig:
    """Load and validate warp route configuration data."""
    config_path = config_path or Path("config.json")
    return parse_config(_load_json(config_path))


__all__ = [
    "COLLATERAL_STANDARD",
    "ChainConfig",
    "ConfigError",
    "DefaultsConfig",
    "SYNTHETIC_STANDARD",
    "WarpRoutesConfig",
    "load_config",
    "parse_config",
]
