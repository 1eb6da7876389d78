"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import FakeChainReader, address
from warp_routes.config import parse_config


@pytest.fixture
def fake_reader() -> FakeChainReader:
    return FakeChainReader()


@pytest.fixture
def config_data() -> dict:
    """A valid configuration mapping with two collateral tokens."""
    return {
        "chains": {
            "alpha": {"chain_id": 1, "rpc_url": "http://alpha.invalid"},
            "beta": {"chain_id": 2, "rpc_url": "http://beta.invalid"},
            "gamma": {"chain_id": 3},
            "delta": {"chain_id": 5, "rpc_url": "http://delta.invalid"},
        },
        "tokens": [
            {
                "chain": "alpha",
                "symbol": "USDC",
                "name": "USD Coin",
                "decimals": 6,
                "address": address(1001),
                "hyp_collateral_address": address(1002),
            },
            {
                "chain": "delta",
                "standard": "EvmHypCollateral",
                "symbol": "WETH",
                "decimals": 18,
                "address": address(5001),
                "hyp_collateral_address": address(5002),
                "logo_uri": "/logos/weth.png",
            },
        ],
    }


@pytest.fixture
def config(config_data):
    return parse_config(config_data)
