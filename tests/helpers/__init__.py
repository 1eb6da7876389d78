"""Test helpers."""

from tests.helpers.factories import (
    FakeBridge,
    FakeChainReader,
    address,
    checksum,
    make_enriched,
    make_token,
    router_bytes,
)

__all__ = [
    "FakeBridge",
    "FakeChainReader",
    "address",
    "checksum",
    "make_enriched",
    "make_token",
    "router_bytes",
]
