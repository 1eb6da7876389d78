"""Utility helpers shared across warp route core modules."""

from __future__ import annotations

import logging
from typing import Optional, Union

from web3 import Web3


def get_logger(name: str = "warp_routes") -> logging.Logger:
    """Return a configured logger that prints to stdout."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def ensure_web3_connected(web3: Web3, *, expected_chain_id: Optional[int] = None) -> None:
    """Validate that ``web3`` is connected and optionally matches the expected chain id."""
    if not web3.is_connected():
        raise ConnectionError("Failed to connect to the configured RPC endpoint")
    if expected_chain_id is not None and web3.eth.chain_id != expected_chain_id:
        raise ValueError(f"RPC chain ID mismatch: expected {expected_chain_id}, got {web3.eth.chain_id}")


def hex_to_bytes(data: str) -> bytes:
    """Convert a hex string (with or without ``0x``) to bytes."""
    data = data[2:] if data.startswith("0x") else data
    return bytes.fromhex(data)


def bytes32_to_address(value: Union[bytes, bytearray, str]) -> str:
    """Convert a 32-byte router identifier to a checksummed EVM address.

    Routers are stored left-padded to 32 bytes; the address is the trailing
    20 bytes.
    """
    raw = hex_to_bytes(value) if isinstance(value, str) else bytes(value)
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}")
    return Web3.to_checksum_address("0x" + raw[-20:].hex())


def normalize_address(value: str) -> str:
    """Return the canonical (checksummed) form of ``value``."""
    try:
        return Web3.to_checksum_address(value)
    except Exception as exc:  # web3 raises ValueError or TypeError for malformed inputs
        raise ValueError(f"Invalid address: {value}") from exc


def is_valid_address(value: object) -> bool:
    """Return True for a 0x-prefixed 20-byte hex address; mixed case must be a valid checksum."""
    return isinstance(value, str) and value[:2].lower() == "0x" and Web3.is_address(value)


def are_addresses_equal(a: str, b: str) -> bool:
    return a.lower() == b.lower()


__all__ = [
    "are_addresses_equal",
    "bytes32_to_address",
    "ensure_web3_connected",
    "get_logger",
    "hex_to_bytes",
    "is_valid_address",
    "normalize_address",
]
