"""Errors raised while discovering warp routes."""

from __future__ import annotations

from typing import Any, Optional


class RouteDiscoveryError(Exception):
    """Base class for failures that abort a discovery pass."""


class MetadataMismatchError(RouteDiscoveryError):
    """Raised when on-chain token metadata disagrees with configuration."""

    def __init__(self, field: str, configured: Any, on_chain: Any, *, token: Optional[str] = None) -> None:
        self.field = field
        self.configured = configured
        self.on_chain = on_chain
        self.token = token
        subject = f"Token {token} config" if token else "Token config"
        super().__init__(f"{subject} {field} {configured!r} does not match contract {field} {on_chain!r}")


class TransportError(RouteDiscoveryError):
    """Raised when an on-chain read fails at the node or network level."""


class DiscoveryCancelled(RouteDiscoveryError):
    """Raised when a discovery pass is superseded before it completes."""


__all__ = [
    "DiscoveryCancelled",
    "MetadataMismatchError",
    "RouteDiscoveryError",
    "TransportError",
]
