"""Token and route records shared by the fetcher and the graph builder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CollateralToken:
    """A configured collateral anchor on its native chain."""

    chain_id: int
    symbol: str
    decimals: int
    address: str
    hyp_collateral_address: str
    name: Optional[str] = None
    logo_uri: Optional[str] = None


@dataclass(frozen=True)
class RemoteLink:
    """The token contract representing a collateral token on a remote chain."""

    chain_id: int
    address: str


@dataclass(frozen=True)
class EnrichedToken:
    """A collateral token together with its on-chain remote links."""

    token: CollateralToken
    hyp_tokens: Tuple[RemoteLink, ...] = ()

    @property
    def chain_id(self) -> int:
        return self.token.chain_id

    @property
    def symbol(self) -> str:
        return self.token.symbol

    @property
    def decimals(self) -> int:
        return self.token.decimals

    @property
    def address(self) -> str:
        return self.token.address

    @property
    def hyp_collateral_address(self) -> str:
        return self.token.hyp_collateral_address


class RouteType(str, Enum):
    NATIVE_TO_REMOTE = "nativeToRemote"
    REMOTE_TO_NATIVE = "remoteToNative"
    REMOTE_TO_REMOTE = "remoteToRemote"


@dataclass(frozen=True)
class Route:
    """One directed transfer path between two chains through a collateral token."""

    type: RouteType
    native_chain_id: int
    native_token_address: str
    hyp_collateral_address: str
    source_token_address: str
    dest_token_address: str
    decimals: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type.value,
            "nativeChainId": self.native_chain_id,
            "nativeTokenAddress": self.native_token_address,
            "hypCollateralAddress": self.hyp_collateral_address,
            "sourceTokenAddress": self.source_token_address,
            "destTokenAddress": self.dest_token_address,
            "decimals": self.decimals,
        }


# Source chain to destination chain to routes
RouteMap = Dict[int, Dict[int, List[Route]]]


__all__ = [
    "CollateralToken",
    "EnrichedToken",
    "RemoteLink",
    "Route",
    "RouteMap",
    "RouteType",
]
