"""Route graph construction and lookups."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from warp_routes.core.types import EnrichedToken, Route, RouteMap, RouteType
from warp_routes.core.utils import are_addresses_equal, get_logger, is_valid_address

LOGGER = get_logger("warp_routes.routes")


def chains_from_tokens(tokens: Iterable[EnrichedToken]) -> List[int]:
    """Return every chain id used by ``tokens``, in first-seen order."""
    chains: Dict[int, None] = {}
    for token in tokens:
        chains[token.chain_id] = None
        for remote in token.hyp_tokens:
            chains[remote.chain_id] = None
    return list(chains)


def _check_links(token: EnrichedToken) -> None:
    seen = set()
    for remote in token.hyp_tokens:
        if remote.chain_id == token.chain_id:
            raise ValueError(f"Token {token.symbol} links to its own native chain {token.chain_id}")
        if remote.chain_id in seen:
            raise ValueError(f"Token {token.symbol} has duplicate remote chain {remote.chain_id}")
        seen.add(remote.chain_id)


def build_route_map(tokens: Sequence[EnrichedToken]) -> RouteMap:
    """Compute all routes between the chains connected by ``tokens``.

    Every ordered pair of distinct chains gets an entry, even when no token
    connects them, so lookups only ever see an empty list. Routes are appended
    in token order, then link order; nothing is sorted or deduplicated.
    """
    for token in tokens:
        _check_links(token)

    all_chain_ids = chains_from_tokens(tokens)
    route_map: RouteMap = {
        source: {dest: [] for dest in all_chain_ids if dest != source} for source in all_chain_ids
    }

    for token in tokens:
        common = {
            "native_chain_id": token.chain_id,
            "native_token_address": token.address,
            "hyp_collateral_address": token.hyp_collateral_address,
            "decimals": token.decimals,
        }
        for remote in token.hyp_tokens:
            route_map[token.chain_id][remote.chain_id].append(
                Route(
                    type=RouteType.NATIVE_TO_REMOTE,
                    source_token_address=token.hyp_collateral_address,
                    dest_token_address=remote.address,
                    **common,
                )
            )
            route_map[remote.chain_id][token.chain_id].append(
                Route(
                    type=RouteType.REMOTE_TO_NATIVE,
                    source_token_address=remote.address,
                    dest_token_address=token.hyp_collateral_address,
                    **common,
                )
            )
            # The mirror edge is appended when ``other`` is the outer link
            for other in token.hyp_tokens:
                if other.chain_id == remote.chain_id:
                    continue
                route_map[remote.chain_id][other.chain_id].append(
                    Route(
                        type=RouteType.REMOTE_TO_REMOTE,
                        source_token_address=remote.address,
                        dest_token_address=other.address,
                        **common,
                    )
                )

    LOGGER.info(
        "Computed %s routes across %s chains",
        sum(len(routes) for dests in route_map.values() for routes in dests.values()),
        len(all_chain_ids),
    )
    return route_map


def routes_between(source_chain_id: int, dest_chain_id: int, route_map: RouteMap) -> List[Route]:
    return route_map.get(source_chain_id, {}).get(dest_chain_id, [])


def route_for(
    source_chain_id: int,
    dest_chain_id: int,
    native_token_address: str,
    route_map: RouteMap,
) -> Optional[Route]:
    """Return the first route between two chains for a native token, if any.

    A malformed ``native_token_address`` yields ``None`` rather than an error.
    """
    if not is_valid_address(native_token_address):
        return None
    for route in routes_between(source_chain_id, dest_chain_id, route_map):
        if are_addresses_equal(native_token_address, route.native_token_address):
            return route
    return None


def has_route(
    source_chain_id: int,
    dest_chain_id: int,
    native_token_address: str,
    route_map: RouteMap,
) -> bool:
    return route_for(source_chain_id, dest_chain_id, native_token_address, route_map) is not None


def ordered_chains(route_map: RouteMap, anchor_chain_ids: Iterable[int]) -> List[int]:
    """Return the map's chains with collateral chains first, numeric within each group."""
    anchors = set(anchor_chain_ids)
    return sorted(route_map, key=lambda chain_id: (chain_id not in anchors, chain_id))


def route_map_to_dict(route_map: RouteMap) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """Render ``route_map`` as JSON-ready nested dicts keyed by chain id strings."""
    return {
        str(source): {str(dest): [route.to_dict() for route in routes] for dest, routes in dests.items()}
        for source, dests in route_map.items()
    }


__all__ = [
    "build_route_map",
    "chains_from_tokens",
    "has_route",
    "ordered_chains",
    "route_for",
    "route_map_to_dict",
    "routes_between",
]
