"""Discovery of the remote tokens connected to each collateral token."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence

from warp_routes.core.errors import DiscoveryCancelled, MetadataMismatchError
from warp_routes.core.readers import ChainReader
from warp_routes.core.types import CollateralToken, EnrichedToken, RemoteLink
from warp_routes.core.utils import are_addresses_equal, bytes32_to_address, get_logger, normalize_address

LOGGER = get_logger("warp_routes.fetcher")

DEFAULT_ROUTER_WORKERS = 4


def validate_token_metadata(token: CollateralToken, *, decimals: int, symbol: str) -> None:
    """Ensure the on-chain decimals and symbol match the configured token."""
    if token.decimals != decimals:
        raise MetadataMismatchError("decimals", token.decimals, decimals, token=token.symbol)
    if token.symbol != symbol:
        raise MetadataMismatchError("symbol", token.symbol, symbol, token=token.symbol)


def fetch_remote_links(
    token: CollateralToken,
    reader: ChainReader,
    *,
    max_workers: int = DEFAULT_ROUTER_WORKERS,
) -> EnrichedToken:
    """Read the bridge state of ``token`` and return it with its remote links."""
    collateral = token.hyp_collateral_address
    LOGGER.info("Inspecting token %s on chain %s", token.symbol, token.chain_id)

    LOGGER.info("Validating token metadata")
    wrapped = reader.wrapped_token(collateral)
    if not are_addresses_equal(wrapped, token.address):
        LOGGER.warning("wrappedToken %s != configured token address %s", wrapped, token.address)
    validate_token_metadata(token, decimals=reader.decimals(wrapped), symbol=reader.symbol(wrapped))

    LOGGER.info("Fetching connected domains")
    domains = list(reader.domains(collateral))
    LOGGER.info("Found %s connected domains: %s", len(domains), domains)

    LOGGER.info("Getting domain router addresses")
    raw_routers = _read_routers(reader, collateral, domains, max_workers)
    addresses = [normalize_address(bytes32_to_address(raw)) for raw in raw_routers]
    LOGGER.info("Addresses found: %s", addresses)

    hyp_tokens = tuple(RemoteLink(chain_id=domain, address=address) for domain, address in zip(domains, addresses))
    return EnrichedToken(token=token, hyp_tokens=hyp_tokens)


def _read_routers(reader: ChainReader, collateral: str, domains: Sequence[int], max_workers: int) -> List[bytes]:
    if max_workers <= 1 or len(domains) <= 1:
        return [reader.router(collateral, domain) for domain in domains]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(domains))) as pool:
        # map() yields in submission order and re-raises the first failure
        return list(pool.map(lambda domain: reader.router(collateral, domain), domains))


def fetch_all_tokens(
    tokens: Iterable[CollateralToken],
    reader_for_chain: Callable[[int], ChainReader],
    *,
    max_workers: int = DEFAULT_ROUTER_WORKERS,
    cancel_event: Optional[threading.Event] = None,
) -> List[EnrichedToken]:
    """Fetch remote links for every token, one token at a time.

    Tokens are processed sequentially to avoid saturating shared RPC endpoints.
    Any failure aborts the whole pass.
    """
    enriched: List[EnrichedToken] = []
    for token in tokens:
        if cancel_event is not None and cancel_event.is_set():
            raise DiscoveryCancelled(f"Discovery cancelled before token {token.symbol} on chain {token.chain_id}")
        enriched.append(fetch_remote_links(token, reader_for_chain(token.chain_id), max_workers=max_workers))
    return enriched


__all__ = [
    "DEFAULT_ROUTER_WORKERS",
    "fetch_all_tokens",
    "fetch_remote_links",
    "validate_token_metadata",
]
