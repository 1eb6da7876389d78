"""Discovery passes: fetch every collateral token, then build the route map."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Sequence

from web3 import Web3

from warp_routes.core.errors import DiscoveryCancelled, TransportError
from warp_routes.core.fetcher import DEFAULT_ROUTER_WORKERS, fetch_all_tokens
from warp_routes.core.readers import ChainReader, Web3ChainReader
from warp_routes.core.routes import build_route_map, has_route, ordered_chains, route_for, routes_between
from warp_routes.core.types import CollateralToken, Route, RouteMap
from warp_routes.core.utils import ensure_web3_connected, get_logger

if TYPE_CHECKING:
    from warp_routes.config import WarpRoutesConfig

LOGGER = get_logger("warp_routes.discovery")

Web3Factory = Callable[[str, int], Web3]


def _default_web3_factory(url: str, timeout: int) -> Web3:
    return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))


def discover_routes(
    tokens: Sequence[CollateralToken],
    reader_for_chain: Callable[[int], ChainReader],
    *,
    max_workers: int = DEFAULT_ROUTER_WORKERS,
    cancel_event: Optional[threading.Event] = None,
) -> RouteMap:
    """Run one full discovery pass over ``tokens``."""
    LOGGER.info("Searching for token routes across %s collateral tokens", len(tokens))
    enriched = fetch_all_tokens(tokens, reader_for_chain, max_workers=max_workers, cancel_event=cancel_event)
    return build_route_map(enriched)


class Web3ReaderFactory:
    """Build and cache one ``Web3ChainReader`` per configured chain."""

    def __init__(self, config: "WarpRoutesConfig", web3_factory: Web3Factory = _default_web3_factory) -> None:
        self.config = config
        self.web3_factory = web3_factory
        self._readers: Dict[int, Web3ChainReader] = {}
        self._lock = threading.Lock()

    def __call__(self, chain_id: int) -> ChainReader:
        with self._lock:
            reader = self._readers.get(chain_id)
            if reader is None:
                reader = Web3ChainReader(self._connect(chain_id))
                self._readers[chain_id] = reader
        return reader

    def _connect(self, chain_id: int) -> Web3:
        chain = self.config.chain(chain_id)
        web3 = self.web3_factory(chain.ensure_rpc_url(), self.config.defaults.rpc_timeout)
        try:
            ensure_web3_connected(web3, expected_chain_id=chain_id)
        except Exception as exc:  # provider timeouts and RPC errors surface from the chain_id read too
            raise TransportError(f"Chain {chain.name}: {exc}") from exc
        LOGGER.info("Connected to chain %s (%s)", chain.name, chain_id)
        return web3


class RouteDiscovery:
    """Holds the latest route map and replaces it on every completed pass.

    Starting a pass signals any in-flight pass to stop; a pass that was
    superseded before finishing never replaces the map.
    """

    def __init__(
        self,
        config: "WarpRoutesConfig",
        *,
        reader_for_chain: Optional[Callable[[int], ChainReader]] = None,
        web3_factory: Web3Factory = _default_web3_factory,
    ) -> None:
        self.config = config
        self.reader_for_chain = reader_for_chain or Web3ReaderFactory(config, web3_factory)
        self._lock = threading.Lock()
        self._generation = 0
        self._cancel_event: Optional[threading.Event] = None
        self._route_map: Optional[RouteMap] = None

    @property
    def route_map(self) -> Optional[RouteMap]:
        return self._route_map

    @property
    def generation(self) -> int:
        """Number of passes started so far."""
        return self._generation

    def refresh(self) -> RouteMap:
        """Run a new discovery pass and install its result."""
        cancel_event = threading.Event()
        with self._lock:
            if self._cancel_event is not None and not self._cancel_event.is_set():
                LOGGER.info("Superseding in-flight discovery pass %s", self._generation)
                self._cancel_event.set()
            self._generation += 1
            generation = self._generation
            self._cancel_event = cancel_event

        try:
            route_map = discover_routes(
                self.config.collateral_tokens,
                self.reader_for_chain,
                max_workers=self.config.defaults.router_workers,
                cancel_event=cancel_event,
            )
        except Exception:
            # a failed pass is finished; later passes must not report superseding it
            cancel_event.set()
            raise

        with self._lock:
            if cancel_event.is_set():
                LOGGER.info("Discarding result of superseded discovery pass %s", generation)
                raise DiscoveryCancelled(f"Discovery pass {generation} was superseded")
            self._route_map = route_map
            cancel_event.set()
        LOGGER.info("Installed route map from discovery pass %s", generation)
        return route_map

    def cancel(self) -> None:
        """Signal the in-flight pass, if any, to stop."""
        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()

    def routes_between(self, source_chain_id: int, dest_chain_id: int) -> List[Route]:
        return routes_between(source_chain_id, dest_chain_id, self._route_map or {})

    def route_for(self, source_chain_id: int, dest_chain_id: int, native_token_address: str) -> Optional[Route]:
        return route_for(source_chain_id, dest_chain_id, native_token_address, self._route_map or {})

    def has_route(self, source_chain_id: int, dest_chain_id: int, native_token_address: str) -> bool:
        return has_route(source_chain_id, dest_chain_id, native_token_address, self._route_map or {})

    def ordered_chains(self, anchor_chain_ids: Optional[Iterable[int]] = None) -> List[int]:
        anchors = self.config.anchor_chain_ids if anchor_chain_ids is None else anchor_chain_ids
        return ordered_chains(self._route_map or {}, anchors)


__all__ = ["RouteDiscovery", "Web3ReaderFactory", "discover_routes"]
