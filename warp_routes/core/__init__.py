"""Core domain logic for warp route discovery."""

from .discovery import RouteDiscovery, discover_routes
from .errors import DiscoveryCancelled, MetadataMismatchError, RouteDiscoveryError, TransportError
from .fetcher import fetch_all_tokens, fetch_remote_links
from .routes import (
    build_route_map,
    has_route,
    ordered_chains,
    route_for,
    route_map_to_dict,
    routes_between,
)
from .types import CollateralToken, EnrichedToken, RemoteLink, Route, RouteMap, RouteType

__all__ = [
    "CollateralToken",
    "DiscoveryCancelled",
    "EnrichedToken",
    "MetadataMismatchError",
    "RemoteLink",
    "Route",
    "RouteDiscovery",
    "RouteDiscoveryError",
    "RouteMap",
    "RouteType",
    "TransportError",
    "build_route_map",
    "discover_routes",
    "fetch_all_tokens",
    "fetch_remote_links",
    "has_route",
    "ordered_chains",
    "route_for",
    "route_map_to_dict",
    "routes_between",
]
