"""CLI entrypoint for discovering warp routes."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from warp_routes.config import ConfigError, WarpRoutesConfig, load_config
from warp_routes.core.discovery import RouteDiscovery
from warp_routes.core.errors import RouteDiscoveryError
from warp_routes.core.routes import route_map_to_dict
from warp_routes.core.types import Route
from warp_routes.core.utils import get_logger

LOGGER = get_logger("warp_routes.cli")

RPC_ENV_PREFIX = "RPC_URL_"


def rpc_overrides_from_env(environ: Mapping[str, str]) -> Dict[int, str]:
    """Collect ``RPC_URL_<chain id>`` variables into a chain id to URL mapping."""
    overrides: Dict[int, str] = {}
    for key, value in environ.items():
        if not key.startswith(RPC_ENV_PREFIX) or not value.strip():
            continue
        suffix = key[len(RPC_ENV_PREFIX):]
        if suffix.isdigit():
            overrides[int(suffix)] = value.strip()
    return overrides


def _log_summary(discovery: RouteDiscovery) -> None:
    chains = discovery.ordered_chains()
    LOGGER.info("Discovered routes across %s chains: %s", len(chains), chains)
    for source in chains:
        for dest in chains:
            if source == dest:
                continue
            routes = discovery.routes_between(source, dest)
            if routes:
                LOGGER.info("%s -> %s: %s route(s)", source, dest, len(routes))


def _print_routes(routes: List[Route]) -> None:
    print(json.dumps([route.to_dict() for route in routes], indent=2))


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discover warp routes for configured collateral tokens")
    parser.add_argument("--config", type=Path, default=None, help="Path to config JSON (default: config.json)")
    parser.add_argument("--json", action="store_true", help="Print the full route map as JSON")
    parser.add_argument("--from", dest="source", type=int, help="Source chain id")
    parser.add_argument("--to", dest="dest", type=int, help="Destination chain id")
    parser.add_argument("--token", help="Native token address to select a single route")
    args = parser.parse_args(argv)
    if (args.source is None) != (args.dest is None):
        parser.error("--from and --to must be given together")
    if args.token and args.source is None:
        parser.error("--token requires --from and --to")
    if args.json and args.source is not None:
        parser.error("--json cannot be combined with --from/--to")
    return args


def run(args: argparse.Namespace, config: WarpRoutesConfig) -> int:
    discovery = RouteDiscovery(config)
    route_map = discovery.refresh()

    if args.source is not None:
        if args.token:
            route = discovery.route_for(args.source, args.dest, args.token)
            if route is None:
                LOGGER.warning("No route from %s to %s for token %s", args.source, args.dest, args.token)
                return 1
            _print_routes([route])
        else:
            _print_routes(discovery.routes_between(args.source, args.dest))
    elif args.json:
        print(json.dumps(route_map_to_dict(route_map), indent=2))
    else:
        _log_summary(discovery)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    load_dotenv()

    try:
        config = load_config(args.config).with_rpc_overrides(rpc_overrides_from_env(os.environ))
        status = run(args, config)
    except (ConfigError, RouteDiscoveryError) as exc:
        print(f"\n❌ Error: {exc}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
