"""Read-only access to collateral bridge and ERC20 contracts."""

from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Dict, List, Protocol, Tuple, TypeVar

from web3 import Web3
from web3.contract import Contract

from warp_routes.contracts import load_contract_abi
from warp_routes.core.errors import TransportError

ERC20_ABI_FILE = "erc20_abi.json"
HYP_COLLATERAL_ABI_FILE = "hyp_erc20_collateral_abi.json"

T = TypeVar("T")


class ChainReader(Protocol):
    """On-chain reads needed to discover the remote links of one collateral token."""

    def wrapped_token(self, collateral_address: str) -> str:
        ...

    def domains(self, collateral_address: str) -> List[int]:
        ...

    def router(self, collateral_address: str, domain: int) -> bytes:
        ...

    def decimals(self, token_address: str) -> int:
        ...

    def symbol(self, token_address: str) -> str:
        ...


class Web3ChainReader:
    """``ChainReader`` backed by a single web3 connection."""

    def __init__(self, web3: Web3) -> None:
        self.web3 = web3
        self._contracts: Dict[Tuple[str, str], Contract] = {}
        self._lock = threading.Lock()

    def wrapped_token(self, collateral_address: str) -> str:
        contract = self._contract(HYP_COLLATERAL_ABI_FILE, collateral_address)
        return self._call(contract.functions.wrappedToken().call, f"wrappedToken() on {collateral_address}")

    def domains(self, collateral_address: str) -> List[int]:
        contract = self._contract(HYP_COLLATERAL_ABI_FILE, collateral_address)
        result = self._call(contract.functions.domains().call, f"domains() on {collateral_address}")
        return [int(domain) for domain in result]

    def router(self, collateral_address: str, domain: int) -> bytes:
        contract = self._contract(HYP_COLLATERAL_ABI_FILE, collateral_address)
        return self._call(
            contract.functions.routers(domain).call,
            f"routers({domain}) on {collateral_address}",
        )

    def decimals(self, token_address: str) -> int:
        contract = self._contract(ERC20_ABI_FILE, token_address)
        return int(self._call(contract.functions.decimals().call, f"decimals() on {token_address}"))

    def symbol(self, token_address: str) -> str:
        contract = self._contract(ERC20_ABI_FILE, token_address)
        return self._call(contract.functions.symbol().call, f"symbol() on {token_address}")

    def _contract(self, abi_file: str, address: str) -> Contract:
        checksum_address = Web3.to_checksum_address(address)
        key = (abi_file, checksum_address)
        with self._lock:
            contract = self._contracts.get(key)
            if contract is None:
                contract = self.web3.eth.contract(address=checksum_address, abi=_abi(abi_file))
                self._contracts[key] = contract
        return contract

    @staticmethod
    def _call(fn: Callable[[], T], description: str) -> T:
        try:
            return fn()
        except Exception as exc:  # web3 surfaces provider, decoding and revert errors separately
            raise TransportError(f"Call {description} failed: {exc}") from exc


@functools.lru_cache(maxsize=None)
def _abi(filename: str) -> Any:
    return load_contract_abi(filename)


__all__ = ["ChainReader", "Web3ChainReader"]
