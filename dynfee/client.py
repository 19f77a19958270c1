from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests
from eth_typing import ChecksumAddress
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3
from web3.middleware import ExtraDataToPOAMiddleware
from web3.providers.base import BaseProvider

from .errors import QueryError, RPCConnectionError


def make_provider(rpc_url: str, timeout: float, session: Optional[requests.Session] = None) -> BaseProvider:
    scheme = urlparse(rpc_url).scheme.lower()
    if scheme in ("http", "https"):
        # one attempt per request; web3's own retry policy is switched off
        return HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": timeout},
            session=session,
            exception_retry_configuration=None,
        )
    if scheme in ("ws", "wss"):
        return LegacyWebSocketProvider(rpc_url, websocket_timeout=_whole_seconds(timeout))
    return IPCProvider(rpc_url, timeout=_whole_seconds(timeout))


def _whole_seconds(timeout: float) -> int:
    return max(1, math.ceil(timeout))


@dataclass
class NodeClient:
    """Blocking wrapper over the handful of node calls a transfer needs."""

    w3: Web3
    session: Optional[requests.Session] = field(default=None, repr=False)

    @staticmethod
    def connect(rpc_url: str, timeout: float = 60.0) -> "NodeClient":
        session = requests.Session()
        try:
            w3 = Web3(make_provider(rpc_url, timeout, session))
            # PoA chains (BSC, opBNB, Polygon) carry oversized extraData in headers
            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
            connected = w3.is_connected()
        except Exception as exc:
            session.close()
            raise RPCConnectionError("connect to the RPC URL", exc) from exc
        if not connected:
            session.close()
            raise RPCConnectionError("connect to the RPC URL", f"{rpc_url} is not reachable")
        return NodeClient(w3=w3, session=session)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def __enter__(self) -> "NodeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def chain_id(self) -> int:
        return int(self.w3.eth.chain_id)

    def pending_nonce(self, address: ChecksumAddress) -> int:
        return int(self.w3.eth.get_transaction_count(address, "pending"))

    def base_fee(self) -> int:
        block = self.w3.eth.get_block("latest")
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            raise QueryError("get latest header", "latest block has no base fee (chain is not EIP-1559 enabled)")
        return int(base_fee)

    def suggest_priority_fee(self) -> int:
        return int(self.w3.eth.max_priority_fee)

    def estimate_gas(self, sender: ChecksumAddress, to: ChecksumAddress, data: bytes = b"", value: int = 0) -> int:
        tx: Dict[str, Any] = {"from": sender, "to": to, "value": value}
        if data:
            tx["data"] = Web3.to_hex(data)
        return int(self.w3.eth.estimate_gas(tx))

    def call(self, to: ChecksumAddress, data: bytes) -> bytes:
        return bytes(self.w3.eth.call({"to": to, "data": Web3.to_hex(data)}, "latest"))

    def send_raw_transaction(self, raw: bytes) -> bytes:
        return bytes(self.w3.eth.send_raw_transaction(raw))
