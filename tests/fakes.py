"""In-memory stand-in for NodeClient."""

from typing import Dict, List, Optional, Tuple

# well-known development key (hardhat/anvil account #0)
DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
RECEIVER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TOKEN = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

ERC20_ABI = [
    {
        "constant": False,
        "inputs": [
            {"name": "_to", "type": "address"},
            {"name": "_value", "type": "uint256"},
        ],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "type": "function",
    },
]


class FakeNode:
    def __init__(
        self,
        chain_id: int = 421614,
        nonce: int = 7,
        base_fee: int = 100_000_000,
        priority_fee: int = 0,
        gas_estimate: int = 51_234,
        decimals: int = 6,
        tx_hash: bytes = b"\xab" * 32,
        send_error: Optional[Exception] = None,
    ) -> None:
        self._chain_id = chain_id
        self._nonce = nonce
        self._base_fee = base_fee
        self._priority_fee = priority_fee
        self._gas_estimate = gas_estimate
        self._decimals = decimals
        self._tx_hash = tx_hash
        self._send_error = send_error
        self.calls: List[str] = []
        self.estimates: List[Tuple[str, str, bytes, int]] = []
        self.eth_calls: List[Tuple[str, bytes]] = []
        self.sent: List[bytes] = []

    def chain_id(self) -> int:
        self.calls.append("chain_id")
        return self._chain_id

    def pending_nonce(self, address: str) -> int:
        self.calls.append("pending_nonce")
        return self._nonce

    def base_fee(self) -> int:
        self.calls.append("base_fee")
        return self._base_fee

    def suggest_priority_fee(self) -> int:
        self.calls.append("suggest_priority_fee")
        return self._priority_fee

    def estimate_gas(self, sender: str, to: str, data: bytes = b"", value: int = 0) -> int:
        self.calls.append("estimate_gas")
        self.estimates.append((sender, to, data, value))
        return self._gas_estimate

    def call(self, to: str, data: bytes) -> bytes:
        self.calls.append("call")
        self.eth_calls.append((to, data))
        return (b"\x00" * 31) + bytes([self._decimals])

    def send_raw_transaction(self, raw: bytes) -> bytes:
        self.calls.append("send_raw_transaction")
        if self._send_error is not None:
            raise self._send_error
        self.sent.append(raw)
        return self._tx_hash


def settings(**overrides) -> Dict[str, object]:
    values: Dict[str, object] = {
        "private_key": DEV_KEY,
        "receiver": RECEIVER,
        "rpc_url": "http://127.0.0.1:8545",
        "chain_id": None,
        "token_value": "0.001",
    }
    values.update(overrides)
    return values
