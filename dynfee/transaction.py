from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import Web3

from .client import NodeClient
from .errors import BroadcastError, SigningError, node_message

NATIVE_TRANSFER_GAS = 21_000
DYNAMIC_FEE_TX_TYPE = 2


@dataclass(frozen=True)
class TransferPlan:
    """Where the transaction goes and what it carries."""

    to: ChecksumAddress
    value: int
    data: bytes
    amount_units: int
    decimals: int


@dataclass(frozen=True)
class DynamicFeeTx:
    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas: int
    to: ChecksumAddress
    value: int
    data: bytes = b""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": DYNAMIC_FEE_TX_TYPE,
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
            "maxFeePerGas": self.max_fee_per_gas,
            "gas": self.gas,
            "to": self.to,
            "value": self.value,
            "data": Web3.to_hex(self.data),
            "accessList": [],
        }


def sign(tx: DynamicFeeTx, account: LocalAccount) -> SignedTransaction:
    # chainId inside the payload binds the signature to that chain
    try:
        return account.sign_transaction(tx.to_dict())
    except Exception as exc:
        raise SigningError("sign transaction", exc) from exc


def broadcast(client: NodeClient, signed: SignedTransaction) -> str:
    try:
        tx_hash = client.send_raw_transaction(signed.raw_transaction)
    except Exception as exc:
        raise BroadcastError("send transaction", node_message(exc)) from exc
    return Web3.to_hex(tx_hash)
