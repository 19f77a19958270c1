"""ERC-20 helpers: decimals lookup and transfer call data."""

from __future__ import annotations

import json
import os
from typing import Any, List

from eth_typing import ChecksumAddress
from eth_utils import to_bytes
from web3 import Web3

from .client import NodeClient
from .errors import ABIParseError, QueryError

# keccak("decimals()")[:4]
DECIMALS_SELECTOR = bytes.fromhex("313ce567")


def read_decimals(client: NodeClient, token: ChecksumAddress) -> int:
    result = client.call(token, DECIMALS_SELECTOR)
    if not result:
        raise QueryError("get token decimals", f"empty result from {token} (not a contract?)")
    # uint8 left-padded to a 32-byte word
    return result[-1]


def load_abi(value: str) -> List[Any]:
    """Parse an ABI given as JSON text or as a path to a JSON file."""
    text = value
    if not value.lstrip().startswith(("[", "{")) and os.path.isfile(value):
        try:
            with open(value, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ABIParseError("parse ABI", exc) from exc
    try:
        abi = json.loads(text)
    except ValueError as exc:
        raise ABIParseError("parse ABI", exc) from exc
    # compiled artifacts (hardhat/foundry/solc) wrap the list under "abi"
    if isinstance(abi, dict) and isinstance(abi.get("abi"), list):
        abi = abi["abi"]
    if not isinstance(abi, list):
        raise ABIParseError("parse ABI", "expected a JSON array of ABI entries")
    return abi


def encode_transfer(abi: List[Any], token: ChecksumAddress, receiver: ChecksumAddress, amount: int) -> bytes:
    try:
        contract = Web3().eth.contract(address=token, abi=abi)
        data = contract.encode_abi("transfer", args=[receiver, amount])
    except Exception as exc:
        raise ABIParseError("pack transfer data", exc) from exc
    return to_bytes(hexstr=data)
