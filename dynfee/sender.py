"""Resolve, build, sign and broadcast one dynamic-fee transfer."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Type

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import Web3

from .amounts import NATIVE_DECIMALS, to_base_units
from .client import NodeClient
from .config import SendConfig
from .errors import AddressParseError, KeyParseError, QueryError, TxSendError, node_message
from .fees import FeeQuote
from .token import encode_transfer, load_abi, read_decimals
from .transaction import NATIVE_TRANSFER_GAS, DynamicFeeTx, TransferPlan, broadcast, sign

Printer = Callable[[str], None]

EXPLORER_REMINDER = "Please check the transaction status on the blockchain explorer"


@dataclass(frozen=True)
class SendResult:
    sender: ChecksumAddress
    plan: TransferPlan
    tx: DynamicFeeTx
    tx_hash: str


@contextmanager
def _step(description: str, error_cls: Type[TxSendError] = QueryError) -> Iterator[None]:
    try:
        yield
    except TxSendError:
        raise
    except Exception as exc:
        raise error_cls(description, node_message(exc)) from exc


def parse_address(value: str, what: str) -> ChecksumAddress:
    if not Web3.is_address(value):
        raise AddressParseError(f"parse {what}", f"{value!r} is not a hex address")
    return Web3.to_checksum_address(value)


def load_account(private_key: str) -> LocalAccount:
    try:
        return Account.from_key(private_key)
    except Exception as exc:
        # the key itself must never end up in the message
        raise KeyParseError("parse private key", exc.__class__.__name__) from None


def resolve_chain_id(cfg: SendConfig, client: NodeClient, out: Printer) -> int:
    if cfg.chain_id:
        out(f"Using specified chain ID: {cfg.chain_id}")
        return cfg.chain_id
    with _step("get chain ID"):
        chain_id = client.chain_id()
    out(f"Automatically obtained chain ID: {chain_id}")
    return chain_id


def plan_native(cfg: SendConfig, receiver: ChecksumAddress, out: Printer) -> TransferPlan:
    units = to_base_units(cfg.token_value, NATIVE_DECIMALS)
    out(f"Transfer amount: {cfg.token_value} tokens (equivalent to {units} Wei)")
    return TransferPlan(to=receiver, value=units, data=b"", amount_units=units, decimals=NATIVE_DECIMALS)


def plan_token(cfg: SendConfig, client: NodeClient, receiver: ChecksumAddress, out: Printer) -> TransferPlan:
    token = parse_address(cfg.token_contract or "", "token contract address")
    abi = load_abi(cfg.token_abi or "")
    with _step("get token decimals"):
        decimals = read_decimals(client, token)
    units = to_base_units(cfg.token_value, decimals)
    out(f"Token contract: {token} (decimals: {decimals})")
    out(f"Transferring ERC20 token: {cfg.token_value} (base units: {units})")
    data = encode_transfer(abi, token, receiver, units)
    return TransferPlan(to=token, value=0, data=data, amount_units=units, decimals=decimals)


def quote_fees(client: NodeClient, out: Printer) -> FeeQuote:
    with _step("suggest gas tip cap"):
        priority_fee = client.suggest_priority_fee()
    with _step("get latest header"):
        base_fee = client.base_fee()
    quote = FeeQuote.from_node(base_fee, priority_fee)
    out(f"Fees: {quote.describe()}")
    return quote


def resolve_gas_limit(cfg: SendConfig, client: NodeClient, sender: ChecksumAddress, plan: TransferPlan) -> int:
    if not cfg.is_token_transfer and not cfg.estimate_native_gas:
        return NATIVE_TRANSFER_GAS
    with _step("estimate gas"):
        return client.estimate_gas(sender, plan.to, plan.data, plan.value)


def send_transfer(cfg: SendConfig, client: NodeClient, out: Printer = print) -> SendResult:
    chain_id = resolve_chain_id(cfg, client, out)

    account = load_account(cfg.private_key)
    receiver = parse_address(cfg.receiver, "receiver address")
    out(f"Sender's address: {account.address}")
    out(f"Receiver address: {receiver}")

    with _step("get nonce"):
        nonce = client.pending_nonce(account.address)
    out(f"nonce: {nonce}")

    if cfg.is_token_transfer:
        plan = plan_token(cfg, client, receiver, out)
    else:
        plan = plan_native(cfg, receiver, out)

    fees = quote_fees(client, out)
    gas_limit = resolve_gas_limit(cfg, client, account.address, plan)
    out(f"Gas limit: {gas_limit}")

    tx = DynamicFeeTx(
        chain_id=chain_id,
        nonce=nonce,
        max_priority_fee_per_gas=fees.priority_fee,
        max_fee_per_gas=fees.max_fee,
        gas=gas_limit,
        to=plan.to,
        value=plan.value,
        data=plan.data,
    )
    signed = sign(tx, account)
    tx_hash = broadcast(client, signed)

    out(f"Transaction sent successfully! Transaction hash: {tx_hash}")
    out(EXPLORER_REMINDER)
    return SendResult(sender=account.address, plan=plan, tx=tx, tx_hash=tx_hash)
