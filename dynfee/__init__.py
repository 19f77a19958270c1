from .amounts import NATIVE_DECIMALS, to_base_units
from .client import NodeClient
from .config import SendConfig, load_config
from .errors import (
    ABIParseError,
    AddressParseError,
    BroadcastError,
    KeyParseError,
    QueryError,
    RPCConnectionError,
    SigningError,
    TxSendError,
    UsageError,
)
from .fees import FeeQuote, fee_cap
from .sender import SendResult, send_transfer
from .transaction import NATIVE_TRANSFER_GAS, DynamicFeeTx

__all__ = [
    "ABIParseError",
    "AddressParseError",
    "BroadcastError",
    "DynamicFeeTx",
    "FeeQuote",
    "KeyParseError",
    "NATIVE_DECIMALS",
    "NATIVE_TRANSFER_GAS",
    "NodeClient",
    "QueryError",
    "RPCConnectionError",
    "SendConfig",
    "SendResult",
    "SigningError",
    "TxSendError",
    "UsageError",
    "fee_cap",
    "load_config",
    "send_transfer",
    "to_base_units",
]
