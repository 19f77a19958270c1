from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .client import NodeClient
from .config import SETTINGS, load_config
from .errors import TxSendError, UsageError
from .sender import send_transfer

logger = logging.getLogger(__name__)

PROG = "dynfee-send"

EXAMPLES = f"""\
Example for ETH transfer:
  {PROG} -privateKey 0x... -receiver 0x... -rpcURL https://... -chainID 1 -tokenValue 0.1

Example for ERC20 transfer:
  {PROG} -privateKey 0x... -receiver 0x... -rpcURL https://... -chainID 1 -tokenValue 0.1 -tokenContract 0x... -tokenABI '[...]'

Every option can also be set through the environment variable shown in
brackets, or in a .env file in the working directory.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Sign and broadcast one EIP-1559 transfer of ETH or an ERC20 token.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    def opt(field: str, help_text: str, **kwargs) -> None:
        flag, env_name = SETTINGS[field]
        parser.add_argument(flag, dest=field, help=f"{help_text} [{env_name}]", **kwargs)

    opt("private_key", "Sender's private key (hex)", metavar="HEX")
    opt("receiver", "Receiver's address", metavar="ADDRESS")
    opt("rpc_url", "RPC URL (http(s)://, ws(s):// or an IPC path)", metavar="URL")
    opt("chain_id", "Chain ID (if 0, it will be automatically obtained)", type=int, metavar="ID")
    opt("token_value", "Transfer amount", metavar="AMOUNT")
    opt("token_contract", "Token contract address (optional, if not provided, ETH will be transferred)",
        metavar="ADDRESS")
    opt("token_abi", "Token ABI JSON string or file (required only for ERC20 transfers)", metavar="JSON")
    opt("estimate_native_gas", "Estimate gas for ETH transfers instead of using 21000",
        action="store_true", default=None)
    opt("timeout", "RPC request timeout in seconds (default 60)", type=float, metavar="SECONDS")
    return parser


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    _configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(vars(args))
    except UsageError as exc:
        print(f"Error: {exc}")
        parser.print_help()
        return 1

    try:
        with NodeClient.connect(cfg.rpc_url, timeout=cfg.timeout) as client:
            print(f"Connected to the RPC URL {cfg.rpc_url}")
            send_transfer(cfg, client)
    except TxSendError as exc:
        logger.critical("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
