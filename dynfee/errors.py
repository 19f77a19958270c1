"""Failure types raised while building and sending a transaction.

Every failure is terminal: the CLI logs it once and exits non-zero.
"""

from __future__ import annotations

from typing import Any, Optional


class TxSendError(RuntimeError):
    """Base error; ``step`` names what was being attempted."""

    def __init__(self, step: str, reason: Any = "") -> None:
        self.step = step
        self.reason = reason
        super().__init__(f"Failed to {step}: {reason}" if reason != "" else f"Failed to {step}")


class UsageError(TxSendError):
    """Missing or contradictory settings, detected before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__("parse parameters", message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class RPCConnectionError(TxSendError):
    pass


class KeyParseError(TxSendError):
    pass


class AddressParseError(TxSendError):
    pass


class ABIParseError(TxSendError):
    pass


class QueryError(TxSendError):
    pass


class SigningError(TxSendError):
    pass


class BroadcastError(TxSendError):
    pass


def node_message(exc: BaseException) -> str:
    """Best human-readable reason for a failed node request."""
    response: Optional[Any] = getattr(exc, "rpc_response", None)
    if isinstance(response, dict):
        error = response.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
