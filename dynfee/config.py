from __future__ import annotations

import os
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import UsageError

# field name -> (command-line flag, environment variable)
SETTINGS: Dict[str, tuple] = {
    "private_key": ("-privateKey", "PRIVATE_KEY"),
    "receiver": ("-receiver", "RECEIVER"),
    "rpc_url": ("-rpcURL", "RPC_URL"),
    "chain_id": ("-chainID", "CHAIN_ID"),
    "token_value": ("-tokenValue", "TOKEN_VALUE"),
    "token_contract": ("-tokenContract", "TOKEN_CONTRACT"),
    "token_abi": ("-tokenABI", "TOKEN_ABI"),
    "estimate_native_gas": ("-estimateGas", "ESTIMATE_GAS"),
    "timeout": ("-timeout", "RPC_TIMEOUT"),
}

PAIRING_MESSAGE = "Both tokenContract and tokenABI must be provided for ERC20 transfers"


class SendConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    private_key: str = Field(..., alias="PRIVATE_KEY", repr=False)
    receiver: str = Field(..., alias="RECEIVER")
    rpc_url: str = Field(..., alias="RPC_URL")
    chain_id: int = Field(0, alias="CHAIN_ID", ge=0)
    token_value: Decimal = Field(..., alias="TOKEN_VALUE")
    token_contract: Optional[str] = Field(None, alias="TOKEN_CONTRACT")
    token_abi: Optional[str] = Field(None, alias="TOKEN_ABI", repr=False)
    estimate_native_gas: bool = Field(False, alias="ESTIMATE_GAS")
    timeout: float = Field(60.0, alias="RPC_TIMEOUT", gt=0)

    @field_validator("private_key", "receiver", "rpc_url", "token_contract", "token_abi", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("token_value")
    @classmethod
    def _positive(cls, v: Decimal) -> Decimal:
        if not v.is_finite() or v <= 0:
            raise ValueError("tokenValue must be a positive amount")
        return v

    @model_validator(mode="after")
    def _token_pairing(self) -> "SendConfig":
        if (self.token_contract is None) != (self.token_abi is None):
            raise ValueError(PAIRING_MESSAGE)
        return self

    @property
    def is_token_transfer(self) -> bool:
        return self.token_contract is not None


def load_config(values: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> SendConfig:
    """Merge flag values over environment variables and validate them.

    ``values`` is keyed by field name; ``None`` or blank strings fall back
    to the matching environment variable.
    """
    environ = os.environ if environ is None else environ
    merged: Dict[str, Any] = {}
    for field, (_, env_name) in SETTINGS.items():
        value = values.get(field)
        if _blank(value):
            value = environ.get(env_name)
        if _blank(value):
            continue
        merged[env_name] = value
    try:
        return SendConfig.model_validate(merged)
    except ValidationError as exc:
        raise UsageError(_describe(exc)) from exc


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _describe(exc: ValidationError) -> str:
    flags_by_env = {env: flag for flag, env in SETTINGS.values()}
    missing: List[str] = []
    problems: List[str] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        flag = flags_by_env.get(str(loc[0]), str(loc[0])) if loc else None
        # empty strings are stripped to None, which surfaces as a type error
        if err.get("type") == "missing" or (flag and err.get("input") is None):
            missing.append(flag or "?")
            continue
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else err.get("msg", "invalid value")
        problems.append(f"{flag}: {message}" if flag else message)
    if missing:
        return "Missing required parameters: " + ", ".join(missing)
    return "; ".join(problems)
