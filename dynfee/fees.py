from __future__ import annotations

from dataclasses import dataclass

from .amounts import from_base_units

GWEI_DECIMALS = 9


def fee_cap(base_fee: int, priority_fee: int) -> int:
    # twice the base fee leaves room for a few blocks of base-fee growth
    if base_fee < 0 or priority_fee < 0:
        raise ValueError("fees must be non-negative")
    return base_fee * 2 + priority_fee


@dataclass(frozen=True)
class FeeQuote:
    base_fee: int
    priority_fee: int
    max_fee: int

    @staticmethod
    def from_node(base_fee: int, priority_fee: int) -> "FeeQuote":
        return FeeQuote(
            base_fee=int(base_fee),
            priority_fee=int(priority_fee),
            max_fee=fee_cap(int(base_fee), int(priority_fee)),
        )

    def describe(self) -> str:
        return (
            f"base fee {self.base_fee} wei ({_gwei(self.base_fee)} gwei), "
            f"priority fee {self.priority_fee} wei ({_gwei(self.priority_fee)} gwei), "
            f"fee cap {self.max_fee} wei ({_gwei(self.max_fee)} gwei)"
        )


def _gwei(wei: int) -> str:
    return f"{from_base_units(wei, GWEI_DECIMALS).normalize():f}"
