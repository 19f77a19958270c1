from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Union

NATIVE_DECIMALS = 18

Amount = Union[Decimal, str, int, float]


def to_base_units(amount: Amount, decimals: int) -> int:
    """Scale a human amount by 10**decimals, truncating toward zero."""
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    # floats go through str() so 0.001 stays 0.001 rather than its binary expansion
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    with localcontext() as ctx:
        # multiplying by a power of ten keeps the digit count, so this is exact
        ctx.prec = max(28, len(value.as_tuple().digits) + 1)
        ctx.rounding = ROUND_DOWN
        return int(value * (Decimal(10) ** decimals))


def from_base_units(units: int, decimals: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(units) / (Decimal(10) ** decimals)
