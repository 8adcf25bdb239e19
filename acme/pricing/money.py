# acme/pricing/money.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .errors import InvalidArgument

D = Decimal

CENT = D("0.01")
ZERO = D("0")


def is_number(value: Any) -> bool:
    # bool is an int subclass, but True is not a price
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_decimal(value: Any, *, field: str) -> D:
    """
    Convert a numeric input to Decimal via str(), so 32.95 becomes D("32.95")
    and not the binary float expansion.
    """
    if not is_number(value):
        raise InvalidArgument(f"{field} must be numeric")
    out = value if isinstance(value, Decimal) else D(str(value))
    if not out.is_finite():
        raise InvalidArgument(f"{field} must be a finite number")
    return out


def money(value: D) -> D:
    """Round to cents, half away from zero (16.475 -> 16.48)."""
    with localcontext() as ctx:
        # integer digits + 2 decimals must fit, or quantize raises
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
