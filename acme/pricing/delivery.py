# acme/pricing/delivery.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .errors import InvalidArgument
from .money import D, ZERO, to_decimal


@dataclass(frozen=True)
class DeliveryTier:
    minimum_order_amount: D
    delivery_cost: D


DEFAULT_DELIVERY_TIERS: List[dict] = [
    {"minimum_order_amount": 90.0, "delivery_cost": 0.0},
    {"minimum_order_amount": 50.0, "delivery_cost": 2.95},
    {"minimum_order_amount": 0.0, "delivery_cost": 4.95},
]

REQUIRED_KEYS = ("minimum_order_amount", "delivery_cost")


class DeliveryChargeRules:
    """
    Tiered delivery cost: the tier with the highest minimum_order_amount that
    the order total reaches wins, so the order of `rules` does not matter.

    rules:
      - minimum_order_amount: 90
        delivery_cost: 0
      - minimum_order_amount: 50
        delivery_cost: 2.95
    """

    def __init__(self, rules: Optional[Sequence[Any]] = None) -> None:
        if rules is None:
            rules = DEFAULT_DELIVERY_TIERS
        self._tiers: Tuple[DeliveryTier, ...] = self._validate_rules(rules)

    @property
    def tiers(self) -> Tuple[DeliveryTier, ...]:
        return self._tiers

    def calculate_cost(self, order_total: Any) -> D:
        total = self._validate_order_total(order_total)

        # highest tier whose minimum the total reaches
        chosen: Optional[DeliveryTier] = None
        for t in self._tiers:
            if total >= t.minimum_order_amount:
                if chosen is None or t.minimum_order_amount > chosen.minimum_order_amount:
                    chosen = t

        if chosen is None:
            return ZERO
        return chosen.delivery_cost

    # -----------------
    # validation
    # -----------------

    @staticmethod
    def _validate_order_total(order_total: Any) -> D:
        if order_total is None:
            raise InvalidArgument("order_total cannot be None")
        total = to_decimal(order_total, field="order_total")
        if total < ZERO:
            raise InvalidArgument("order_total cannot be negative")
        return total

    @classmethod
    def _validate_rules(cls, rules: Any) -> Tuple[DeliveryTier, ...]:
        if not isinstance(rules, (list, tuple)):
            raise InvalidArgument("rules must be a list")
        if not rules:
            raise InvalidArgument("rules cannot be empty")
        return tuple(cls._validate_rule(r, i) for i, r in enumerate(rules))

    @staticmethod
    def _validate_rule(rule: Any, index: int) -> DeliveryTier:
        if isinstance(rule, DeliveryTier):
            raw = {k: getattr(rule, k) for k in REQUIRED_KEYS}
        elif isinstance(rule, Mapping):
            raw = rule
        else:
            raise InvalidArgument(f"rule at index {index} must be a mapping")

        missing = [k for k in REQUIRED_KEYS if k not in raw]
        if missing:
            raise InvalidArgument(
                f"rule at index {index} missing required keys: {', '.join(missing)}"
            )

        values = {}
        for key in REQUIRED_KEYS:
            d = to_decimal(raw[key], field=f"rule at index {index} {key}")
            if d < ZERO:
                raise InvalidArgument(f"rule at index {index} {key} cannot be negative")
            values[key] = d

        return DeliveryTier(**values)

    def __repr__(self) -> str:
        return f"DeliveryChargeRules({list(self._tiers)!r})"
