from __future__ import annotations

from itertools import groupby
from typing import Any, Sequence

import structlog

from ..errors import InvalidArgument
from ..money import D, ZERO, money, to_decimal
from .base import Offer, register

logger = structlog.get_logger(__name__)


@register
class PairDiscountOffer(Offer):
    """
    Every second unit of `product_code` is discounted by `discount_percentage`
    (0.5 = half price). An odd leftover unit gets nothing.
    """

    type_name = "pair_discount"

    def __init__(self, product_code: str = "R01", discount_percentage: Any = 0.5) -> None:
        if product_code is None:
            raise InvalidArgument("product_code cannot be None")
        if not isinstance(product_code, str):
            raise InvalidArgument("product_code must be a string")
        if not product_code.strip():
            raise InvalidArgument("product_code cannot be empty")

        if discount_percentage is None:
            raise InvalidArgument("discount_percentage cannot be None")
        pct = to_decimal(discount_percentage, field="discount_percentage")
        if pct < ZERO or pct > D("1"):
            raise InvalidArgument("discount_percentage must be between 0 and 1")

        self.product_code = product_code
        self.discount_percentage: D = pct

    def calculate_discount(self, items: Sequence[str], catalogue) -> D:
        price = catalogue.lookup(self.product_code)
        if price is None:
            return money(ZERO)

        pairs = list(items).count(self.product_code) // 2
        return money(pairs * price * self.discount_percentage)

    def conflicts_with(self, other: Offer) -> bool:
        return isinstance(other, PairDiscountOffer) and other.product_code == self.product_code

    @classmethod
    def validate_collection(cls, offers: Sequence[Any]) -> None:
        pair_offers = sorted(
            (o for o in offers if isinstance(o, PairDiscountOffer)),
            key=lambda o: o.product_code,
        )
        for product_code, group in groupby(pair_offers, key=lambda o: o.product_code):
            conflicting = list(group)
            if len(conflicting) < 2:
                continue

            descriptions = " and ".join(o.describe() for o in conflicting)
            logger.warning("offer_conflict", product_code=product_code, offers=descriptions)
            raise InvalidArgument(
                f"Multiple pair offers found for product '{product_code}': {descriptions}. "
                "Only one pair offer per product is allowed."
            )

    def describe(self) -> str:
        return f"PairDiscountOffer({int(self.discount_percentage * 100)}%)"

    def __repr__(self) -> str:
        return (
            f"PairDiscountOffer(product_code={self.product_code!r}, "
            f"discount_percentage={self.discount_percentage})"
        )
