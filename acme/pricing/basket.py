# acme/pricing/basket.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import structlog

from .catalogue import ProductCatalogue
from .errors import InvalidArgument
from .money import D, ZERO, money, to_decimal
from .offers import Offer, validate_offer_collection

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BasketBreakdown:
    subtotal: D
    discount: D
    delivery: D
    total: D

    @property
    def discounted_subtotal(self) -> D:
        return self.subtotal - self.discount


class Basket:
    """
    Holds the product codes added by a customer and prices them.

    total = round(subtotal - discounts + delivery, 2), where delivery is looked
    up on the discounted subtotal. An empty basket, or one without delivery
    rules, pays no delivery.

    Subtotal, discount and delivery are memoized; every add/clear drops them.
    """

    def __init__(
        self,
        product_catalogue: ProductCatalogue,
        delivery_charge_rules: Any = None,
        offers: Any = (),
    ) -> None:
        self._validate_product_catalogue(product_catalogue)
        self._validate_delivery_charge_rules(delivery_charge_rules)
        offers_list = self._validate_offers(offers)

        self._catalogue = product_catalogue
        self._delivery_charge_rules = delivery_charge_rules
        self._offers: List[Offer] = offers_list
        self._items: List[str] = []

        self._lock = threading.Lock()
        self._subtotal: Optional[D] = None
        self._discount: Optional[D] = None
        self._delivery: Optional[D] = None

    # -----------------
    # public API
    # -----------------

    @property
    def items(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._items)

    @property
    def offers(self) -> Tuple[Offer, ...]:
        return tuple(self._offers)

    def add(self, product_code: str) -> None:
        if not isinstance(product_code, str):
            raise InvalidArgument("product_code must be a string")
        if not product_code.strip():
            raise InvalidArgument("product_code cannot be empty")
        if not self._catalogue.contains(product_code):
            logger.warning("basket_unknown_product", product_code=product_code)
            raise InvalidArgument(f"Product code '{product_code}' not found in catalogue")

        with self._lock:
            self._items.append(product_code)
            self._reset()
            count = len(self._items)

        logger.debug("basket_item_added", product_code=product_code, items=count)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._reset()
        logger.debug("basket_cleared")

    def total(self) -> D:
        return self.breakdown().total

    def breakdown(self) -> BasketBreakdown:
        with self._lock:
            subtotal = self._get_subtotal()
            discount = self._get_discount()
            delivery = self._get_delivery()
            total = money(subtotal - discount + delivery)
            count = len(self._items)

        logger.debug(
            "basket_total_computed",
            items=count,
            subtotal=str(subtotal),
            discount=str(discount),
            delivery=str(delivery),
            total=str(total),
        )
        return BasketBreakdown(subtotal=subtotal, discount=discount, delivery=delivery, total=total)

    # -----------------
    # internals (caller holds self._lock)
    # -----------------

    def _reset(self) -> None:
        self._subtotal = None
        self._discount = None
        self._delivery = None

    def _get_subtotal(self) -> D:
        if self._subtotal is None:
            total = ZERO
            for code in self._items:
                total += self._catalogue.lookup(code)
            self._subtotal = total
        return self._subtotal

    def _get_discount(self) -> D:
        if self._discount is None:
            items = tuple(self._items)
            total = ZERO
            for offer in self._offers:
                value = offer.calculate_discount(items, self._catalogue)
                total += to_decimal(value, field=f"discount from {type(offer).__name__}")

            if total < ZERO:
                logger.warning("basket_negative_discount", discount=str(total))
                raise InvalidArgument("discounts cannot be negative")
            self._discount = total
        return self._discount

    def _get_delivery(self) -> D:
        if not self._items or self._delivery_charge_rules is None:
            return ZERO
        if self._delivery is None:
            order_total = self._get_subtotal() - self._get_discount()
            cost = self._delivery_charge_rules.calculate_cost(order_total)
            self._delivery = to_decimal(cost, field="delivery cost")
        return self._delivery

    # -----------------
    # validation
    # -----------------

    @staticmethod
    def _validate_product_catalogue(product_catalogue: Any) -> None:
        if product_catalogue is None:
            raise InvalidArgument("product_catalogue cannot be None")
        if not isinstance(product_catalogue, ProductCatalogue):
            raise InvalidArgument("product_catalogue must be a ProductCatalogue")

    @staticmethod
    def _validate_delivery_charge_rules(delivery_charge_rules: Any) -> None:
        if delivery_charge_rules is None:
            return
        if not callable(getattr(delivery_charge_rules, "calculate_cost", None)):
            raise InvalidArgument("delivery_charge_rules must provide calculate_cost")

    @staticmethod
    def _validate_offers(offers: Any) -> List[Offer]:
        if offers is None:
            raise InvalidArgument("offers must be a list")

        if isinstance(offers, (list, tuple)):
            offers_list = list(offers)
        elif callable(getattr(offers, "calculate_discount", None)):
            # a single offer is accepted on its own
            offers_list = [offers]
        else:
            raise InvalidArgument("offers must be a list")

        for i, offer in enumerate(offers_list):
            if not callable(getattr(offer, "calculate_discount", None)):
                raise InvalidArgument(f"offer at index {i} must provide calculate_discount")
            # the base class only declares it
            if getattr(type(offer), "calculate_discount", None) is Offer.calculate_discount:
                raise InvalidArgument(
                    f"offer at index {i} ({type(offer).__name__}) does not implement calculate_discount"
                )

        validate_offer_collection(offers_list)
        return offers_list

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"Basket(items={list(self._items)!r})"
