from __future__ import annotations

from decimal import Decimal

import pytest

import acme.pricing.offers  # noqa: F401 (register all offers)

from acme.pricing.basket import Basket
from acme.pricing.catalogue import ProductCatalogue
from acme.pricing.delivery import DeliveryChargeRules
from acme.pricing.offers import PairDiscountOffer
from acme.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    # get_settings is cached; tests must not see each other's env overrides
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("PRICING_CONFIG_PATH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalogue():
    return ProductCatalogue()


@pytest.fixture
def delivery_rules():
    return DeliveryChargeRules()


@pytest.fixture
def pair_offer():
    return PairDiscountOffer("R01", Decimal("0.5"))


@pytest.fixture
def basket(catalogue, delivery_rules, pair_offer):
    return Basket(catalogue, delivery_charge_rules=delivery_rules, offers=[pair_offer])


class NegativeOffer:
    """Misbehaving offer: hands out a surcharge disguised as a discount."""

    def calculate_discount(self, items, catalogue):
        return Decimal("-5.00")

    def conflicts_with(self, other):
        return False


class FlatOffer:
    def __init__(self, amount):
        self.amount = amount

    def calculate_discount(self, items, catalogue):
        return self.amount if items else Decimal("0")


@pytest.fixture
def negative_offer():
    return NegativeOffer()


@pytest.fixture
def make_flat_offer():
    return FlatOffer
