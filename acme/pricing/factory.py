# acme/pricing/factory.py
from __future__ import annotations

from typing import Optional

from acme.settings import get_settings

from .basket import Basket
from .catalogue import ProductCatalogue
from .config import PricingConfig
from .delivery import DeliveryChargeRules
from .offers import PairDiscountOffer


def default_pricing_config() -> PricingConfig:
    """Default catalogue, default delivery tiers and half-price second R01."""
    return PricingConfig(
        catalogue=ProductCatalogue(),
        delivery_charge_rules=DeliveryChargeRules(),
        offers=[PairDiscountOffer()],
    )


def create_basket(config: Optional[PricingConfig] = None) -> Basket:
    """
    Build a Basket from `config`, else from Settings.pricing_config_path,
    else from the built-in defaults.
    """
    if config is None:
        path = get_settings().pricing_config_path
        config = PricingConfig.from_yaml_file(path) if path else default_pricing_config()
    return config.build_basket()
