# acme/pricing/config.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
import yaml

from .basket import Basket
from .catalogue import ProductCatalogue
from .delivery import DeliveryChargeRules
from .errors import InvalidArgument
from .offers import Offer, build_offer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PricingConfig:
    """
    Collaborators for a Basket, built from a plain dict (usually parsed YAML):

      version: "1"
      products: {R01: 32.95, G01: 24.95, B01: 7.95}
      delivery_tiers:
        - {minimum_order_amount: 90, delivery_cost: 0}
        - {minimum_order_amount: 50, delivery_cost: 2.95}
        - {minimum_order_amount: 0, delivery_cost: 4.95}
      offers:
        - {type: pair_discount, product_code: R01, discount_percentage: 0.5}

    A missing products/delivery_tiers section means the defaults; an explicit
    `delivery_tiers: null` means no delivery charge at all. A missing offers
    section means no offers.
    """

    catalogue: ProductCatalogue
    delivery_charge_rules: Optional[DeliveryChargeRules]
    offers: List[Offer] = field(default_factory=list)
    version: str = "1"

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "PricingConfig":
        if not isinstance(raw, Mapping):
            raise InvalidArgument(
                f"pricing config must be a mapping, got {type(raw).__name__}"
            )

        catalogue = ProductCatalogue(raw.get("products"))

        if "delivery_tiers" in raw and raw["delivery_tiers"] is None:
            delivery: Optional[DeliveryChargeRules] = None
        else:
            delivery = DeliveryChargeRules(raw.get("delivery_tiers"))

        raw_offers = raw.get("offers") or []
        if not isinstance(raw_offers, list):
            raise InvalidArgument("offers must be a list")
        offers = [build_offer(o) for o in raw_offers]

        return PricingConfig(
            catalogue=catalogue,
            delivery_charge_rules=delivery,
            offers=offers,
            version=str(raw.get("version") or "1"),
        )

    @staticmethod
    def from_yaml_file(path: str | Path) -> "PricingConfig":
        p = Path(path)
        if not p.exists():
            raise InvalidArgument(f"Pricing config not found: {p}")

        try:
            with p.open("r", encoding="utf-8") as f:
                raw: Dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidArgument(f"Pricing config is not valid YAML: {p}") from e

        config = PricingConfig.from_dict(raw)
        logger.info(
            "pricing_config_loaded",
            path=str(p),
            version=config.version,
            products=len(config.catalogue),
            offers=len(config.offers),
        )
        return config

    def build_basket(self) -> Basket:
        return Basket(
            self.catalogue,
            delivery_charge_rules=self.delivery_charge_rules,
            offers=list(self.offers),
        )


def load_pricing_config(path: str | Path) -> PricingConfig:
    return PricingConfig.from_yaml_file(path)
