from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Sequence, Type

from ..errors import InvalidArgument
from ..money import D

if TYPE_CHECKING:
    from ..catalogue import ProductCatalogue


class Offer:
    """
    Base class for all offers. Every offer must implement
    calculate_discount(items, catalogue) and return a non-negative Decimal.

    items: ordered product codes currently in the basket (duplicates allowed)
    catalogue: the basket's ProductCatalogue (read-only)
    """

    type_name: str = "base"

    def calculate_discount(self, items: Sequence[str], catalogue: "ProductCatalogue") -> D:
        raise NotImplementedError(f"{type(self).__name__} must implement calculate_discount")

    def conflicts_with(self, other: "Offer") -> bool:
        return False

    @classmethod
    def validate_collection(cls, offers: Sequence[Any]) -> None:
        """Hook for cross-offer checks over a basket's full offer list."""


# Registry: offer type -> Offer class
offer_registry: Dict[str, Type[Offer]] = {}


def register(offer_cls: Type[Offer]) -> Type[Offer]:
    """
    Decorator to register an offer by its type_name.
    Fails fast on duplicate registrations.
    """
    key = getattr(offer_cls, "type_name", None)
    if not key or key == Offer.type_name:
        raise ValueError(f"Offer class {offer_cls.__name__} has no type_name")

    if key in offer_registry and offer_registry[key] is not offer_cls:
        raise ValueError(
            f"Duplicate offer registration for type '{key}': "
            f"{offer_registry[key].__name__} vs {offer_cls.__name__}"
        )

    offer_registry[key] = offer_cls
    return offer_cls


def build_offer(spec: Mapping[str, Any]) -> Offer:
    """
    Instantiate a registered offer from a config entry:

      {"type": "pair_discount", "product_code": "R01", "discount_percentage": 0.5}
    """
    if not isinstance(spec, Mapping):
        raise InvalidArgument(f"offer spec must be a mapping, got {type(spec).__name__}")

    params = dict(spec)
    type_name = params.pop("type", None)
    offer_cls = offer_registry.get(str(type_name)) if type_name else None
    if offer_cls is None:
        raise InvalidArgument(
            f"Unknown offer type '{type_name}'. Registered: {sorted(offer_registry)}"
        )

    try:
        return offer_cls(**params)
    except TypeError as e:
        raise InvalidArgument(f"Invalid parameters for offer type '{type_name}': {e}") from e


def validate_offer_collection(offers: Sequence[Any]) -> None:
    """Run every registered offer type's collection check over `offers`."""
    for offer_cls in offer_registry.values():
        offer_cls.validate_collection(offers)
