# Ensure registration happens by importing modules
from .base import (  # noqa
    Offer,
    build_offer,
    offer_registry,
    register,
    validate_offer_collection,
)
from . import pair_discount  # noqa
from .pair_discount import PairDiscountOffer  # noqa
