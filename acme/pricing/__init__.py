from .basket import Basket, BasketBreakdown  # noqa
from .catalogue import DEFAULT_PRODUCTS, ProductCatalogue  # noqa
from .config import PricingConfig, load_pricing_config  # noqa
from .delivery import DEFAULT_DELIVERY_TIERS, DeliveryChargeRules, DeliveryTier  # noqa
from .errors import InvalidArgument  # noqa
from .factory import create_basket, default_pricing_config  # noqa
from .offers import Offer, PairDiscountOffer, build_offer, offer_registry  # noqa
