# acme/pricing/catalogue.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidArgument
from .money import D, ZERO, is_number

DEFAULT_PRODUCTS: Dict[str, float] = {
    "R01": 32.95,  # Red Widget
    "G01": 24.95,  # Green Widget
    "B01": 7.95,  # Blue Widget
}


class ProductCatalogue:
    """
    Immutable product code -> unit price lookup.

    Prices are stored as Decimal. Omitting `products` gives DEFAULT_PRODUCTS;
    passing anything else (including an empty mapping) is validated as-is.
    """

    def __init__(self, products: Optional[Mapping[str, Any]] = None) -> None:
        if products is None:
            products = DEFAULT_PRODUCTS
        self._products: Dict[str, D] = self._validate(products)

    @staticmethod
    def _validate(products: Any) -> Dict[str, D]:
        if not isinstance(products, Mapping):
            raise InvalidArgument("products must be a mapping")
        if not products:
            raise InvalidArgument("products cannot be empty")

        out: Dict[str, D] = {}
        for code, price in products.items():
            if not isinstance(code, str) or not code.strip():
                raise InvalidArgument(f"product codes must be non-empty strings, got {code!r}")

            if not is_number(price):
                raise InvalidArgument(f"product prices must be numbers (code={code})")

            value = price if isinstance(price, D) else D(str(price))
            if not value.is_finite():
                raise InvalidArgument(f"product prices must be numbers (code={code})")
            # negative and zero get separate messages
            if value < ZERO:
                raise InvalidArgument(f"product prices cannot be negative (code={code})")
            if value == ZERO:
                raise InvalidArgument(f"product prices must be positive (code={code})")

            out[code] = value
        return out

    def lookup(self, code: str) -> Optional[D]:
        return self._products.get(code)

    def contains(self, code: str) -> bool:
        return code in self._products

    def __contains__(self, code: object) -> bool:
        return code in self._products

    def __len__(self) -> int:
        return len(self._products)

    def codes(self) -> Tuple[str, ...]:
        return tuple(self._products)

    def to_dict(self) -> Dict[str, D]:
        return dict(self._products)

    def __repr__(self) -> str:
        return f"ProductCatalogue({self._products!r})"
