from decimal import Decimal

import pytest

from acme.pricing.catalogue import ProductCatalogue
from acme.pricing.errors import InvalidArgument
from acme.pricing.offers import PairDiscountOffer


def test_pair_discount_defaults():
    offer = PairDiscountOffer()
    assert offer.product_code == "R01"
    assert offer.discount_percentage == Decimal("0.5")


def test_pair_discount_rounds_half_away_from_zero(catalogue, pair_offer):
    # 32.95 * 0.5 = 16.475
    assert pair_offer.calculate_discount(["R01", "R01"], catalogue) == Decimal("16.48")


@pytest.mark.parametrize(
    "items, expected",
    [
        ([], "0.00"),
        (["R01"], "0.00"),
        (["R01", "G01", "R01"], "16.48"),
        (["R01", "R01", "R01"], "16.48"),
        (["R01"] * 4, "32.95"),
        (["G01", "G01", "B01"], "0.00"),
    ],
)
def test_pair_discount_counts_pairs_only(catalogue, pair_offer, items, expected):
    assert pair_offer.calculate_discount(items, catalogue) == Decimal(expected)


def test_pair_discount_for_other_product_and_percentage(catalogue):
    offer = PairDiscountOffer("G01", 0.25)
    # 24.95 * 0.25 = 6.2375 per pair
    assert offer.calculate_discount(["G01"] * 4, catalogue) == Decimal("12.48")


def test_pair_discount_zero_and_full_percentage(catalogue):
    assert PairDiscountOffer("B01", 0).calculate_discount(["B01", "B01"], catalogue) == Decimal("0.00")
    assert PairDiscountOffer("B01", 1).calculate_discount(["B01", "B01"], catalogue) == Decimal("7.95")


def test_pair_discount_for_product_missing_from_catalogue():
    cat = ProductCatalogue({"A": 10})
    assert PairDiscountOffer("R01").calculate_discount(["R01", "R01"], cat) == Decimal("0.00")


def test_conflicts_with_same_product_only():
    a = PairDiscountOffer("R01", 0.5)
    assert a.conflicts_with(PairDiscountOffer("R01", 0.25))
    assert not a.conflicts_with(PairDiscountOffer("G01", 0.5))
    assert not a.conflicts_with(object())


@pytest.mark.parametrize(
    "product_code, message",
    [
        (None, "cannot be None"),
        (42, "must be a string"),
        ("  ", "cannot be empty"),
    ],
)
def test_invalid_product_code(product_code, message):
    with pytest.raises(InvalidArgument, match=message):
        PairDiscountOffer(product_code, 0.5)


@pytest.mark.parametrize(
    "pct, message",
    [
        (None, "cannot be None"),
        ("0.5", "must be numeric"),
        (-0.1, "between 0 and 1"),
        (1.01, "between 0 and 1"),
    ],
)
def test_invalid_discount_percentage(pct, message):
    with pytest.raises(InvalidArgument, match=message):
        PairDiscountOffer("R01", pct)


def test_validate_collection_reports_all_conflicting_percentages():
    offers = [
        PairDiscountOffer("R01", 0.5),
        PairDiscountOffer("G01", 0.5),
        PairDiscountOffer("R01", 0.25),
    ]
    with pytest.raises(InvalidArgument) as exc:
        PairDiscountOffer.validate_collection(offers)

    msg = str(exc.value)
    assert "Multiple pair offers found for product 'R01'" in msg
    assert "PairDiscountOffer(50%) and PairDiscountOffer(25%)" in msg
    assert "Only one pair offer per product is allowed." in msg


def test_validate_collection_accepts_distinct_products_and_other_offers():
    PairDiscountOffer.validate_collection(
        [PairDiscountOffer("R01"), PairDiscountOffer("G01"), object()]
    )


def test_pair_discount_on_very_large_price():
    cat = ProductCatalogue({"BIG": 1e27})
    out = PairDiscountOffer("BIG").calculate_discount(["BIG", "BIG"], cat)
    assert out == Decimal("5E+26")
    assert out.as_tuple().exponent == -2
