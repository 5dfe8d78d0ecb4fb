from datetime import date

import pytest

from fuel_price_bh.domain.fuel_prices.correlation import (
    analyze_correlation,
    classify_strength,
    pearson,
    price_parity,
    price_time_correlation,
)
from fuel_price_bh.domain.fuel_prices.models import CorrelationStrength, ReportConfig


def test_pearson_is_symmetric():
    a = [5.1, 5.3, 5.2, 5.8, 6.0]
    b = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert pearson(a, b) == pytest.approx(pearson(b, a))


def test_pearson_of_series_with_itself_is_one():
    a = [3.2, 4.8, 4.1, 5.5]
    assert pearson(a, a) == pytest.approx(1.0)


def test_pearson_perfect_negative():
    assert pearson([1.0, 2.0, 3.0], [6.0, 4.0, 2.0]) == pytest.approx(-1.0)


def test_pearson_zero_variance_is_zero():
    assert pearson([5.0, 5.0, 5.0], [5.0, 5.0, 5.0]) == 0.0
    assert pearson([5.0, 5.0, 5.0], [1.0, 2.0, 3.0]) == 0.0


def test_pearson_mismatched_or_empty_is_zero():
    assert pearson([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0
    assert pearson([], []) == 0.0


@pytest.mark.parametrize(
    "r,expected",
    [
        (0.8, CorrelationStrength.VERY_STRONG),
        (-0.95, CorrelationStrength.VERY_STRONG),
        (-0.65, CorrelationStrength.STRONG),
        (0.4, CorrelationStrength.MODERATE),
        (0.2, CorrelationStrength.WEAK),
        (0.19, CorrelationStrength.NEGLIGIBLE),
        (0.0, CorrelationStrength.NEGLIGIBLE),
    ],
)
def test_classify_strength_bands(r, expected):
    assert classify_strength(r) == expected


def test_price_time_correlation_for_rising_prices(make_record):
    records = [
        make_record(d=date(2022, 1, 10), price=5.0),
        make_record(d=date(2022, 6, 10), price=5.3),
        make_record(d=date(2023, 1, 10), price=5.7),
        make_record(d=date(2023, 6, 10), price=6.1),
    ]

    corr = price_time_correlation(records)

    assert corr.n == 4
    assert corr.r > 0.95
    assert corr.strength == CorrelationStrength.VERY_STRONG


def test_price_parity_scenario_a_preferable(make_record):
    records = [
        make_record(product="ETANOL", price=3.5),
        make_record(product="ETANOL", price=4.5),
        make_record(product="GASOLINA", price=6.0),
    ]

    parity = price_parity(records, "ETANOL", "GASOLINA")

    assert parity.mean_a == pytest.approx(4.0)
    assert parity.mean_b == pytest.approx(6.0)
    assert parity.ratio == pytest.approx(66.67, abs=0.01)
    assert parity.a_preferable is True


def test_price_parity_above_seventy_percent(make_record):
    records = [make_record(product="ETANOL", price=4.5), make_record(product="GASOLINA", price=5.0)]
    parity = price_parity(records, "ETANOL", "GASOLINA")
    assert parity.ratio == pytest.approx(90.0)
    assert parity.a_preferable is False


def test_price_parity_missing_group_is_none(make_record):
    assert price_parity([make_record(product="GASOLINA")], "ETANOL", "GASOLINA") is None
    assert price_parity([], "ETANOL", "GASOLINA") is None


def test_analyze_correlation_uses_configured_products(make_record):
    records = [
        make_record(product="GNV", price=4.0),
        make_record(product="DIESEL S10", price=5.0),
    ]

    default = analyze_correlation(records)
    custom = analyze_correlation(records, ReportConfig(ethanol_product="GNV", gasoline_product="DIESEL S10"))

    assert default.parity is None
    assert custom.parity.ratio == pytest.approx(80.0)
    assert custom.price_time.n == 2
