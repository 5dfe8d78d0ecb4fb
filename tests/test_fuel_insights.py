from datetime import date

import pytest

from fuel_price_bh.domain.fuel_prices.insights import classify_variability, outlier_insight, synthesize_insights
from fuel_price_bh.domain.fuel_prices.models import (
    InsightKind,
    OutlierInsight,
    ParityInsight,
    RegionalDisparityInsight,
    ReportConfig,
    TrendDirection,
    TrendInsight,
    VariabilityInsight,
    VariabilityLevel,
)


def test_insight_kinds_are_fixed_per_variant():
    assert TrendInsight.kind == InsightKind.TREND
    assert RegionalDisparityInsight.kind == InsightKind.REGIONAL_DISPARITY
    assert VariabilityInsight.kind == InsightKind.VARIABILITY
    assert ParityInsight.kind == InsightKind.PARITY
    assert OutlierInsight.kind == InsightKind.OUTLIERS


def test_full_synthesis_keeps_fixed_order(sample_records):
    insights = synthesize_insights(sample_records, sample_records)

    kinds = [i.kind for i in insights]
    assert kinds[:4] == [
        InsightKind.TREND,
        InsightKind.REGIONAL_DISPARITY,
        InsightKind.VARIABILITY,
        InsightKind.PARITY,
    ]
    for insight in insights:
        assert insight.title
        assert insight.summary
        assert isinstance(insight.details, tuple)


def test_trend_insight_impact_uses_weekly_consumption(make_record):
    records = [
        make_record(d=date(2022, 3, 1), price=5.0),
        make_record(d=date(2022, 9, 1), price=5.5),
    ]

    trend = synthesize_insights(records, records, ReportConfig(weekly_liters=40))[0]

    assert isinstance(trend, TrendInsight)
    assert trend.first_period == "2022S1"
    assert trend.last_period == "2022S2"
    assert trend.total_variation == pytest.approx(10.0)
    assert trend.direction == TrendDirection.RISING
    assert trend.impact == pytest.approx(0.5 * 40 * 52)


def test_regional_insight_reports_extremes_and_impact(make_record):
    records = [
        make_record(region="Barreiro", price=5.0),
        make_record(region="Barreiro", price=5.0),
        make_record(region="Centro-Sul", price=6.0),
        make_record(region="Centro-Sul", price=6.0),
    ]

    regional = next(i for i in synthesize_insights(records, records) if i.kind == InsightKind.REGIONAL_DISPARITY)

    assert regional.cheapest == "Barreiro"
    assert regional.most_expensive == "Centro-Sul"
    assert regional.spread == pytest.approx(20.0)
    assert regional.impact == pytest.approx(1.0 * 40 * 52)


def test_parity_insight_recommends_ethanol_under_seventy_percent(make_record):
    records = [make_record(product="ETANOL", price=4.0), make_record(product="GASOLINA", price=6.0)]

    parity = next(i for i in synthesize_insights(records, records) if i.kind == InsightKind.PARITY)

    assert parity.ratio == pytest.approx(66.67, abs=0.01)
    assert parity.ethanol_preferable is True
    assert parity.impact == pytest.approx((0.7 * 6.0 - 4.0) * 40 * 52)


def test_empty_filtered_set_emits_no_region_or_parity_insights(sample_records):
    insights = synthesize_insights(sample_records, [])
    kinds = {i.kind for i in insights}

    assert InsightKind.REGIONAL_DISPARITY not in kinds
    assert InsightKind.PARITY not in kinds
    assert InsightKind.TREND not in kinds
    variability = next(i for i in insights if i.kind == InsightKind.VARIABILITY)
    assert variability.level == VariabilityLevel.LOW
    assert variability.cv == 0.0


def test_variability_insight_always_emitted(make_record):
    records = [make_record(price=5.0)]
    insights = synthesize_insights(records, records)
    assert [i.kind for i in insights] == [InsightKind.VARIABILITY]


@pytest.mark.parametrize(
    "cv,expected",
    [
        (15.1, VariabilityLevel.HIGH),
        (15.0, VariabilityLevel.MODERATE),
        (8.01, VariabilityLevel.MODERATE),
        (8.0, VariabilityLevel.LOW),
        (0.0, VariabilityLevel.LOW),
    ],
)
def test_classify_variability(cv, expected):
    assert classify_variability(cv) == expected


def test_outlier_insight_over_two_percent_of_full_dataset(make_record):
    full = [make_record(price=5.0) for _ in range(9)] + [make_record(price=50.0)]

    insight = outlier_insight(full)

    assert insight.outlier_count == 1
    assert insight.outlier_fraction == pytest.approx(0.1)
    assert insight.impact is None

    insights = synthesize_insights(full, [])
    assert insights[-1].kind == InsightKind.OUTLIERS


def test_outlier_insight_suppressed_at_exactly_two_percent(make_record):
    full = [make_record(price=5.0) for _ in range(49)] + [make_record(price=50.0)]
    assert outlier_insight(full) is None
    assert outlier_insight([]) is None
