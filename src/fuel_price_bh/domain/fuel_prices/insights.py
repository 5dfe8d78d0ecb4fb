from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from fuel_price_bh.domain.fuel_prices.correlation import price_parity
from fuel_price_bh.domain.fuel_prices.descriptive import describe_records
from fuel_price_bh.domain.fuel_prices.models import (
    Insight,
    OutlierInsight,
    ParityInsight,
    PriceRecord,
    RegionalDisparityInsight,
    ReportConfig,
    TrendDirection,
    TrendInsight,
    VariabilityInsight,
    VariabilityLevel,
)
from fuel_price_bh.domain.fuel_prices.regional import analyze_regions
from fuel_price_bh.domain.fuel_prices.trend import analyze_trend

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
CV_HIGH = 15.0
CV_MODERATE = 8.0
OUTLIER_FRACTION_THRESHOLD = 0.02
PARITY_FACTOR = 0.70

_DIRECTION_TITLE = {
    TrendDirection.RISING: "Preços em alta",
    TrendDirection.FALLING: "Preços em queda",
    TrendDirection.STABLE: "Preços estáveis",
}


def classify_variability(cv: float) -> VariabilityLevel:
    if cv > CV_HIGH:
        return VariabilityLevel.HIGH
    if cv > CV_MODERATE:
        return VariabilityLevel.MODERATE
    return VariabilityLevel.LOW


def _annualized(price_delta: float, cfg: ReportConfig) -> float:
    return price_delta * cfg.weekly_liters * WEEKS_PER_YEAR


def trend_insight(records: Sequence[PriceRecord], cfg: ReportConfig) -> Optional[TrendInsight]:
    trend = analyze_trend(records)
    if len(trend.periods) < 2:
        return None

    first, last = trend.period_means[0], trend.period_means[-1]
    details = [
        f"Média em {trend.periods[0]}: {first:.3f}; em {trend.periods[-1]}: {last:.3f}.",
        f"Volatilidade média entre semestres: {trend.average_volatility:.1f}%.",
    ]
    if trend.is_seasonal:
        details.append("Diferença persistente entre 1º e 2º semestres (sazonalidade > 3%).")

    return TrendInsight(
        title=_DIRECTION_TITLE[trend.direction],
        summary=(
            f"Variação de {trend.total_variation:+.1f}% entre {trend.periods[0]} e {trend.periods[-1]}."
        ),
        details=tuple(details),
        impact=_annualized(last - first, cfg),
        first_period=trend.periods[0],
        last_period=trend.periods[-1],
        total_variation=trend.total_variation,
        direction=trend.direction,
    )


def regional_insight(records: Sequence[PriceRecord], cfg: ReportConfig) -> Optional[RegionalDisparityInsight]:
    regional = analyze_regions(records)
    if regional.spread is None:
        return None

    cheapest, priciest = regional.cheapest, regional.most_expensive
    return RegionalDisparityInsight(
        title="Disparidade regional",
        summary=(
            f"{priciest.region} é {regional.spread:.1f}% mais cara que {cheapest.region}."
        ),
        details=(
            f"Regional mais barata: {cheapest.region} (média {cheapest.mean:.3f}, n={cheapest.count}).",
            f"Regional mais cara: {priciest.region} (média {priciest.mean:.3f}, n={priciest.count}).",
        ),
        impact=_annualized(priciest.mean - cheapest.mean, cfg),
        cheapest=cheapest.region,
        most_expensive=priciest.region,
        spread=regional.spread,
    )


def variability_insight(records: Sequence[PriceRecord], cfg: ReportConfig) -> VariabilityInsight:
    stats = describe_records(records)
    level = classify_variability(stats.cv)
    return VariabilityInsight(
        title="Variabilidade de preços",
        summary=f"Coeficiente de variação de {stats.cv:.1f}% ({level.value}).",
        details=(
            f"Desvio padrão: {stats.std:.3f}; amplitude: {stats.min:.3f} a {stats.max:.3f}.",
        ),
        impact=_annualized(stats.mean - stats.min, cfg),
        cv=stats.cv,
        level=level,
    )


def parity_insight(records: Sequence[PriceRecord], cfg: ReportConfig) -> Optional[ParityInsight]:
    parity = price_parity(records, cfg.ethanol_product, cfg.gasoline_product)
    if parity is None:
        return None

    if parity.a_preferable:
        recommendation = f"{parity.product_a} compensa (razão <= 70%)."
    else:
        recommendation = f"{parity.product_b} compensa (razão > 70%)."

    return ParityInsight(
        title="Paridade etanol/gasolina",
        summary=f"{parity.product_a} custa {parity.ratio:.1f}% do preço de {parity.product_b}.",
        details=(
            f"Média {parity.product_a}: {parity.mean_a:.3f}; média {parity.product_b}: {parity.mean_b:.3f}.",
            recommendation,
        ),
        impact=_annualized(PARITY_FACTOR * parity.mean_b - parity.mean_a, cfg),
        ratio=parity.ratio,
        ethanol_preferable=parity.a_preferable,
    )


def outlier_insight(all_records: Sequence[PriceRecord]) -> Optional[OutlierInsight]:
    stats = describe_records(all_records)
    if stats.is_empty:
        return None

    fraction = len(stats.outliers) / stats.count
    if fraction <= OUTLIER_FRACTION_THRESHOLD:
        return None

    return OutlierInsight(
        title="Preços atípicos",
        summary=f"{len(stats.outliers)} registros ({fraction * 100:.1f}%) fora da cerca de 1,5×IQR.",
        details=(
            f"Cerca inferior: {stats.q1 - 1.5 * stats.iqr:.3f}; superior: {stats.q3 + 1.5 * stats.iqr:.3f}.",
        ),
        impact=None,
        outlier_count=len(stats.outliers),
        outlier_fraction=fraction,
    )


def synthesize_insights(
    all_records: Sequence[PriceRecord],
    filtered_records: Sequence[PriceRecord],
    config: Optional[ReportConfig] = None,
) -> Tuple[Insight, ...]:
    """
    Ordem fixa: tendência, regional, variabilidade, paridade, outliers.
    Outliers usam a base completa; o resto usa a visão filtrada.
    """
    cfg = config or ReportConfig()

    candidates: List[Optional[Insight]] = [
        trend_insight(filtered_records, cfg),
        regional_insight(filtered_records, cfg),
        variability_insight(filtered_records, cfg),
        parity_insight(filtered_records, cfg),
        outlier_insight(all_records),
    ]
    insights = tuple(i for i in candidates if i is not None)
    logger.debug("Insights gerados: %s", [i.kind.value for i in insights])
    return insights
