from __future__ import annotations

import math
from typing import Optional, Sequence

from fuel_price_bh.domain.fuel_prices.models import (
    CorrelationResult,
    CorrelationStrength,
    ParityResult,
    PriceRecord,
    ReportConfig,
    TimeCorrelation,
)
from fuel_price_bh.utils.calendar.semesters import month_ordinal

PARITY_THRESHOLD = 70.0

# |r| mínimo de cada faixa (limiares fixos, não estimados)
_STRENGTH_BANDS = (
    (0.8, CorrelationStrength.VERY_STRONG),
    (0.6, CorrelationStrength.STRONG),
    (0.4, CorrelationStrength.MODERATE),
    (0.2, CorrelationStrength.WEAK),
)


def pearson(a: Sequence[float], b: Sequence[float]) -> float:
    """
    r = Σ(dx·dy) / sqrt(Σdx² · Σdy²)

    Retorna 0.0 (contrato, não erro) quando os tamanhos diferem, a série é vazia
    ou uma das séries tem variância zero.
    """
    n = len(a)
    if n == 0 or n != len(b):
        return 0.0

    mean_a = sum(a) / n
    mean_b = sum(b) / n
    sxy = sxx = syy = 0.0
    for x, y in zip(a, b):
        dx = x - mean_a
        dy = y - mean_b
        sxy += dx * dy
        sxx += dx * dx
        syy += dy * dy

    if sxx == 0 or syy == 0:
        return 0.0
    return sxy / math.sqrt(sxx * syy)


def classify_strength(r: float) -> CorrelationStrength:
    magnitude = abs(r)
    for lower, strength in _STRENGTH_BANDS:
        if magnitude >= lower:
            return strength
    return CorrelationStrength.NEGLIGIBLE


def price_time_correlation(records: Sequence[PriceRecord]) -> TimeCorrelation:
    prices = [r.price for r in records]
    months = [float(month_ordinal(r.date)) for r in records]
    r = pearson(prices, months)
    return TimeCorrelation(r=r, strength=classify_strength(r), n=len(prices))


def _mean_price(records: Sequence[PriceRecord], product: str) -> Optional[float]:
    prices = [r.price for r in records if r.product == product]
    if not prices:
        return None
    return sum(prices) / len(prices)


def price_parity(records: Sequence[PriceRecord], product_a: str, product_b: str) -> Optional[ParityResult]:
    """Regra dos 70%: A compensa quando média(A)/média(B) <= 70%."""
    mean_a = _mean_price(records, product_a)
    mean_b = _mean_price(records, product_b)
    if mean_a is None or mean_b is None:
        return None

    ratio = mean_a / mean_b * 100
    return ParityResult(
        product_a=product_a,
        product_b=product_b,
        mean_a=mean_a,
        mean_b=mean_b,
        ratio=ratio,
        a_preferable=ratio <= PARITY_THRESHOLD,
    )


def analyze_correlation(records: Sequence[PriceRecord], config: Optional[ReportConfig] = None) -> CorrelationResult:
    cfg = config or ReportConfig()
    return CorrelationResult(
        price_time=price_time_correlation(records),
        parity=price_parity(records, cfg.ethanol_product, cfg.gasoline_product),
    )
