from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import (
    InsufficientData,
    LinearFit,
    PriceRecord,
    Projection,
    TrendDirection,
    TrendResult,
)
from fuel_price_bh.utils.calendar.semesters import next_periods

logger = logging.getLogger(__name__)

TREND_THRESHOLD_PCT = 5.0
SEASONALITY_THRESHOLD = 0.03
PROJECTION_OFFSETS = (0, 1, 2)


def classify_trend(total_variation: float) -> TrendDirection:
    if total_variation > TREND_THRESHOLD_PCT:
        return TrendDirection.RISING
    if total_variation < -TREND_THRESHOLD_PCT:
        return TrendDirection.FALLING
    return TrendDirection.STABLE


def fit_linear(ys: Sequence[float]) -> Union[LinearFit, InsufficientData]:
    """
    Mínimos quadrados com x = 0..n-1 (índice do semestre).

    slope = (nΣxy - ΣxΣy) / (nΣx² - (Σx)²); intercept = (Σy - slope·Σx) / n
    Denominador zero (n <= 1) => InsufficientData, sem inventar número.
    """
    n = len(ys)
    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in enumerate(ys):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denominator = n * sum_x2 - sum_x ** 2
    if denominator == 0:
        return InsufficientData(reason="menos de 2 semestres para regressão", periods=n)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return LinearFit(slope=slope, intercept=intercept)


def project(fit: Union[LinearFit, InsufficientData], periods: Sequence[str]) -> Tuple[Projection, ...]:
    if not isinstance(fit, LinearFit) or not periods:
        return ()
    n = len(periods)
    labels = next_periods(periods[-1], len(PROJECTION_OFFSETS))
    return tuple(
        Projection(period=label, x=n + offset, price=fit.predict(n + offset))
        for offset, label in zip(PROJECTION_OFFSETS, labels)
    )


def pct_change(old: float, new: float) -> float:
    return (new - old) / old * 100


def _seasonality(periods: Sequence[str], means: Sequence[float]) -> Tuple[Optional[float], Optional[float], bool]:
    first_half = [m for p, m in zip(periods, means) if "S1" in p]
    second_half = [m for p, m in zip(periods, means) if "S2" in p]

    s1 = sum(first_half) / len(first_half) if first_half else None
    s2 = sum(second_half) / len(second_half) if second_half else None
    if s1 is None or s2 is None:
        return s1, s2, False

    avg_both = (s1 + s2) / 2
    if avg_both == 0:
        return s1, s2, False
    return s1, s2, abs(s2 - s1) / avg_both > SEASONALITY_THRESHOLD


def _records_df(records: Sequence[PriceRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "period": [r.period for r in records],
            "product": [r.product for r in records],
            "price": [r.price for r in records],
        }
    )


def _product_series(df: pd.DataFrame, periods: Sequence[str]) -> Dict[str, Tuple[Optional[float], ...]]:
    pivot = (
        df.pivot_table(index="period", columns="product", values="price", aggfunc="mean")
          .reindex(list(periods))
    )
    out: Dict[str, Tuple[Optional[float], ...]] = {}
    for product in sorted(pivot.columns):
        # combinação semestre/produto sem coleta => None (não zero)
        out[product] = tuple(None if pd.isna(v) else float(v) for v in pivot[product].tolist())
    return out


def analyze_trend(records: Sequence[PriceRecord]) -> TrendResult:
    if not records:
        return TrendResult.empty()

    df = _records_df(records)
    by_period = df.groupby("period")["price"].mean().sort_index()
    periods: List[str] = [str(p) for p in by_period.index]
    means: List[float] = [float(v) for v in by_period.tolist()]

    fit = fit_linear(means)
    if isinstance(fit, InsufficientData):
        logger.info("Regressão indefinida: %s (periods=%s)", fit.reason, fit.periods)

    variations = tuple(pct_change(a, b) for a, b in zip(means, means[1:]))
    total_variation = pct_change(means[0], means[-1]) if len(means) >= 2 else 0.0
    avg_volatility = sum(abs(v) for v in variations) / len(variations) if variations else 0.0
    s1, s2, seasonal = _seasonality(periods, means)

    return TrendResult(
        periods=tuple(periods),
        period_means=tuple(means),
        fit=fit,
        projections=project(fit, periods),
        total_variation=total_variation,
        period_variations=variations,
        average_volatility=avg_volatility,
        first_half_avg=s1,
        second_half_avg=s2,
        is_seasonal=seasonal,
        direction=classify_trend(total_variation),
        product_series=_product_series(df, periods),
    )
