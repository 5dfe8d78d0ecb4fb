from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import (
    CorrelationResult,
    DistributionReport,
    Insight,
    LinearFit,
    OverviewStats,
    RegionalResult,
    TrendResult,
)

_PARITY_COLUMNS = ("product_a", "product_b", "mean_a", "mean_b", "ratio", "a_preferable")


def overview_table(overview: OverviewStats) -> pd.DataFrame:
    """Formato longo: dimension | key | records."""
    rows = []
    for dimension, counts in (
        ("period", overview.records_by_period),
        ("product", overview.records_by_product),
        ("region", overview.records_by_region),
        ("brand", overview.records_by_brand),
    ):
        rows.extend({"dimension": dimension, "key": k, "records": v} for k, v in counts.items())
    return pd.DataFrame(rows, columns=["dimension", "key", "records"])


def distribution_table(report: DistributionReport) -> pd.DataFrame:
    rows = []
    for product, stats in [("ALL", report.overall)] + list(report.by_product.items()):
        row = asdict(stats)
        row["outliers"] = len(stats.outliers)
        row["product"] = product
        rows.append(row)
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    return df[["product"] + [c for c in df.columns if c != "product"]]


def trend_table(trend: TrendResult) -> pd.DataFrame:
    """Uma linha por semestre (observado ou projetado) + uma coluna por produto."""
    rows = []
    for i, (period, mean) in enumerate(zip(trend.periods, trend.period_means)):
        row = {"period": period, "x": i, "mean_price": mean, "projected": False}
        for product, series in trend.product_series.items():
            row[product] = series[i]
        rows.append(row)

    for p in trend.projections:
        rows.append({"period": p.period, "x": p.x, "mean_price": p.price, "projected": True})

    df = pd.DataFrame(rows)
    if not df.empty:
        fit = trend.fit
        df["slope"] = fit.slope if isinstance(fit, LinearFit) else None
        df["intercept"] = fit.intercept if isinstance(fit, LinearFit) else None
        df["direction"] = trend.direction.value
        df["is_seasonal"] = trend.is_seasonal
    return df


def regional_table(regional: RegionalResult) -> pd.DataFrame:
    df = pd.DataFrame(
        [asdict(r) for r in regional.ranking],
        columns=["region", "mean", "median", "std", "min", "max", "count"],
    )
    df.insert(0, "rank", range(1, len(df) + 1))
    df["spread"] = regional.spread
    return df


def correlation_table(correlation: CorrelationResult) -> pd.DataFrame:
    """Linha única: correlação preço x tempo + paridade (vazia sem os dois produtos)."""
    row = asdict(correlation.price_time)
    row["strength"] = correlation.price_time.strength.value
    parity = correlation.parity
    for field in _PARITY_COLUMNS:
        row[field] = getattr(parity, field) if parity is not None else None
    return pd.DataFrame([row], columns=["r", "strength", "n"] + list(_PARITY_COLUMNS))


def insights_table(insights: Sequence[Insight]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "kind": i.kind.value,
                "title": i.title,
                "summary": i.summary,
                "details": " | ".join(i.details),
                "impact": i.impact,
            }
            for i in insights
        ],
        columns=["kind", "title", "summary", "details", "impact"],
    )
