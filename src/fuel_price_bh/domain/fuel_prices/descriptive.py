from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable, Sequence, Tuple

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import DescriptiveStats, DistributionReport, PriceRecord

IQR_FENCE = 1.5


def detect_outliers(values: Sequence[float], q1: float, q3: float, iqr: float) -> Tuple[float, ...]:
    """
    Valores fora de [Q1 - 1.5*IQR, Q3 + 1.5*IQR], na ordem de entrada.
    Quartis não finitos => nenhum outlier.
    """
    if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in (q1, q3, iqr)):
        return ()
    lower = q1 - IQR_FENCE * iqr
    upper = q3 + IQR_FENCE * iqr
    return tuple(v for v in values if v < lower or v > upper)


def _mode(values: Sequence[float]) -> float:
    # empate: primeiro valor encontrado na ordem original (não a ordem numérica)
    return float(Counter(values).most_common(1)[0][0])


def describe_prices(prices: Iterable[float]) -> DescriptiveStats:
    values = [float(p) for p in prices]
    if not values:
        return DescriptiveStats.empty()

    s = pd.Series(sorted(values), dtype="float64")
    n = len(s)

    mean = float(s.mean())
    std = float(s.std(ddof=1)) if n > 1 else 0.0
    # quantile "linear" == índice p*(n-1)
    q1 = float(s.quantile(0.25, interpolation="linear"))
    q3 = float(s.quantile(0.75, interpolation="linear"))
    iqr = q3 - q1
    cv = (std / mean * 100) if mean != 0 else 0.0

    return DescriptiveStats(
        count=n,
        mean=mean,
        median=float(s.median()),
        mode=_mode(values),
        std=std,
        min=float(s.iloc[0]),
        max=float(s.iloc[-1]),
        q1=q1,
        q3=q3,
        iqr=iqr,
        cv=cv,
        outliers=detect_outliers(values, q1, q3, iqr),
    )


def describe_records(records: Iterable[PriceRecord]) -> DescriptiveStats:
    return describe_prices(r.price for r in records)


def describe_by_product(records: Iterable[PriceRecord]) -> Dict[str, DescriptiveStats]:
    grouped: Dict[str, list] = {}
    for r in records:
        grouped.setdefault(r.product, []).append(r.price)
    return {product: describe_prices(grouped[product]) for product in sorted(grouped)}


def build_distribution(records: Sequence[PriceRecord]) -> DistributionReport:
    return DistributionReport(
        overall=describe_records(records),
        by_product=describe_by_product(records),
    )
