from __future__ import annotations

from typing import Sequence

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import (
    UNIDENTIFIED_REGION,
    PriceRecord,
    RegionalResult,
    RegionSummary,
)

MIN_REGION_SAMPLE = 2


def analyze_regions(records: Sequence[PriceRecord]) -> RegionalResult:
    """
    Agrega por regional e ranqueia pela média (mais barata primeiro).

    Fica de fora: a regional "Não Identificada" e regionais com < 2 registros.
    spread = (média mais cara - média mais barata) / média mais barata * 100,
    só quando existem pelo menos 2 regionais qualificadas.
    """
    rows = [(r.region, r.price) for r in records if r.region != UNIDENTIFIED_REGION]
    if not rows:
        return RegionalResult(ranking=(), spread=None)

    df = pd.DataFrame(rows, columns=["region", "price"])
    agg = df.groupby("region")["price"].agg(["mean", "median", "std", "min", "max", "count"])
    agg = agg[agg["count"] >= MIN_REGION_SAMPLE]

    # desempate pelo nome => ranking estável a permutações da entrada
    agg = agg.reset_index().sort_values(["mean", "region"], kind="mergesort")

    ranking = tuple(
        RegionSummary(
            region=str(row["region"]),
            mean=float(row["mean"]),
            median=float(row["median"]),
            std=float(row["std"]),
            min=float(row["min"]),
            max=float(row["max"]),
            count=int(row["count"]),
        )
        for _, row in agg.iterrows()
    )

    spread = None
    if len(ranking) >= 2:
        cheapest, priciest = ranking[0].mean, ranking[-1].mean
        spread = (priciest - cheapest) / cheapest * 100

    return RegionalResult(ranking=ranking, spread=spread)
