from __future__ import annotations

from collections import Counter
from typing import Sequence

from fuel_price_bh.domain.fuel_prices.models import UNIDENTIFIED_REGION, OverviewStats, PriceRecord


def summarize_overview(records: Sequence[PriceRecord]) -> OverviewStats:
    """Contagens da visão geral (sempre sobre a base completa)."""
    products = sorted({r.product for r in records})
    regions = sorted({r.region for r in records if r.region != UNIDENTIFIED_REGION})

    return OverviewStats(
        total_records=len(records),
        unique_stations=len({r.station_id for r in records}),
        products=tuple(products),
        regions=tuple(regions),
        records_by_period=dict(sorted(Counter(r.period for r in records).items())),
        records_by_product=dict(Counter(r.product for r in records)),
        records_by_region=dict(Counter(r.region for r in records)),
        records_by_brand=dict(Counter(r.brand for r in records)),
    )
