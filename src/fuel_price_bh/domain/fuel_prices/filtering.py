from __future__ import annotations

from typing import Iterable, Tuple

from fuel_price_bh.domain.fuel_prices.models import (
    ALL,
    UNIDENTIFIED_REGION,
    FilterOptions,
    FilterSpec,
    PriceRecord,
)


def matches(record: PriceRecord, spec: FilterSpec) -> bool:
    # products vazio => qualquer produto (EMPTY_PRODUCTS_MEANS_ANY)
    return (
        (spec.period == ALL or record.period == spec.period)
        and (not spec.products or record.product in spec.products)
        and (spec.region == ALL or record.region == spec.region)
    )


def apply_filter(records: Iterable[PriceRecord], spec: FilterSpec) -> Tuple[PriceRecord, ...]:
    """Subconjunto da visão ativa, preservando a ordem original."""
    return tuple(r for r in records if matches(r, spec))


def filter_options(records: Iterable[PriceRecord]) -> FilterOptions:
    records = list(records)
    periods = sorted({r.period for r in records})
    products = sorted({r.product for r in records})
    regions = sorted({r.region for r in records if r.region != UNIDENTIFIED_REGION})
    return FilterOptions(periods=tuple(periods), products=tuple(products), regions=tuple(regions))
