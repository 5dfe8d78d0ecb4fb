from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import PriceRecord
from fuel_price_bh.utils.calendar.semesters import is_period_label


class DataQualityError(RuntimeError):
    pass


def validate_fuel_price_frame(df: pd.DataFrame, required: Sequence[str]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataQualityError(f"Missing columns: {missing}")


def validate_price_records(records: Iterable[PriceRecord]) -> None:
    for i, r in enumerate(records):
        if not r.price > 0:
            raise DataQualityError(f"price must be > 0 (record {i}: {r.price})")
        if not is_period_label(r.period):
            raise DataQualityError(f"period fora do padrão YYYYS1|YYYYS2 (record {i}: {r.period!r})")
        if not r.product:
            raise DataQualityError(f"product vazio (record {i})")
