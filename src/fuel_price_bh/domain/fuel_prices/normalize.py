from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import BH_REGIONS, UNIDENTIFIED_REGION, PriceRecord
from fuel_price_bh.domain.fuel_prices.validate import validate_fuel_price_frame, validate_price_records
from fuel_price_bh.utils.calendar.semesters import period_label

logger = logging.getLogger(__name__)

# colunas da série histórica da ANP (+ "Regional" já mapeada para BH)
DEFAULT_COLUMN_MAP = {
    "Data da Coleta": "date",
    "Produto": "product",
    "Valor de Venda": "price",
    "Regional": "region",
    "Bairro": "neighborhood",
    "Bandeira": "brand",
    "CNPJ da Revenda": "station_id",
}

REQUIRED_FIELDS = ("date", "product", "price")

_REGION_LOOKUP = {name.upper(): name for name in BH_REGIONS}


def _to_float_or_none(s) -> Optional[float]:
    if s is None or (isinstance(s, float) and pd.isna(s)):
        return None
    if isinstance(s, (int, float)):
        return float(s)
    s = str(s).strip()
    if s == "":
        return None
    # ANP publica com vírgula decimal ("5,49")
    s = s.replace(".", "").replace(",", ".") if "," in s else s
    try:
        return float(s)
    except ValueError:
        return None


def _clean(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def resolve_region(raw_region: str, neighborhood: str = "", region_map: Optional[Mapping[str, str]] = None) -> str:
    """
    Regional conhecida ou "Não Identificada".
    Sem regional na linha, tenta o mapa bairro -> regional (chave em maiúsculas).
    """
    region = _REGION_LOOKUP.get(raw_region.upper(), "") if raw_region else ""
    if not region and neighborhood and region_map:
        mapped = region_map.get(neighborhood.upper(), "")
        region = _REGION_LOOKUP.get(str(mapped).strip().upper(), "")
    return region or UNIDENTIFIED_REGION


def records_from_frame(
    df_raw: pd.DataFrame,
    column_map: Optional[Mapping[str, str]] = None,
    region_map: Optional[Mapping[str, str]] = None,
) -> List[PriceRecord]:
    cmap: Dict[str, str] = dict(column_map or DEFAULT_COLUMN_MAP)
    # mantém só colunas conhecidas (ignora extras)
    cols_present = [c for c in cmap if c in df_raw.columns]
    df = df_raw[cols_present].rename(columns=cmap).copy()
    validate_fuel_price_frame(df, REQUIRED_FIELDS)

    rmap = {str(k).strip().upper(): v for k, v in (region_map or {}).items()}

    dates = pd.to_datetime(df["date"], dayfirst=True, errors="coerce")
    out: List[PriceRecord] = []
    dropped = 0

    for idx, (_, row) in enumerate(df.iterrows()):
        ts = dates.iloc[idx]
        price = _to_float_or_none(row["price"])
        product = _clean(row["product"]).upper()
        if pd.isna(ts) or price is None or not product:
            dropped += 1
            continue

        d = ts.date()
        out.append(
            PriceRecord(
                date=d,
                period=period_label(d),
                product=product,
                price=price,
                region=resolve_region(
                    _clean(row.get("region")),
                    _clean(row.get("neighborhood")),
                    rmap,
                ),
                brand=_clean(row.get("brand")).upper(),
                station_id=_clean(row.get("station_id")),
            )
        )

    if dropped:
        logger.warning("Linhas descartadas (data/preço/produto ilegível): %s de %s", dropped, len(df))

    validate_price_records(out)
    return out
