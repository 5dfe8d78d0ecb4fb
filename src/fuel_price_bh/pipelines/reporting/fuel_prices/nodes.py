from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import FilterSpec, PriceRecord, ReportView
from fuel_price_bh.domain.fuel_prices.normalize import records_from_frame
from fuel_price_bh.domain.fuel_prices.service import (
    FuelPriceReportSession,
    filter_spec_from_params,
    report_config_from_params,
)
from fuel_price_bh.domain.fuel_prices.tables import (
    correlation_table,
    distribution_table,
    insights_table,
    overview_table,
    regional_table,
    trend_table,
)

logger = logging.getLogger(__name__)


def build_price_records(fuel_prices_raw: pd.DataFrame, params: Mapping[str, Any]) -> List[PriceRecord]:
    records = records_from_frame(
        fuel_prices_raw,
        column_map=params.get("column_map"),
        region_map=params.get("region_map"),
    )
    logger.info("Registros normalizados: %s (linhas brutas=%s)", len(records), len(fuel_prices_raw))
    return records


def build_filter_spec(params: Mapping[str, Any]) -> FilterSpec:
    return filter_spec_from_params(params.get("filter"))


def build_report_tables(
    records: List[PriceRecord],
    filter_spec: FilterSpec,
    params: Mapping[str, Any],
) -> Tuple[pd.DataFrame, ...]:
    """
    Retorna (overview, distribution, temporal, regional, correlation, insights) já tabulados
    para o colaborador de renderização.
    """
    session = FuelPriceReportSession(records, config=report_config_from_params(params.get("report")))
    session.apply_filter(filter_spec)

    return (
        overview_table(session.report(ReportView.OVERVIEW)),
        distribution_table(session.report(ReportView.DISTRIBUTION)),
        trend_table(session.report(ReportView.TEMPORAL)),
        regional_table(session.report(ReportView.REGIONAL)),
        correlation_table(session.report(ReportView.CORRELATION)),
        insights_table(session.report(ReportView.INSIGHTS)),
    )
