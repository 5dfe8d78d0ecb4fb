from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from fuel_price_bh.domain.fuel_prices.cache import StatsCache
from fuel_price_bh.domain.fuel_prices.correlation import analyze_correlation
from fuel_price_bh.domain.fuel_prices.descriptive import build_distribution
from fuel_price_bh.domain.fuel_prices.filtering import apply_filter, filter_options
from fuel_price_bh.domain.fuel_prices.insights import synthesize_insights
from fuel_price_bh.domain.fuel_prices.models import (
    ALL,
    FilterOptions,
    FilterSpec,
    PriceRecord,
    ReportConfig,
    ReportView,
)
from fuel_price_bh.domain.fuel_prices.overview import summarize_overview
from fuel_price_bh.domain.fuel_prices.regional import analyze_regions
from fuel_price_bh.domain.fuel_prices.trend import analyze_trend

logger = logging.getLogger(__name__)


def report_config_from_params(params: Optional[Mapping[str, Any]]) -> ReportConfig:
    """Bloco params['report'] -> ReportConfig (campos ausentes ficam no default)."""
    params = params or {}
    default = ReportConfig()
    return ReportConfig(
        weekly_liters=float(params.get("weekly_liters", default.weekly_liters)),
        ethanol_product=str(params.get("ethanol_product", default.ethanol_product)).strip().upper(),
        gasoline_product=str(params.get("gasoline_product", default.gasoline_product)).strip().upper(),
    )


def filter_spec_from_params(params: Optional[Mapping[str, Any]]) -> FilterSpec:
    params = params or {}
    products = params.get("products") or []
    if isinstance(products, str):
        products = [products]
    return FilterSpec(
        period=str(params.get("period", ALL)),
        products=frozenset(str(p).strip().upper() for p in products),
        region=str(params.get("region", ALL)),
    )


class FuelPriceReportSession:
    """
    Estado de uma sessão de relatórios:
      - base completa (carregada uma vez, nunca alterada)
      - filtro ativo + subconjunto filtrado (None = ainda não filtrado)
      - cache de resultados por visão, limpo a cada troca de filtro
    """

    def __init__(
        self,
        records: Iterable[PriceRecord],
        config: Optional[ReportConfig] = None,
        cache: Optional[StatsCache] = None,
    ):
        self._records: Tuple[PriceRecord, ...] = tuple(records)
        self._cfg = config or ReportConfig()
        self._cache = cache if cache is not None else StatsCache()
        self._spec: Optional[FilterSpec] = None
        self._filtered: Optional[Tuple[PriceRecord, ...]] = None

    @property
    def records(self) -> Tuple[PriceRecord, ...]:
        return self._records

    @property
    def filter_spec(self) -> Optional[FilterSpec]:
        return self._spec

    @property
    def filtered(self) -> Optional[Tuple[PriceRecord, ...]]:
        return self._filtered

    @property
    def cache(self) -> StatsCache:
        return self._cache

    def options(self) -> FilterOptions:
        return filter_options(self._records)

    def apply_filter(self, spec: FilterSpec) -> Tuple[PriceRecord, ...]:
        # invalida antes de qualquer leitura poder ver resultado antigo
        self._cache.invalidate()
        self._spec = spec
        self._filtered = apply_filter(self._records, spec)
        logger.info(
            "Filtro aplicado: period=%s products=%s region=%s -> %s/%s registros",
            spec.period,
            sorted(spec.products) or "any",
            spec.region,
            len(self._filtered),
            len(self._records),
        )
        if not self._filtered:
            logger.warning("Filtro resultou em conjunto VAZIO (%s)", spec)
        return self._filtered

    def _active(self) -> Tuple[PriceRecord, ...]:
        if self._filtered is None:
            self.apply_filter(FilterSpec())
        return self._filtered  # type: ignore[return-value]

    def _calculators(self) -> Dict[ReportView, Callable[[], Any]]:
        return {
            ReportView.OVERVIEW: lambda: summarize_overview(self._records),
            ReportView.DISTRIBUTION: lambda: build_distribution(self._active()),
            ReportView.TEMPORAL: lambda: analyze_trend(self._active()),
            ReportView.REGIONAL: lambda: analyze_regions(self._active()),
            ReportView.CORRELATION: lambda: analyze_correlation(self._active(), self._cfg),
            ReportView.INSIGHTS: lambda: synthesize_insights(self._records, self._active(), self._cfg),
        }

    def report(self, view: Union[ReportView, str]) -> Any:
        """Resultado da visão, reaproveitando o cache enquanto o filtro não muda."""
        try:
            key = ReportView(view)
        except ValueError:
            raise ValueError(f"Visão desconhecida: {view!r}") from None

        self._active()
        return self._cache.get_or_compute(key, self._calculators()[key])
