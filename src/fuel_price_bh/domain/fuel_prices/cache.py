from __future__ import annotations

import logging
from typing import Any, Callable, Dict, TypeVar, Union

from fuel_price_bh.domain.fuel_prices.models import ReportView

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _view_key(view: Union[ReportView, str]) -> ReportView:
    try:
        return ReportView(view)
    except ValueError:
        raise ValueError(f"Visão desconhecida: {view!r}") from None


class StatsCache:
    """
    Resultado por visão (overview, distribution, ...) até o filtro mudar.

    Sem expiração por tempo: invalidate() limpa tudo de uma vez e cada visão é
    recalculada sob demanda no próximo acesso.
    """

    def __init__(self) -> None:
        self._entries: Dict[ReportView, Any] = {}

    def get_or_compute(self, view: Union[ReportView, str], compute: Callable[[], T]) -> T:
        key = _view_key(view)
        if key in self._entries:
            logger.debug("Cache hit: view=%s", key.value)
            return self._entries[key]

        logger.debug("Cache miss: view=%s", key.value)
        value = compute()
        self._entries[key] = value
        return value

    def invalidate(self) -> None:
        if self._entries:
            logger.info("Cache invalidado (%s visões descartadas)", len(self._entries))
        self._entries = {}

    def __contains__(self, view: object) -> bool:
        try:
            return _view_key(view) in self._entries  # type: ignore[arg-type]
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._entries)
