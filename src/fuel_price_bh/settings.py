"""Configurações do projeto kedro (hooks registrados aqui)."""

from fuel_price_bh.hooks import DataObservabilityHooks

HOOKS = (DataObservabilityHooks(),)
