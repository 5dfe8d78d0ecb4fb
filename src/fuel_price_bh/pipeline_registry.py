# src/fuel_price_bh/pipeline_registry.py
from __future__ import annotations

from kedro.pipeline import Pipeline

from fuel_price_bh.pipelines.reporting.fuel_prices.pipeline import create_pipeline as fuel_reports


def register_pipelines() -> dict[str, Pipeline]:
    reporting_fuel_prices = fuel_reports()

    pipelines = {
        "fuel_reports": reporting_fuel_prices,
    }

    pipelines["__default__"] = pipelines["fuel_reports"]

    return pipelines
