from __future__ import annotations

from kedro.pipeline import Pipeline, node

from fuel_price_bh.pipelines.reporting.fuel_prices.nodes import (
    build_filter_spec,
    build_price_records,
    build_report_tables,
)


def create_pipeline(**kwargs) -> Pipeline:
    return Pipeline(
        [
            node(
                func=build_price_records,
                inputs=["fuel_prices_raw", "params:fuel_reports"],
                outputs="fuel_price_records",
                name="reporting_fuel_prices_build_records",
            ),
            node(
                func=build_filter_spec,
                inputs="params:fuel_reports",
                outputs="fuel_price_filter_spec",
                name="reporting_fuel_prices_build_filter",
            ),
            node(
                func=build_report_tables,
                inputs=["fuel_price_records", "fuel_price_filter_spec", "params:fuel_reports"],
                outputs=[
                    "fuel_report_overview",
                    "fuel_report_distribution",
                    "fuel_report_temporal",
                    "fuel_report_regional",
                    "fuel_report_correlation",
                    "fuel_report_insights",
                ],
                name="reporting_fuel_prices_build_tables",
            ),
        ]
    )
