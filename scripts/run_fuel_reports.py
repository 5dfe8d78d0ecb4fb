import sys

import pandas as pd

from fuel_price_bh.domain.fuel_prices.models import FilterSpec, ReportView
from fuel_price_bh.domain.fuel_prices.normalize import records_from_frame
from fuel_price_bh.domain.fuel_prices.service import FuelPriceReportSession


def main():
    csv_path = sys.argv[1] if len(sys.argv) > 1 else "data/01_raw/precos_combustiveis_bh.csv"

    df_raw = pd.read_csv(csv_path, sep=";", dtype=str, keep_default_na=False)
    records = records_from_frame(df_raw)

    session = FuelPriceReportSession(records)
    session.apply_filter(FilterSpec())

    overview = session.report(ReportView.OVERVIEW)
    print("Registros:", overview.total_records, "| Postos:", overview.unique_stations)
    print("Semestres:", ", ".join(overview.records_by_period))

    trend = session.report(ReportView.TEMPORAL)
    print(f"Variação total: {trend.total_variation:+.1f}% ({trend.direction.value})")
    for p in trend.projections:
        print(f" - projeção {p.period}: {p.price:.3f}")

    print("Insights:")
    for insight in session.report(ReportView.INSIGHTS):
        print(f" - [{insight.kind.value}] {insight.title}: {insight.summary}")


if __name__ == "__main__":
    main()
