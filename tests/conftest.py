from datetime import date

import pytest

from fuel_price_bh.domain.fuel_prices.models import PriceRecord
from fuel_price_bh.utils.calendar.semesters import period_label


def _record(
    *,
    d: date = date(2023, 3, 15),
    product: str = "GASOLINA",
    price: float = 5.49,
    region: str = "Centro-Sul",
    brand: str = "IPIRANGA",
    station_id: str = "00.000.000/0001-00",
) -> PriceRecord:
    return PriceRecord(
        date=d,
        period=period_label(d),
        product=product,
        price=price,
        region=region,
        brand=brand,
        station_id=station_id,
    )


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def sample_records():
    """Base pequena cobrindo 2 semestres, 3 regionais, etanol e gasolina."""
    return [
        _record(d=date(2022, 2, 10), product="GASOLINA", price=5.00, region="Barreiro", brand="SHELL", station_id="A"),
        _record(d=date(2022, 3, 10), product="GASOLINA", price=5.20, region="Barreiro", brand="SHELL", station_id="B"),
        _record(d=date(2022, 4, 10), product="ETANOL", price=3.40, region="Centro-Sul", brand="IPIRANGA", station_id="C"),
        _record(d=date(2022, 5, 10), product="GASOLINA", price=5.60, region="Centro-Sul", brand="IPIRANGA", station_id="C"),
        _record(d=date(2022, 8, 10), product="GASOLINA", price=5.80, region="Centro-Sul", brand="BRANCA", station_id="D"),
        _record(d=date(2022, 9, 10), product="ETANOL", price=3.60, region="Pampulha", brand="BRANCA", station_id="E"),
        _record(d=date(2022, 10, 10), product="GASOLINA", price=5.40, region="Pampulha", brand="SHELL", station_id="A"),
        _record(d=date(2022, 11, 10), product="GASOLINA", price=5.50, region="Não Identificada", brand="SHELL", station_id="F"),
    ]
