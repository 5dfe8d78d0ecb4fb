from datetime import date

import pytest

from fuel_price_bh.utils.calendar.semesters import (
    is_period_label,
    month_ordinal,
    next_periods,
    period_label,
    period_start,
)


def test_period_label_splits_year_in_halves():
    assert period_label(date(2023, 1, 1)) == "2023S1"
    assert period_label(date(2023, 6, 30)) == "2023S1"
    assert period_label(date(2023, 7, 1)) == "2023S2"
    assert period_label(date(2023, 12, 31)) == "2023S2"


def test_lexical_order_is_chronological():
    labels = [period_label(date(y, m, 1)) for y in (2022, 2023) for m in (1, 7)]
    assert sorted(labels) == labels


def test_next_periods_cross_year_boundary():
    assert next_periods("2024S2", 3) == ["2025S1", "2025S2", "2026S1"]
    assert next_periods("2025S1", 1) == ["2025S2"]


def test_period_start_rejects_invalid_labels():
    assert period_start("2022S2") == date(2022, 7, 1)
    with pytest.raises(ValueError):
        period_start("2022-S3")


def test_is_period_label():
    assert is_period_label("2025S1")
    assert not is_period_label("2025S3")
    assert not is_period_label("")


def test_month_ordinal_counts_months_since_epoch():
    assert month_ordinal(date(1970, 1, 31)) == 0
    assert month_ordinal(date(2023, 3, 1)) == (2023 - 1970) * 12 + 2
