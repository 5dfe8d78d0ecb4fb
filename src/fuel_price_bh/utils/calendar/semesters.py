from __future__ import annotations

import re
from datetime import date
from typing import List

from dateutil.relativedelta import relativedelta

_RE_PERIOD = re.compile(r"^(\d{4})S([12])$")


def period_label(d: date) -> str:
    """
    Semestre da coleta no formato YYYYS1 / YYYYS2.
    Jan-Jun => S1, Jul-Dez => S2 (ordem lexical == ordem cronológica).
    """
    half = 1 if d.month <= 6 else 2
    return f"{d.year:04d}S{half}"


def is_period_label(label: str) -> bool:
    return bool(_RE_PERIOD.match(label or ""))


def period_start(label: str) -> date:
    m = _RE_PERIOD.match(label)
    if not m:
        raise ValueError(f"Semestre invalido (esperado YYYYS1|YYYYS2): {label}")
    year, half = int(m.group(1)), int(m.group(2))
    return date(year, 1 if half == 1 else 7, 1)


def next_periods(label: str, count: int) -> List[str]:
    """2024S2, 3 -> ['2025S1', '2025S2', '2026S1']"""
    start = period_start(label)
    return [period_label(start + relativedelta(months=6 * k)) for k in range(1, count + 1)]


def month_ordinal(d: date) -> int:
    # meses desde 1970-01 (ordinal de tempo para correlação)
    return (d.year - 1970) * 12 + (d.month - 1)
