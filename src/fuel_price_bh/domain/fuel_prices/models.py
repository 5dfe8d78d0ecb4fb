from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Optional, Tuple, Union

UNIDENTIFIED_REGION = "Não Identificada"
ALL = "all"

# Regionais administrativas de Belo Horizonte
BH_REGIONS: Tuple[str, ...] = (
    "Barreiro",
    "Centro-Sul",
    "Leste",
    "Nordeste",
    "Noroeste",
    "Norte",
    "Oeste",
    "Pampulha",
    "Venda Nova",
)

MODE_NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class PriceRecord:
    date: date
    period: str          # "YYYYS1" | "YYYYS2"
    product: str
    price: float
    region: str          # regional de BH ou UNIDENTIFIED_REGION
    brand: str
    station_id: str      # CNPJ da revenda (só contagem de postos)


@dataclass(frozen=True)
class FilterSpec:
    """
    Filtro ativo da visualização.

    Regra EMPTY_PRODUCTS_MEANS_ANY: products vazio significa "sem restrição",
    e não "nenhum produto". Mantido assim de propósito (confunde usuário, mas é o
    comportamento dos relatórios).
    """
    period: str = ALL
    products: FrozenSet[str] = frozenset()
    region: str = ALL


@dataclass(frozen=True)
class FilterOptions:
    periods: Tuple[str, ...]
    products: Tuple[str, ...]
    regions: Tuple[str, ...]


class ReportView(str, Enum):
    OVERVIEW = "overview"
    DISTRIBUTION = "distribution"
    TEMPORAL = "temporal"
    REGIONAL = "regional"
    CORRELATION = "correlation"
    INSIGHTS = "insights"


@dataclass(frozen=True)
class ReportConfig:
    weekly_liters: float = 40.0
    ethanol_product: str = "ETANOL"
    gasoline_product: str = "GASOLINA"


# ---------- resultados ----------

@dataclass(frozen=True)
class OverviewStats:
    total_records: int
    unique_stations: int
    products: Tuple[str, ...]
    regions: Tuple[str, ...]
    records_by_period: Dict[str, int]
    records_by_product: Dict[str, int]
    records_by_region: Dict[str, int]
    records_by_brand: Dict[str, int]

    def top_brands(self, n: int = 10) -> Tuple[Tuple[str, int], ...]:
        ranked = sorted(self.records_by_brand.items(), key=lambda kv: (-kv[1], kv[0]))
        return tuple(ranked[:n])


@dataclass(frozen=True)
class DescriptiveStats:
    count: int
    mean: float
    median: float
    mode: Union[float, str]
    std: float
    min: float
    max: float
    q1: float
    q3: float
    iqr: float
    cv: float
    outliers: Tuple[float, ...] = ()

    @classmethod
    def empty(cls) -> "DescriptiveStats":
        return cls(
            count=0,
            mean=0.0,
            median=0.0,
            mode=MODE_NOT_AVAILABLE,
            std=0.0,
            min=0.0,
            max=0.0,
            q1=0.0,
            q3=0.0,
            iqr=0.0,
            cv=0.0,
            outliers=(),
        )

    @property
    def is_empty(self) -> bool:
        return self.count == 0


@dataclass(frozen=True)
class DistributionReport:
    overall: DescriptiveStats
    by_product: Dict[str, DescriptiveStats]


class TrendDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class InsufficientData:
    """Regressão indefinida (menos de 2 semestres) -- nunca vira NaN."""
    reason: str
    periods: int


@dataclass(frozen=True)
class Projection:
    period: str
    x: int
    price: float


@dataclass(frozen=True)
class TrendResult:
    periods: Tuple[str, ...]
    period_means: Tuple[float, ...]
    fit: Union[LinearFit, InsufficientData]
    projections: Tuple[Projection, ...]
    total_variation: float
    period_variations: Tuple[float, ...]
    average_volatility: float
    first_half_avg: Optional[float]
    second_half_avg: Optional[float]
    is_seasonal: bool
    direction: TrendDirection
    # produto -> média por semestre (alinhado com periods); None = sem dado
    product_series: Dict[str, Tuple[Optional[float], ...]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "TrendResult":
        return cls(
            periods=(),
            period_means=(),
            fit=InsufficientData(reason="sem registros", periods=0),
            projections=(),
            total_variation=0.0,
            period_variations=(),
            average_volatility=0.0,
            first_half_avg=None,
            second_half_avg=None,
            is_seasonal=False,
            direction=TrendDirection.STABLE,
            product_series={},
        )

    @property
    def has_fit(self) -> bool:
        return isinstance(self.fit, LinearFit)


@dataclass(frozen=True)
class RegionSummary:
    region: str
    mean: float
    median: float
    std: float
    min: float
    max: float
    count: int


@dataclass(frozen=True)
class RegionalResult:
    ranking: Tuple[RegionSummary, ...]   # ascendente por média
    spread: Optional[float]

    @property
    def cheapest(self) -> Optional[RegionSummary]:
        return self.ranking[0] if self.ranking else None

    @property
    def most_expensive(self) -> Optional[RegionSummary]:
        return self.ranking[-1] if self.ranking else None


class CorrelationStrength(str, Enum):
    VERY_STRONG = "very strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    NEGLIGIBLE = "negligible"


@dataclass(frozen=True)
class TimeCorrelation:
    r: float
    strength: CorrelationStrength
    n: int


@dataclass(frozen=True)
class ParityResult:
    product_a: str
    product_b: str
    mean_a: float
    mean_b: float
    ratio: float
    a_preferable: bool


@dataclass(frozen=True)
class CorrelationResult:
    price_time: TimeCorrelation
    parity: Optional[ParityResult]


# ---------- insights (variante fechada) ----------

class InsightKind(str, Enum):
    TREND = "trend"
    REGIONAL_DISPARITY = "regional_disparity"
    VARIABILITY = "variability"
    PARITY = "parity"
    OUTLIERS = "outliers"


class VariabilityLevel(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


@dataclass(frozen=True)
class TrendInsight:
    kind: ClassVar[InsightKind] = InsightKind.TREND
    title: str
    summary: str
    details: Tuple[str, ...]
    impact: Optional[float]
    first_period: str
    last_period: str
    total_variation: float
    direction: TrendDirection


@dataclass(frozen=True)
class RegionalDisparityInsight:
    kind: ClassVar[InsightKind] = InsightKind.REGIONAL_DISPARITY
    title: str
    summary: str
    details: Tuple[str, ...]
    impact: Optional[float]
    cheapest: str
    most_expensive: str
    spread: float


@dataclass(frozen=True)
class VariabilityInsight:
    kind: ClassVar[InsightKind] = InsightKind.VARIABILITY
    title: str
    summary: str
    details: Tuple[str, ...]
    impact: Optional[float]
    cv: float
    level: VariabilityLevel


@dataclass(frozen=True)
class ParityInsight:
    kind: ClassVar[InsightKind] = InsightKind.PARITY
    title: str
    summary: str
    details: Tuple[str, ...]
    impact: Optional[float]
    ratio: float
    ethanol_preferable: bool


@dataclass(frozen=True)
class OutlierInsight:
    kind: ClassVar[InsightKind] = InsightKind.OUTLIERS
    title: str
    summary: str
    details: Tuple[str, ...]
    impact: Optional[float]
    outlier_count: int
    outlier_fraction: float


Insight = Union[TrendInsight, RegionalDisparityInsight, VariabilityInsight, ParityInsight, OutlierInsight]
