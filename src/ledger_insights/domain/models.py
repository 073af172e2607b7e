"""Core financial data types consumed and derived by the insight pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")


class FinancialCategory(str, Enum):
    """Ledger categories recognized by aggregation.

    Matching is exact and case-sensitive; any other label maps to
    UNRECOGNIZED, which is tallied separately and never summed into a bucket.
    """

    REVENUE = "Revenue"
    EXPENSE = "Expense"
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    UNRECOGNIZED = "Unrecognized"

    @classmethod
    def from_label(cls, label: str) -> FinancialCategory:
        """Map a raw category label to a category, without normalizing case."""
        for category in cls:
            if category is not cls.UNRECOGNIZED and category.value == label:
                return category
        return cls.UNRECOGNIZED


class AnalysisKind(str, Enum):
    """Analysis types understood by the prompt builder and insight service."""

    HEALTH_CHECK = "HealthCheck"
    RISK_ANALYSIS = "RiskAnalysis"
    OPTIMIZATION = "Optimization"
    GROWTH = "Growth"
    GENERAL = "General"
    INDUSTRY_BENCHMARKING = "IndustryBenchmarking"
    INVESTMENT_ADVICE = "InvestmentAdvice"
    CASH_FLOW_OPTIMIZATION = "CashFlowOptimization"

    @classmethod
    def parse(cls, value: str | AnalysisKind) -> AnalysisKind:
        """Resolve a kind from its value, falling back to GENERAL for unknown labels."""
        if isinstance(value, AnalysisKind):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


class IndustryType(str, Enum):
    """Industries with benchmark data."""

    TECHNOLOGY = "Technology"
    SOFTWARE = "Software"
    INTERNET = "Internet"
    SEMICONDUCTORS = "Semiconductors"
    TELECOMMUNICATIONS = "Telecommunications"
    HEALTHCARE = "Healthcare"
    PHARMACEUTICALS = "Pharmaceuticals"
    BIOTECHNOLOGY = "Biotechnology"
    MEDICAL_DEVICES = "MedicalDevices"
    HOSPITALS = "Hospitals"
    FINANCE = "Finance"
    BANKING = "Banking"
    INSURANCE = "Insurance"
    INVESTMENT_MANAGEMENT = "InvestmentManagement"
    REAL_ESTATE = "RealEstate"
    RETAIL = "Retail"
    CONSUMER_GOODS = "ConsumerGoods"
    AUTOMOTIVE = "Automotive"
    RESTAURANTS = "Restaurants"
    ENTERTAINMENT = "Entertainment"
    MANUFACTURING = "Manufacturing"
    CHEMICALS = "Chemicals"
    CONSTRUCTION = "Construction"
    AEROSPACE = "Aerospace"
    DEFENSE = "Defense"
    ENERGY = "Energy"
    OIL_GAS = "OilGas"
    UTILITIES = "Utilities"
    RENEWABLE_ENERGY = "RenewableEnergy"
    TRANSPORTATION = "Transportation"
    AIRLINES = "Airlines"
    LOGISTICS = "Logistics"
    SHIPPING = "Shipping"
    PROFESSIONAL_SERVICES = "ProfessionalServices"
    CONSULTING = "Consulting"
    ADVERTISING = "Advertising"
    EDUCATION = "Education"
    AGRICULTURE = "Agriculture"
    MINING = "Mining"
    OTHER = "Other"


@dataclass(frozen=True)
class FinancialRecord:
    """One categorized ledger line belonging to a document."""

    account_name: str
    category: str
    amount: Decimal
    period: str = ""
    sub_category: str | None = None
    currency: str = "USD"
    recorded_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # Ingested amounts may arrive as float, int or str
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

    @property
    def financial_category(self) -> FinancialCategory:
        return FinancialCategory.from_label(self.category)


@dataclass(frozen=True)
class FinancialSummary:
    """Aggregated totals for a set of records."""

    revenue: Decimal = ZERO
    expenses: Decimal = ZERO
    assets: Decimal = ZERO
    liabilities: Decimal = ZERO
    equity: Decimal = ZERO
    # Sum of amounts whose category label was not recognized
    unrecognized: Decimal = ZERO
    unrecognized_count: int = 0

    @property
    def net_income(self) -> Decimal:
        return self.revenue - self.expenses

    @property
    def expense_ratio(self) -> Decimal:
        """Expenses as a percentage of revenue, 0 when there is no revenue."""
        if self.revenue == 0:
            return ZERO
        return self.expenses / self.revenue * 100

    @property
    def profit_margin(self) -> Decimal:
        """Net income as a percentage of revenue, 0 when there is no revenue."""
        if self.revenue == 0:
            return ZERO
        return self.net_income / self.revenue * 100


class RatioSet(dict[str, Decimal]):
    """Named ratios; a ratio is present only when its denominator was valid."""

    def get_or_zero(self, name: str) -> Decimal:
        return self.get(name, ZERO)


@dataclass(frozen=True)
class BenchmarkEntry:
    """Industry reference statistics for one metric."""

    metric_name: str
    industry_average: Decimal
    industry_median: Decimal
    percentile_25: Decimal = ZERO
    percentile_75: Decimal = ZERO
    description: str = ""


METRIC_DESCRIPTIONS: dict[str, str] = {
    "GrossMargin": "Percentage of revenue remaining after cost of goods sold",
    "OperatingMargin": "Percentage of revenue remaining after operating expenses",
    "NetMargin": "Percentage of revenue remaining as net profit",
    "CurrentRatio": "Ability to pay short-term obligations with current assets",
    "QuickRatio": "Ability to pay short-term obligations with liquid assets",
    "DebtToEquity": "Proportion of debt relative to shareholder equity",
    "ReturnOnAssets": "Efficiency of using assets to generate profit",
    "ReturnOnEquity": "Efficiency of using equity to generate profit",
    "AssetTurnover": "Efficiency of using assets to generate revenue",
    "InventoryTurnover": "Speed of selling and replacing inventory",
    "AccountsReceivableTurnover": "Speed of collecting receivables",
}


def describe_metric(metric_name: str) -> str:
    """Return the standard description for a benchmark metric."""
    return METRIC_DESCRIPTIONS.get(metric_name, f"{metric_name} - Financial performance metric")
