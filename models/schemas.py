"""
Pydantic models for PaisaWise
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import date as Date
from enum import Enum


class FormValidationError(ValueError):
    """Raised when a form fails validation; carries one message per field"""

    def __init__(self, errors: dict[str, str], title: str = "Invalid input"):
        self.errors = errors
        self.title = title
        super().__init__(f"{title}: " + "; ".join(errors.values()))


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class IncomeSource(str, Enum):
    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENT = "investment"
    BONUS = "bonus"
    OTHER = "other"


class BudgetItem(BaseModel):
    """Monthly budget for a single spending category"""
    id: str
    category: str
    budgeted: float
    spent: float = 0.0
    transactions: int = 0
    icon: str = ""

    @property
    def remaining(self) -> float:
        return self.budgeted - self.spent

    @property
    def percentage_used(self) -> float:
        if self.budgeted <= 0:
            return 0.0
        return self.spent / self.budgeted * 100


class Transaction(BaseModel):
    """Single income or expense entry"""
    id: str
    amount: float  # Always positive, direction comes from type
    category: str
    description: str
    date: Date
    type: TransactionType

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.type == TransactionType.EXPENSE else self.amount


class BudgetSummary(BaseModel):
    """Month at a glance"""
    total_budget: float = 0.0
    total_spent: float = 0.0
    total_remaining: float = 0.0
    total_income: float = 0.0
    actual_savings: float = 0.0
    savings_rate: float = 0.0
    expense_ratio: float = 0.0
    category_count: int = 0


# ---------------------------------------------------------------------------
# Split bills
# ---------------------------------------------------------------------------

class Participant(BaseModel):
    name: str
    amount: float = 0.0
    settled: bool = False


class SplitBill(BaseModel):
    description: str
    total_amount: float
    participants: list[Participant]
    date: Date


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class GoalCategory(str, Enum):
    EMERGENCY_FUND = "Emergency Fund"
    HOUSE = "House"
    CAR = "Car"
    VACATION = "Vacation"
    RETIREMENT = "Retirement"
    EDUCATION = "Education"
    OTHER = "Other"


class GoalPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class GoalStatus(str, Enum):
    ON_TRACK = "On Track"
    BEHIND = "Behind"
    COMPLETED = "Completed"


class Goal(BaseModel):
    """Savings goal"""
    id: str
    title: str
    target_amount: float
    current_amount: float = 0.0
    target_date: Date
    category: GoalCategory = GoalCategory.OTHER
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.ON_TRACK
    monthly_contribution: float = 0.0


class GoalsOverview(BaseModel):
    total_target: float = 0.0
    total_saved: float = 0.0
    overall_progress: float = 0.0
    status_counts: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

class ReminderType(str, Enum):
    SIP = "sip"
    GOAL = "goal"
    TIP = "tip"
    REMINDER = "reminder"


class Reminder(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    date: Date
    type: ReminderType = ReminderType.REMINDER
    amount: Optional[str] = None  # Free text, e.g. "₹5,000"


class CalendarDay(BaseModel):
    day: int
    date: Date
    is_today: bool = False
    events: list[Reminder] = Field(default_factory=list)

    @property
    def markers(self) -> list[ReminderType]:
        """Event type dots shown on the day cell (max 3)"""
        return [event.type for event in self.events[:3]]

    @property
    def has_overflow(self) -> bool:
        return len(self.events) > 3


class MonthView(BaseModel):
    year: int
    month: int
    month_name: str
    leading_blanks: int  # Weekday of the 1st, Sunday = 0
    days: list[CalendarDay]


class UpcomingEvent(BaseModel):
    reminder: Reminder
    days_away: int
    urgent: bool = False


# ---------------------------------------------------------------------------
# Mutual funds
# ---------------------------------------------------------------------------

class MutualFund(BaseModel):
    """Instrument record as returned by /mf/instruments (all strings)"""
    tradingsymbol: str
    amc: str
    name: str
    purchase_allowed: str = "0"
    redemption_allowed: str = "0"
    minimum_purchase_amount: str = "0"
    purchase_amount_multiplier: str = "0"
    minimum_additional_purchase_amount: str = "0"
    minimum_redemption_quantity: str = "0"
    redemption_quantity_multiplier: str = "0"
    dividend_type: str = ""
    scheme_type: str = ""
    plan: str = ""
    settlement_type: str = ""
    last_price: str = "0"
    last_price_date: str = ""

    @property
    def nav(self) -> float:
        return _to_float(self.last_price)

    @property
    def minimum_purchase(self) -> float:
        return _to_float(self.minimum_purchase_amount)

    @property
    def is_purchase_allowed(self) -> bool:
        return self.purchase_allowed.strip() == "1"

    @property
    def is_redemption_allowed(self) -> bool:
        return self.redemption_allowed.strip() == "1"


class FundPage(BaseModel):
    """Paginated /mf/instruments response"""
    model_config = ConfigDict(populate_by_name=True)

    size: int
    page: int
    last: bool
    first: bool
    number_of_elements: int = Field(alias="numberOfElements")
    total_pages: int = Field(alias="totalPages")
    total_elements: int = Field(alias="totalElements")
    content: list[MutualFund] = Field(default_factory=list)


class SectorHolding(BaseModel):
    sector: str
    percentage: float


class FundStat(BaseModel):
    label: str
    value: str


class NavPoint(BaseModel):
    date: str
    nav: float


class FundInsights(BaseModel):
    """AI enriched section of the fund details response"""
    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    objectives: list[str] = Field(default_factory=list)
    sector_holdings: list[SectorHolding] = Field(default_factory=list, alias="sectorHoldings")
    stats: list[FundStat] = Field(default_factory=list)
    summary_recommendation: Optional[str] = Field(default=None, alias="summaryRecommendation")
    historical_performance: list[NavPoint] = Field(default_factory=list, alias="historicalPerformance")


class FundDetails(BaseModel):
    overview: MutualFund
    ai: FundInsights = Field(default_factory=FundInsights)


class FundListing(MutualFund):
    """Fund as shown in the browser; catalog fields are absent for raw API funds"""
    type: Optional[str] = None
    risk: Optional[Literal["Low", "Medium", "High"]] = None
    duration: Optional[str] = None
    expected_return: Optional[float] = None
    min_investment: Optional[float] = None
    tags: list[str] = Field(default_factory=list)
    rating: Optional[float] = None


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

class SIPResult(BaseModel):
    maturity_amount: float
    invested_amount: float
    estimated_returns: float


class EMIResult(BaseModel):
    emi: float
    total_amount: float
    total_interest: float


class CompoundInterestResult(BaseModel):
    maturity_amount: float
    interest_earned: float


# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

class RiskMetrics(BaseModel):
    """Portfolio risk snapshot (percentages are in %)"""
    annual_return: float
    volatility: float
    sharpe_ratio: float
    beta: Optional[float] = None
    max_drawdown: float
    var_95: float
    risk_score: float


class AssetAllocation(BaseModel):
    equity_percent: float
    debt_percent: float
    horizon_years: int
    monthly_investment: float = 0.0
    expected_return: float = 0.0
    projected_corpus: Optional[float] = None


class Insight(BaseModel):
    """Rule based portfolio recommendation"""
    title: str
    description: str
    severity: Literal["info", "warning", "success"]
    action: Optional[str] = None


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------

class PortfolioPoint(BaseModel):
    """Month-end portfolio value; growth is % change from the previous month"""
    month: Date
    value: float
    growth: float = 0.0


class PortfolioStats(BaseModel):
    total_investment: float
    current_value: float
    total_gain: float
    total_return_percent: float
    monthly_growth: float
    monthly_sip: float
    fund_count: int


# ---------------------------------------------------------------------------
# Knowledge
# ---------------------------------------------------------------------------

class Article(BaseModel):
    title: str
    excerpt: str
    category: str
    read_minutes: int
    author: str
    rating: float = Field(ge=0, le=5)
    views: int = 0
    featured: bool = False

    @property
    def views_label(self) -> str:
        """12500 -> '12.5K'"""
        return f"{self.views / 1000:.1f}K" if self.views >= 1000 else str(self.views)


class QuickTool(BaseModel):
    """Shortcut from the knowledge hub to a dashboard tab"""
    title: str
    description: str
    tab: str


def _to_float(value: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
