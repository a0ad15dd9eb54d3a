"""PaisaWise Data Models"""
from models.schemas import (
    FormValidationError,
    TransactionType,
    IncomeSource,
    BudgetItem,
    Transaction,
    BudgetSummary,
    Participant,
    SplitBill,
    GoalCategory,
    GoalPriority,
    GoalStatus,
    Goal,
    GoalsOverview,
    ReminderType,
    Reminder,
    CalendarDay,
    MonthView,
    UpcomingEvent,
    MutualFund,
    FundPage,
    FundDetails,
    FundInsights,
    FundListing,
    SIPResult,
    EMIResult,
    CompoundInterestResult,
    RiskMetrics,
    AssetAllocation,
    Insight,
    PortfolioPoint,
    PortfolioStats,
    Article,
    QuickTool,
)

__all__ = [
    "FormValidationError",
    "TransactionType",
    "IncomeSource",
    "BudgetItem",
    "Transaction",
    "BudgetSummary",
    "Participant",
    "SplitBill",
    "GoalCategory",
    "GoalPriority",
    "GoalStatus",
    "Goal",
    "GoalsOverview",
    "ReminderType",
    "Reminder",
    "CalendarDay",
    "MonthView",
    "UpcomingEvent",
    "MutualFund",
    "FundPage",
    "FundDetails",
    "FundInsights",
    "FundListing",
    "SIPResult",
    "EMIResult",
    "CompoundInterestResult",
    "RiskMetrics",
    "AssetAllocation",
    "Insight",
    "PortfolioPoint",
    "PortfolioStats",
    "Article",
    "QuickTool",
]
