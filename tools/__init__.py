"""
PaisaWise Tools
"""
from tools.financial_calculator import (
    FinancialCalculator,
    BasicCalculator,
    calculate_sip,
    calculate_emi,
    calculate_compound_interest,
)
from tools.budget_tracker import BudgetTracker, summarize_budget
from tools.bill_splitter import BillSplitter, SplitLedger, SplitMethod
from tools.goal_planner import GoalPlanner
from tools.reminder_calendar import ReminderCalendar, next_month, previous_month
from tools.mutual_funds_api import MutualFundsAPI, default_api, list_mutual_funds, fetch_fund_details
from tools.fund_catalog import FundCatalog, FundComparison
from tools.risk_analyzer import RiskAnalyzer, recommend_allocation
from tools.portfolio import PortfolioTracker
from tools.knowledge_base import KnowledgeBase, search_articles
from tools.formatting import format_inr, format_fund_date

__all__ = [
    # Calculators
    "FinancialCalculator",
    "BasicCalculator",
    "calculate_sip",
    "calculate_emi",
    "calculate_compound_interest",
    # Budget
    "BudgetTracker",
    "summarize_budget",
    "BillSplitter",
    "SplitLedger",
    "SplitMethod",
    # Goals and calendar
    "GoalPlanner",
    "ReminderCalendar",
    "next_month",
    "previous_month",
    # Funds
    "MutualFundsAPI",
    "default_api",
    "list_mutual_funds",
    "fetch_fund_details",
    "FundCatalog",
    "FundComparison",
    # Risk
    "RiskAnalyzer",
    "recommend_allocation",
    # Portfolio and learning
    "PortfolioTracker",
    "KnowledgeBase",
    "search_articles",
    # Formatting
    "format_inr",
    "format_fund_date",
]
