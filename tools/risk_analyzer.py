"""
Portfolio Risk Analyzer using yfinance
Volatility, Sharpe, beta, drawdown and VaR plus allocation guidance
"""
import logging
from typing import Optional

import numpy as np
import pandas as pd
import yfinance as yf

from models.schemas import AssetAllocation, Insight, RiskMetrics
from tools.financial_calculator import FinancialCalculator

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 252
RISK_FREE_RATE = 0.065      # Indian 10 year G-sec, approx
BENCHMARK_TICKER = "^NSEI"  # NIFTY 50

# Long run return assumptions for projections
EQUITY_RETURN = 12.0
DEBT_RETURN = 7.0

EQUITY_PER_RISK_POINT = 8


class RiskAnalyzer:
    """Risk metrics over price history"""

    def __init__(self, risk_free_rate: float = RISK_FREE_RATE):
        self.risk_free_rate = risk_free_rate

    def compute_metrics(
        self,
        values: pd.Series,
        benchmark: Optional[pd.Series] = None
    ) -> RiskMetrics:
        """
        Compute risk metrics for a daily value series

        values: portfolio value or NAV indexed by date
        benchmark: optional index series for beta
        """
        values = values.dropna()
        if len(values) < 2:
            raise ValueError("Need at least two data points to measure risk")
        if (values <= 0).any():
            raise ValueError("Values must be positive")

        returns = values.pct_change().dropna()

        periods = len(returns)
        total_growth = values.iloc[-1] / values.iloc[0]
        annual_return = total_growth ** (TRADING_DAYS_PER_YEAR / periods) - 1

        volatility = returns.std(ddof=1) * np.sqrt(TRADING_DAYS_PER_YEAR) if periods > 1 else 0.0
        if np.isnan(volatility):
            volatility = 0.0
        sharpe = (annual_return - self.risk_free_rate) / volatility if volatility > 0 else 0.0

        running_peak = values.cummax()
        max_drawdown = (values / running_peak - 1).min()

        var_95 = returns.quantile(0.05)

        beta = None
        if benchmark is not None:
            beta = self._beta(returns, benchmark.dropna().pct_change().dropna())

        return RiskMetrics(
            annual_return=round(annual_return * 100, 2),
            volatility=round(volatility * 100, 2),
            sharpe_ratio=round(sharpe, 2),
            beta=round(beta, 2) if beta is not None else None,
            max_drawdown=round(max_drawdown * 100, 2),
            var_95=round(var_95 * 100, 2),
            risk_score=round(min(10.0, volatility * 100 / 3), 1)
        )

    @staticmethod
    def _beta(returns: pd.Series, benchmark_returns: pd.Series) -> Optional[float]:
        aligned = pd.concat([returns, benchmark_returns], axis=1, join="inner").dropna()
        if len(aligned) < 2:
            return None
        market_var = aligned.iloc[:, 1].var(ddof=1)
        if market_var == 0:
            return None
        return aligned.iloc[:, 0].cov(aligned.iloc[:, 1]) / market_var

    def fetch_closes(self, symbol: str, period: str = "1y") -> Optional[pd.Series]:
        """Daily closes for a ticker, None if unavailable"""
        try:
            hist = yf.Ticker(symbol).history(period=period)
        except Exception as e:
            # yfinance surfaces network and parsing failures as assorted types
            logger.warning("Could not fetch history for %s: %s", symbol, e)
            return None

        if hist.empty:
            logger.warning("No price history for %s", symbol)
            return None
        return hist["Close"].rename(symbol)

    def portfolio_history(self, weights: dict[str, float], period: str = "1y") -> Optional[pd.Series]:
        """
        Weighted portfolio value, rebased to 100

        Symbols without data are skipped and the remaining weights renormalised.
        """
        closes = {}
        for symbol, weight in weights.items():
            if weight <= 0:
                continue
            series = self.fetch_closes(symbol, period)
            if series is not None:
                closes[symbol] = series

        if not closes:
            return None

        prices = pd.DataFrame(closes).dropna()
        if prices.empty:
            return None

        total_weight = sum(weights[s] for s in prices.columns)
        rebased = prices / prices.iloc[0] * 100
        portfolio = sum(rebased[s] * weights[s] / total_weight for s in prices.columns)
        return portfolio.rename("portfolio")

    def analyze(self, weights: dict[str, float], period: str = "1y") -> Optional[RiskMetrics]:
        """Fetch prices and compute metrics against NIFTY 50"""
        history = self.portfolio_history(weights, period)
        if history is None:
            return None
        benchmark = self.fetch_closes(BENCHMARK_TICKER, period)
        return self.compute_metrics(history, benchmark)

    # ------------------------------------------------------------------
    # Allocation guidance
    # ------------------------------------------------------------------

    @staticmethod
    def recommend_allocation(
        risk_tolerance: int,
        horizon_years: int,
        monthly_investment: float = 0.0
    ) -> AssetAllocation:
        """Equity share grows 8% per risk point; the rest goes to debt"""
        if not 1 <= risk_tolerance <= 10:
            raise ValueError("Risk tolerance must be between 1 and 10")
        if horizon_years <= 0:
            raise ValueError("Investment horizon must be at least 1 year")
        if monthly_investment < 0:
            raise ValueError("Monthly investment cannot be negative")

        equity = risk_tolerance * EQUITY_PER_RISK_POINT
        debt = 100 - equity
        blended = (equity * EQUITY_RETURN + debt * DEBT_RETURN) / 100

        projected = None
        sip = FinancialCalculator().sip(monthly_investment, blended, horizon_years)
        if sip:
            projected = sip.maturity_amount

        return AssetAllocation(
            equity_percent=equity,
            debt_percent=debt,
            horizon_years=horizon_years,
            monthly_investment=monthly_investment,
            expected_return=round(blended, 2),
            projected_corpus=projected
        )

    @staticmethod
    def allocation_insights(allocation: dict[str, float]) -> list[Insight]:
        """Rule based suggestions for an asset class -> % mapping"""
        insights = []

        small_cap = sum(v for k, v in allocation.items() if "small cap" in k.lower())
        debt = sum(v for k, v in allocation.items() if "debt" in k.lower())

        if small_cap > 10:
            insights.append(Insight(
                title="High Small Cap Exposure",
                description=(
                    f"Small caps are {small_cap:.0f}% of your portfolio. "
                    "Consider reducing to 10% for better risk management"
                ),
                severity="warning",
                action="Rebalance Portfolio"
            ))

        if debt < 20:
            insights.append(Insight(
                title="Add Debt Component",
                description="Increase debt allocation to 20% to reduce overall portfolio volatility",
                severity="info",
                action="View Debt Funds"
            ))

        if len([v for v in allocation.values() if v > 0]) >= 4:
            insights.append(Insight(
                title="Good Diversification",
                description="Your portfolio is well diversified across asset classes",
                severity="success",
                action="Maintain Current"
            ))

        return insights


# Convenience function for tool usage
def recommend_allocation(risk_tolerance: int, horizon_years: int, monthly_investment: float = 0.0) -> dict:
    """Asset allocation suggestion - wrapper for LangGraph tool"""
    try:
        return RiskAnalyzer.recommend_allocation(risk_tolerance, horizon_years, monthly_investment).model_dump()
    except ValueError as e:
        return {"error": str(e)}
