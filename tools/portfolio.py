"""
Portfolio Tracker
Month-end portfolio values, period windows and headline stats for the dashboard
"""
from typing import Optional
import pandas as pd
from models.schemas import PortfolioPoint, PortfolioStats
from tools.sample_data import load_sample_data


# Months shown per chart period; None shows the full history
PERIODS = {"1M": 1, "3M": 3, "6M": 6, "1Y": 12, "ALL": None}


class PortfolioTracker:
    """Tracks invested capital against month-end portfolio value"""

    def __init__(
        self,
        history: Optional[list[PortfolioPoint]] = None,
        total_investment: float = 0.0,
        monthly_sip: float = 0.0,
        fund_count: int = 0
    ):
        if total_investment < 0 or monthly_sip < 0:
            raise ValueError("Investment amounts cannot be negative")
        self.total_investment = total_investment
        self.monthly_sip = monthly_sip
        self.fund_count = fund_count
        self.history: list[PortfolioPoint] = []
        for point in sorted(history or [], key=lambda p: p.month):
            self.record(point.month, point.value)

    @classmethod
    def with_sample_data(cls) -> "PortfolioTracker":
        data = load_sample_data()["portfolio"]
        return cls(
            history=[PortfolioPoint(**point) for point in data["history"]],
            total_investment=data["total_investment"],
            monthly_sip=data["monthly_sip"],
            fund_count=data["fund_count"],
        )

    def record(self, month, value: float) -> PortfolioPoint:
        """Append a month-end value; months must be recorded in order"""
        if value is None or value <= 0:
            raise ValueError("Portfolio value must be greater than 0")
        if self.history and month <= self.history[-1].month:
            raise ValueError(f"Month {month} is not after {self.history[-1].month}")

        growth = 0.0
        if self.history:
            growth = round((value / self.history[-1].value - 1) * 100, 2)
        point = PortfolioPoint(month=month, value=value, growth=growth)
        self.history.append(point)
        return point

    def window(self, period: str = "6M") -> list[PortfolioPoint]:
        """
        Points for a chart period

        Includes the month before the window so the change over the
        period can be read off the first and last point.
        """
        if period not in PERIODS:
            raise ValueError(f"Unknown period: {period}. Choose from {', '.join(PERIODS)}")
        months = PERIODS[period]
        if months is None:
            return list(self.history)
        return self.history[-(months + 1):]

    def period_change(self, period: str = "6M") -> float:
        """% change across a chart period"""
        points = self.window(period)
        if len(points) < 2:
            return 0.0
        return round((points[-1].value / points[0].value - 1) * 100, 2)

    def to_frame(self, period: str = "ALL") -> pd.DataFrame:
        return pd.DataFrame(
            [{"Month": p.month, "Value": p.value, "Growth": p.growth} for p in self.window(period)]
        )

    def stats(self) -> PortfolioStats:
        current_value = self.history[-1].value if self.history else 0.0
        gain = current_value - self.total_investment if self.history else 0.0
        total_return = gain / self.total_investment * 100 if self.total_investment > 0 else 0.0

        return PortfolioStats(
            total_investment=self.total_investment,
            current_value=current_value,
            total_gain=gain,
            total_return_percent=round(total_return, 1),
            monthly_growth=round(self.history[-1].growth, 1) if self.history else 0.0,
            monthly_sip=self.monthly_sip,
            fund_count=self.fund_count,
        )
