"""
Fund Catalog
Search, filter and side-by-side comparison of mutual funds
"""
from typing import Iterable, Optional
import pandas as pd
from models.schemas import FundListing, FundPage
from tools.sample_data import load_sample_data


FUND_CATEGORIES = ["All Funds", "Large Cap", "Mid Cap", "Small Cap", "Hybrid", "Debt"]
RISK_LEVELS = ["Low", "Medium", "High"]
DURATIONS = ["1+ month", "6+ months", "1+ year", "3+ years", "5+ years"]

ALL_FUNDS = FUND_CATEGORIES[0]
MAX_COMPARE = 2


class FundCatalog:
    """Funds available for browsing"""

    def __init__(self, funds: Optional[list[FundListing]] = None):
        self.funds: list[FundListing] = list(funds or [])

    @classmethod
    def with_sample_data(cls) -> "FundCatalog":
        return cls([FundListing(**fund) for fund in load_sample_data()["funds"]])

    def from_page(self, page: FundPage) -> int:
        """Merge funds from an API page; returns how many were new"""
        known = {f.tradingsymbol for f in self.funds}
        added = 0
        for fund in page.content:
            if fund.tradingsymbol in known:
                continue
            self.funds.append(FundListing(**fund.model_dump()))
            known.add(fund.tradingsymbol)
            added += 1
        return added

    def get(self, tradingsymbol: str) -> Optional[FundListing]:
        for fund in self.funds:
            if fund.tradingsymbol == tradingsymbol:
                return fund
        return None

    def filter(
        self,
        search: str = "",
        category: str = ALL_FUNDS,
        risks: Iterable[str] = (),
        durations: Iterable[str] = ()
    ) -> list[FundListing]:
        """All criteria must match; empty risk/duration filters match everything"""
        query = search.strip().lower()
        risks = set(risks)
        durations = set(durations)

        results = []
        for fund in self.funds:
            fund_type = _fund_type(fund).lower()

            if query and query not in fund.name.lower() and query not in fund_type:
                continue
            if risks and fund.risk not in risks:
                continue
            if durations and fund.duration not in durations:
                continue
            if category != ALL_FUNDS and not _in_category(fund, category):
                continue
            results.append(fund)

        return results

    def category_counts(self) -> dict[str, int]:
        return {category: len(self.filter(category=category)) for category in FUND_CATEGORIES}


class FundComparison:
    """A base fund compared against up to MAX_COMPARE others"""

    def __init__(self, base: FundListing, catalog: FundCatalog):
        self.base = base
        self.catalog = catalog
        self.compare_with: list[FundListing] = []

    @property
    def is_full(self) -> bool:
        return len(self.compare_with) >= MAX_COMPARE

    def available(self) -> list[FundListing]:
        taken = {self.base.tradingsymbol} | {f.tradingsymbol for f in self.compare_with}
        return [f for f in self.catalog.funds if f.tradingsymbol not in taken]

    def add(self, fund: FundListing) -> None:
        if fund.tradingsymbol == self.base.tradingsymbol:
            raise ValueError(f"{fund.name} is already the fund being compared")
        if any(f.tradingsymbol == fund.tradingsymbol for f in self.compare_with):
            raise ValueError(f"{fund.name} is already in the comparison")
        if self.is_full:
            raise ValueError(f"You can compare at most {MAX_COMPARE} other funds")
        self.compare_with.append(fund)

    def remove(self, tradingsymbol: str) -> None:
        self.compare_with = [f for f in self.compare_with if f.tradingsymbol != tradingsymbol]

    def funds(self) -> list[FundListing]:
        return [self.base, *self.compare_with]

    def table(self) -> pd.DataFrame:
        """Attributes as rows, one column per fund"""
        rows = {
            "AMC": lambda f: f.amc,
            "Type": _fund_type,
            "Risk": lambda f: f.risk or "N/A",
            "NAV (₹)": lambda f: round(f.nav, 4),
            "Expected Return (%)": lambda f: f.expected_return,
            "Min Investment (₹)": lambda f: f.min_investment if f.min_investment is not None else f.minimum_purchase,
            "Rating": lambda f: f.rating,
            "Duration": lambda f: f.duration or "N/A",
            "Plan": lambda f: f.plan.title(),
            "Settlement": lambda f: f.settlement_type,
            "Purchase Allowed": lambda f: "Yes" if f.is_purchase_allowed else "No",
        }
        data = {fund.name: [getter(fund) for getter in rows.values()] for fund in self.funds()}
        return pd.DataFrame(data, index=list(rows.keys()))


def _fund_type(fund: FundListing) -> str:
    return fund.type or fund.scheme_type or ""


def _in_category(fund: FundListing, category: str) -> bool:
    key = category.lower()
    return key in (fund.type or "").lower() or key in fund.scheme_type.lower()
