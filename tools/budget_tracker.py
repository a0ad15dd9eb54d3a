"""
Budget Tracker
Monthly category budgets, expense/income entry and savings metrics
"""
import uuid
from datetime import date, timedelta
from typing import Literal, Optional
from models.schemas import (
    BudgetItem,
    BudgetSummary,
    FormValidationError,
    IncomeSource,
    Transaction,
    TransactionType,
)
from tools.sample_data import load_sample_data


# Progress bar thresholds (% of budget used)
DANGER_THRESHOLD = 90
WARNING_THRESHOLD = 75

DEFAULT_CATEGORIES = [
    "Food & Dining",
    "Housing",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Healthcare",
]

EDITABLE_FIELDS = {"category", "budgeted", "spent", "transactions", "icon"}

CategoryHealth = Literal["healthy", "warning", "danger"]


class BudgetTracker:
    """In-memory budget for the current month"""

    def __init__(
        self,
        categories: Optional[list[BudgetItem]] = None,
        transactions: Optional[list[Transaction]] = None,
        monthly_income: Optional[float] = None
    ):
        self.categories: list[BudgetItem] = list(categories or [])
        self.transactions: list[Transaction] = list(transactions or [])
        self.monthly_income = monthly_income

    @classmethod
    def with_sample_data(cls, today: Optional[date] = None) -> "BudgetTracker":
        """Tracker pre-filled with the demo month"""
        today = today or date.today()
        data = load_sample_data()["budget"]

        categories = [
            BudgetItem(id=_new_id(), **item) for item in data["categories"]
        ]
        transactions = [
            Transaction(
                id=_new_id(),
                amount=tx["amount"],
                category=tx["category"],
                description=tx["description"],
                date=today - timedelta(days=tx["days_ago"]),
                type=TransactionType(tx["type"])
            )
            for tx in data["transactions"]
        ]
        return cls(categories, transactions, monthly_income=data["monthly_income"])

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(
        self,
        category: str,
        budgeted: float,
        spent: float = 0.0,
        icon: str = ""
    ) -> BudgetItem:
        errors = {}
        name = (category or "").strip()
        if not name:
            errors["category"] = "Category is required"
        elif self.find_category(name):
            errors["category"] = f"A budget for '{name}' already exists"
        if budgeted is None or budgeted <= 0:
            errors["budgeted"] = "Budget must be greater than 0"
        if spent is None or spent < 0:
            errors["spent"] = "Spent amount cannot be negative"
        if errors:
            raise FormValidationError(errors, title="Invalid budget")

        item = BudgetItem(id=_new_id(), category=name, budgeted=budgeted, spent=spent, icon=icon)
        self.categories.append(item)
        return item

    def update_category(self, item_id: str, **updates) -> BudgetItem:
        """Apply field updates; remaining is always budgeted - spent"""
        item = self._get(item_id)

        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update budget fields: {', '.join(sorted(unknown))}")
        if any(value is None for value in updates.values()):
            raise ValueError("Budget fields cannot be empty")

        if "budgeted" in updates and updates["budgeted"] <= 0:
            raise ValueError("Budget must be greater than 0")
        if "spent" in updates and updates["spent"] < 0:
            raise ValueError("Spent amount cannot be negative")
        if "category" in updates:
            name = updates["category"].strip()
            existing = self.find_category(name)
            if not name or (existing and existing.id != item_id):
                raise ValueError(f"Invalid or duplicate category name: '{name}'")
            updates["category"] = name

        updated = BudgetItem.model_validate({**item.model_dump(), **updates})
        self.categories[self.categories.index(item)] = updated
        return updated

    def delete_category(self, item_id: str) -> None:
        self.categories.remove(self._get(item_id))

    def find_category(self, name: str) -> Optional[BudgetItem]:
        key = name.strip().lower()
        for item in self.categories:
            if item.category.lower() == key:
                return item
        return None

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def add_expense(
        self,
        category: str,
        amount: Optional[float],
        description: str,
        tx_date: Optional[date] = None
    ) -> Transaction:
        """Record an expense and charge it to the matching budget category"""
        errors = self._validate_entry(amount, description, tx_date)
        if not (category or "").strip():
            errors = {"category": "Category is required", **errors}
        if errors:
            raise FormValidationError(errors, title="Invalid expense")

        tx = Transaction(
            id=_new_id(),
            amount=amount,
            category=category.strip(),
            description=description.strip(),
            date=tx_date,
            type=TransactionType.EXPENSE
        )
        self.transactions.insert(0, tx)

        # Unbudgeted categories are recorded but do not touch any budget
        item = self.find_category(tx.category)
        if item:
            updated = item.model_copy(update={
                "spent": item.spent + amount,
                "transactions": item.transactions + 1
            })
            self.categories[self.categories.index(item)] = updated

        return tx

    def add_income(
        self,
        source: IncomeSource | str | None,
        amount: Optional[float],
        description: str,
        tx_date: Optional[date] = None
    ) -> Transaction:
        errors = self._validate_entry(amount, description, tx_date)
        income_source = None
        if not source:
            errors = {"source": "Income source is required", **errors}
        else:
            try:
                income_source = IncomeSource(source)
            except ValueError:
                errors = {"source": f"Unknown income source: {source}", **errors}
        if errors:
            raise FormValidationError(errors, title="Invalid income")

        tx = Transaction(
            id=_new_id(),
            amount=amount,
            category=income_source.value,
            description=description.strip(),
            date=tx_date,
            type=TransactionType.INCOME
        )
        self.transactions.insert(0, tx)
        return tx

    def recent_transactions(self, limit: int = 5) -> list[Transaction]:
        return self.transactions[:limit]

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @staticmethod
    def category_health(item: BudgetItem) -> CategoryHealth:
        """Progress colour for a category card"""
        percentage = item.percentage_used
        if percentage > DANGER_THRESHOLD:
            return "danger"
        if percentage > WARNING_THRESHOLD:
            return "warning"
        return "healthy"

    @staticmethod
    def is_over_budget(item: BudgetItem) -> bool:
        return item.remaining < 0

    def total_income(self) -> float:
        if self.monthly_income is not None:
            return self.monthly_income
        return sum(
            tx.amount for tx in self.transactions if tx.type == TransactionType.INCOME
        )

    def summary(self) -> BudgetSummary:
        total_budget = sum(item.budgeted for item in self.categories)
        total_spent = sum(item.spent for item in self.categories)
        income = self.total_income()
        savings = income - total_spent

        savings_rate = (savings / income * 100) if income > 0 else 0.0
        expense_ratio = (total_spent / income * 100) if income > 0 else 0.0

        return BudgetSummary(
            total_budget=total_budget,
            total_spent=total_spent,
            total_remaining=total_budget - total_spent,
            total_income=income,
            actual_savings=savings,
            savings_rate=round(savings_rate, 1),
            expense_ratio=round(expense_ratio, 1),
            category_count=len(self.categories)
        )

    def _get(self, item_id: str) -> BudgetItem:
        for item in self.categories:
            if item.id == item_id:
                return item
        raise ValueError(f"Unknown budget category: {item_id}")

    @staticmethod
    def _validate_entry(
        amount: Optional[float],
        description: str,
        tx_date: Optional[date]
    ) -> dict[str, str]:
        errors = {}
        if amount is None or amount <= 0:
            errors["amount"] = "Amount must be greater than 0"
        if not (description or "").strip():
            errors["description"] = "Description is required"
        if tx_date is None:
            errors["date"] = "Date is required"
        return errors


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


# Convenience function for tool usage
def summarize_budget(tracker: BudgetTracker) -> dict:
    """Budget snapshot for the assistant prompt"""
    summary = tracker.summary()
    return {
        "summary": summary.model_dump(),
        "categories": [
            {
                "category": item.category,
                "budgeted": item.budgeted,
                "spent": item.spent,
                "remaining": item.remaining,
                "percentage_used": round(item.percentage_used, 1),
                "health": tracker.category_health(item),
            }
            for item in tracker.categories
        ],
    }
