"""
Smart Goals
Savings goals with progress, monthly requirement and on-track status
"""
import math
import uuid
from collections import Counter
from datetime import date
from typing import Optional
from models.schemas import (
    FormValidationError,
    Goal,
    GoalCategory,
    GoalPriority,
    GoalStatus,
    GoalsOverview,
)
from tools.sample_data import load_sample_data


DAYS_PER_MONTH = 30

EDITABLE_FIELDS = {
    "title",
    "target_amount",
    "current_amount",
    "target_date",
    "category",
    "priority",
    "monthly_contribution",
    "status",
}


class GoalPlanner:
    """In-memory list of savings goals"""

    def __init__(self, goals: Optional[list[Goal]] = None):
        self.goals: list[Goal] = list(goals or [])

    @classmethod
    def with_sample_data(cls, today: Optional[date] = None) -> "GoalPlanner":
        today = today or date.today()
        planner = cls()
        for goal in load_sample_data()["goals"]:
            planner.add_goal(
                title=goal["title"],
                target_amount=goal["target_amount"],
                current_amount=goal["current_amount"],
                target_date=_add_months(today, goal["months_out"]),
                category=GoalCategory(goal["category"]),
                priority=GoalPriority(goal["priority"]),
                monthly_contribution=goal["monthly_contribution"],
                today=today
            )
        return planner

    def add_goal(
        self,
        title: str,
        target_amount: float,
        target_date: Optional[date],
        current_amount: float = 0.0,
        category: GoalCategory = GoalCategory.OTHER,
        priority: GoalPriority = GoalPriority.MEDIUM,
        monthly_contribution: float = 0.0,
        status: Optional[GoalStatus] = None,
        today: Optional[date] = None
    ) -> Goal:
        fields = _validate_goal({
            "title": title,
            "target_amount": target_amount,
            "current_amount": current_amount,
            "target_date": target_date,
            "category": category,
            "priority": priority,
            "monthly_contribution": monthly_contribution,
            "status": status,
        })

        status = fields.pop("status")
        goal = Goal(id=uuid.uuid4().hex[:12], **fields)
        goal.status = status or self.derive_status(goal, today)
        self.goals.append(goal)
        return goal

    def update_goal(self, goal_id: str, today: Optional[date] = None, **updates) -> Goal:
        """Apply field updates with the same rules as add_goal; status is re-derived unless given"""
        goal = self._get(goal_id)
        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update goal fields: {', '.join(sorted(unknown))}")

        current = goal.model_dump(include=EDITABLE_FIELDS)
        current["status"] = None
        fields = _validate_goal({**current, **updates})

        status = fields.pop("status")
        updated = Goal(id=goal.id, **fields)
        updated.status = status or self.derive_status(updated, today)
        self.goals[self.goals.index(goal)] = updated
        return updated

    def delete_goal(self, goal_id: str) -> None:
        self.goals.remove(self._get(goal_id))

    def add_contribution(self, goal_id: str, amount: float, today: Optional[date] = None) -> Goal:
        if amount is None or amount <= 0:
            raise ValueError("Contribution must be greater than 0")
        goal = self._get(goal_id)
        return self.update_goal(goal_id, today=today, current_amount=goal.current_amount + amount)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    @staticmethod
    def progress_percent(goal: Goal) -> float:
        return round(min(goal.current_amount / goal.target_amount * 100, 100), 1)

    @staticmethod
    def months_remaining(goal: Goal, today: Optional[date] = None) -> int:
        today = today or date.today()
        days = (goal.target_date - today).days
        return max(0, math.ceil(days / DAYS_PER_MONTH))

    def monthly_required(self, goal: Goal, today: Optional[date] = None) -> float:
        """Monthly saving needed to hit the target by the deadline"""
        remaining = goal.target_amount - goal.current_amount
        if remaining <= 0:
            return 0.0
        months = max(self.months_remaining(goal, today), 1)
        return float(math.ceil(remaining / months))

    def derive_status(self, goal: Goal, today: Optional[date] = None) -> GoalStatus:
        if goal.current_amount >= goal.target_amount:
            return GoalStatus.COMPLETED
        projected = goal.current_amount + goal.monthly_contribution * self.months_remaining(goal, today)
        if projected >= goal.target_amount:
            return GoalStatus.ON_TRACK
        return GoalStatus.BEHIND

    def overview(self) -> GoalsOverview:
        total_target = sum(g.target_amount for g in self.goals)
        total_saved = sum(min(g.current_amount, g.target_amount) for g in self.goals)
        progress = (total_saved / total_target * 100) if total_target > 0 else 0.0

        return GoalsOverview(
            total_target=total_target,
            total_saved=total_saved,
            overall_progress=round(progress, 1),
            status_counts=dict(Counter(g.status.value for g in self.goals))
        )

    def _get(self, goal_id: str) -> Goal:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        raise ValueError(f"Unknown goal: {goal_id}")


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    # Clamp to the last day of shorter months
    for day in (start.day, 30, 29, 28):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return date(year, month, 28)


def _validate_goal(fields: dict) -> dict:
    """Check and normalise goal form fields, reporting every failure at once"""
    errors = {}
    title = (fields.get("title") or "").strip()
    if not title:
        errors["title"] = "Goal title is required"

    target_amount = fields.get("target_amount")
    if target_amount is None or target_amount <= 0:
        errors["target_amount"] = "Target amount must be greater than 0"
    current_amount = fields.get("current_amount")
    if current_amount is None or current_amount < 0:
        errors["current_amount"] = "Current amount cannot be negative"
    monthly_contribution = fields.get("monthly_contribution")
    if monthly_contribution is None or monthly_contribution < 0:
        errors["monthly_contribution"] = "Monthly contribution cannot be negative"
    if fields.get("target_date") is None:
        errors["target_date"] = "Target date is required"

    enums = {}
    for name, enum_type, default in [
        ("category", GoalCategory, GoalCategory.OTHER),
        ("priority", GoalPriority, GoalPriority.MEDIUM),
        ("status", GoalStatus, None),
    ]:
        value = fields.get(name)
        try:
            enums[name] = enum_type(value) if value is not None else default
        except ValueError:
            errors[name] = f"Unknown goal {name}: {value}"

    if errors:
        raise FormValidationError(errors, title="Invalid goal")

    return {
        "title": title,
        "target_amount": target_amount,
        "current_amount": current_amount,
        "target_date": fields["target_date"],
        "monthly_contribution": monthly_contribution,
        **enums,
    }
