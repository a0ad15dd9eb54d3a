"""
Investment Calendar
SIP dates, goal milestones and tips laid out on a month grid
"""
import calendar
import uuid
from datetime import date, timedelta
from typing import Optional
from models.schemas import (
    CalendarDay,
    FormValidationError,
    MonthView,
    Reminder,
    ReminderType,
    UpcomingEvent,
)
from tools.sample_data import load_sample_data


# Only these reminder types show an amount field
AMOUNT_TYPES = {ReminderType.SIP, ReminderType.GOAL}

TYPE_LABELS = {
    ReminderType.REMINDER: "General Reminder",
    ReminderType.SIP: "SIP Payment",
    ReminderType.GOAL: "Goal Milestone",
    ReminderType.TIP: "Educational Tip",
}


class ReminderCalendar:
    """Reminder store plus month-grid rendering helpers"""

    def __init__(self, reminders: Optional[list[Reminder]] = None):
        self.reminders: list[Reminder] = list(reminders or [])

    @classmethod
    def with_sample_data(cls, today: Optional[date] = None) -> "ReminderCalendar":
        """Default reminders placed on fixed days of the current month"""
        today = today or date.today()
        last_day = calendar.monthrange(today.year, today.month)[1]
        cal = cls()
        for item in load_sample_data()["reminders"]:
            cal.add_reminder(
                title=item["title"],
                reminder_date=date(today.year, today.month, min(item["day"], last_day)),
                reminder_type=ReminderType(item["type"]),
                amount=item.get("amount")
            )
        return cal

    def add_reminder(
        self,
        title: str,
        reminder_date: Optional[date],
        reminder_type: ReminderType | str = ReminderType.REMINDER,
        description: Optional[str] = None,
        amount: Optional[str] = None
    ) -> Reminder:
        reminder = self._build(uuid.uuid4().hex[:12], title, reminder_date, reminder_type, description, amount)
        self.reminders.append(reminder)
        return reminder

    def update_reminder(
        self,
        reminder_id: str,
        title: str,
        reminder_date: Optional[date],
        reminder_type: ReminderType | str = ReminderType.REMINDER,
        description: Optional[str] = None,
        amount: Optional[str] = None
    ) -> Reminder:
        existing = self._get(reminder_id)
        reminder = self._build(reminder_id, title, reminder_date, reminder_type, description, amount)
        self.reminders[self.reminders.index(existing)] = reminder
        return reminder

    def delete_reminder(self, reminder_id: str) -> None:
        self.reminders.remove(self._get(reminder_id))

    def events_on(self, day: date) -> list[Reminder]:
        return [r for r in self.reminders if r.date == day]

    def month_view(self, year: int, month: int, today: Optional[date] = None) -> MonthView:
        today = today or date.today()
        first_weekday, days_in_month = calendar.monthrange(year, month)

        days = []
        for day in range(1, days_in_month + 1):
            current = date(year, month, day)
            days.append(CalendarDay(
                day=day,
                date=current,
                is_today=current == today,
                events=self.events_on(current)
            ))

        return MonthView(
            year=year,
            month=month,
            month_name=calendar.month_name[month],
            # calendar uses Monday = 0; the grid starts on Sunday
            leading_blanks=(first_weekday + 1) % 7,
            days=days
        )

    def upcoming(self, today: Optional[date] = None, days: int = 30) -> list[UpcomingEvent]:
        """Reminders from today through the window, soonest first"""
        today = today or date.today()
        horizon = today + timedelta(days=days)

        events = []
        for reminder in sorted(self.reminders, key=lambda r: r.date):
            if today <= reminder.date <= horizon:
                days_away = (reminder.date - today).days
                events.append(UpcomingEvent(
                    reminder=reminder,
                    days_away=days_away,
                    urgent=days_away <= 1
                ))
        return events

    def _build(
        self,
        reminder_id: str,
        title: str,
        reminder_date: Optional[date],
        reminder_type: ReminderType | str,
        description: Optional[str],
        amount: Optional[str]
    ) -> Reminder:
        errors = {}
        if not (title or "").strip():
            errors["title"] = "Title is required"
        if reminder_date is None:
            errors["date"] = "Date is required"
        try:
            reminder_type = ReminderType(reminder_type)
        except ValueError:
            errors["type"] = f"Unknown reminder type: {reminder_type}"
        if errors:
            raise FormValidationError(errors, title="Invalid reminder")

        if reminder_type not in AMOUNT_TYPES:
            amount = None

        return Reminder(
            id=reminder_id,
            title=title.strip(),
            description=(description or "").strip() or None,
            date=reminder_date,
            type=reminder_type,
            amount=(amount or "").strip() or None
        )

    def _get(self, reminder_id: str) -> Reminder:
        for reminder in self.reminders:
            if reminder.id == reminder_id:
                return reminder
        raise ValueError(f"Unknown reminder: {reminder_id}")


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1
