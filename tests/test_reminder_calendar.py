"""
Tests for PaisaWise Investment Calendar
"""
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.schemas import FormValidationError, ReminderType
from tools.reminder_calendar import ReminderCalendar, next_month, previous_month


def test_month_grid_layout():
    """Leading blanks count from Sunday"""
    cal = ReminderCalendar()

    june = cal.month_view(2025, 6, today=date(2025, 6, 10))
    assert june.leading_blanks == 0  # 1 June 2025 is a Sunday
    assert len(june.days) == 30
    assert june.month_name == "June"
    assert june.days[9].is_today
    assert sum(d.is_today for d in june.days) == 1

    august = cal.month_view(2025, 8)
    assert august.leading_blanks == 5  # Friday
    assert len(august.days) == 31

    assert len(cal.month_view(2024, 2).days) == 29

    print("✓ Month grid: June 2025 starts Sunday, August 2025 starts Friday")


def test_sample_reminders():
    """Demo reminders land on fixed days of the current month"""
    cal = ReminderCalendar.with_sample_data(date(2025, 2, 10))

    assert [r.date.day for r in cal.reminders] == [15, 20, 25, 28]
    tip = cal.reminders[3]
    assert tip.type == ReminderType.TIP
    assert tip.amount is None
    assert cal.reminders[0].amount == "₹5,000"

    print("✓ Sample reminders loaded")


def test_amount_only_for_sip_and_goal():
    """Tips and general reminders drop the amount"""
    cal = ReminderCalendar()

    sip = cal.add_reminder("SIP Due", date(2025, 3, 5), "sip", amount=" ₹5,000 ")
    tip = cal.add_reminder("Read about ELSS", date(2025, 3, 6), ReminderType.TIP, amount="₹500")
    note = cal.add_reminder("Call the bank", date(2025, 3, 7), description="  ", amount="₹100")

    assert sip.amount == "₹5,000"
    assert tip.amount is None
    assert note.amount is None
    assert note.type == ReminderType.REMINDER
    assert note.description is None

    print("✓ Amounts kept only for SIP and goal reminders")


def test_day_markers():
    """At most three dots per day, plus an overflow marker"""
    cal = ReminderCalendar()
    day = date(2025, 3, 10)
    for reminder_type in ["sip", "goal", "tip", "reminder"]:
        cal.add_reminder(f"{reminder_type} event", day, reminder_type)

    view = cal.month_view(2025, 3)
    cell = view.days[9]
    assert len(cell.events) == 4
    assert cell.markers == [ReminderType.SIP, ReminderType.GOAL, ReminderType.TIP]
    assert cell.has_overflow
    assert not view.days[10].has_overflow

    print("✓ Day markers capped at three")


def test_upcoming_events():
    """Soonest first, urgent within a day"""
    cal = ReminderCalendar.with_sample_data(date(2025, 2, 10))

    events = cal.upcoming(today=date(2025, 2, 14))
    assert [e.days_away for e in events] == [1, 6, 11, 14]
    assert events[0].urgent
    assert not events[1].urgent

    later = cal.upcoming(today=date(2025, 2, 21))
    assert [e.reminder.date.day for e in later] == [25, 28]

    assert cal.upcoming(today=date(2025, 2, 1), days=7) == []

    print(f"✓ {len(events)} upcoming reminders, first is urgent")


def test_update_and_delete():
    """Edit keeps the id"""
    cal = ReminderCalendar()
    reminder = cal.add_reminder("Insurance premium", date(2025, 4, 1))

    updated = cal.update_reminder(reminder.id, "Insurance premium due", date(2025, 4, 2), "goal", amount="₹12,000")
    assert updated.id == reminder.id
    assert cal.events_on(date(2025, 4, 2)) == [updated]
    assert cal.events_on(date(2025, 4, 1)) == []

    cal.delete_reminder(reminder.id)
    assert cal.reminders == []

    try:
        cal.delete_reminder(reminder.id)
        assert False, "Should have raised ValueError for unknown reminder"
    except ValueError as e:
        print(f"✓ Unknown reminder rejected: {e}")


def test_invalid_reminder():
    """Title, date and a known type are required"""
    cal = ReminderCalendar()
    try:
        cal.add_reminder("", None, "party")
        assert False, "Should have raised FormValidationError"
    except FormValidationError as e:
        assert set(e.errors) == {"title", "date", "type"}
        print(f"✓ Invalid reminder rejected: {e}")


def test_month_navigation():
    """Year wraps in both directions"""
    assert next_month(2025, 12) == (2026, 1)
    assert next_month(2025, 6) == (2025, 7)
    assert previous_month(2025, 1) == (2024, 12)
    assert previous_month(2025, 6) == (2025, 5)

    print("✓ Month navigation")


if __name__ == "__main__":
    print("\n🧪 Running PaisaWise Calendar Tests\n")
    print("-" * 50)

    test_month_grid_layout()
    test_sample_reminders()
    test_amount_only_for_sip_and_goal()
    test_day_markers()
    test_upcoming_events()
    test_update_and_delete()
    test_month_navigation()

    print("\n--- Input Validation Tests ---")
    test_invalid_reminder()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
