"""
Tests for PaisaWise Split Bills
"""
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.schemas import FormValidationError, Participant, SplitBill
from tools.bill_splitter import YOU, BillSplitter, SplitLedger, SplitMethod, equal_shares


def test_equal_split_in_paise():
    """Shares always add up to the bill"""
    assert equal_shares(1000, 3) == [333.34, 333.33, 333.33]
    assert equal_shares(2400, 4) == [600, 600, 600, 600]
    assert equal_shares(0.05, 2) == [0.03, 0.02]
    assert equal_shares(100, 0) == []

    print("✓ ₹1,000 / 3 → 333.34 + 333.33 + 333.33")


def test_equal_split_follows_participants():
    """Adding or removing people re-splits the bill"""
    splitter = BillSplitter("Dinner", 1000)
    assert splitter.participants[0].name == YOU
    assert splitter.participants[0].amount == 1000

    splitter.add_participant("Asha")
    splitter.add_participant("Ravi")
    assert [p.amount for p in splitter.participants] == [333.34, 333.33, 333.33]
    assert splitter.is_balanced

    splitter.remove_participant("Ravi")
    assert [p.amount for p in splitter.participants] == [500, 500]

    splitter.set_total(900)
    assert [p.amount for p in splitter.participants] == [450, 450]

    print("✓ Equal split recalculated on every change")


def test_custom_split_must_balance():
    """Custom shares must match the total within a paisa"""
    splitter = BillSplitter("Groceries", 1000)
    splitter.add_participant("Asha")
    splitter.add_participant("Ravi")
    splitter.use_custom_split()
    assert splitter.method == SplitMethod.CUSTOM

    splitter.set_amount(YOU, 500)
    splitter.set_amount("Asha", 300)
    splitter.set_amount("Ravi", 100)
    assert splitter.split_total == 900
    assert not splitter.is_balanced

    try:
        splitter.build(date(2025, 8, 10))
        assert False, "Should have raised FormValidationError for mismatched split"
    except FormValidationError as e:
        assert e.title == "Amount Mismatch"
        print(f"✓ Unbalanced split rejected: {e}")

    splitter.set_amount("ravi", 200)
    bill = splitter.build(date(2025, 8, 10))
    assert bill.total_amount == 1000
    assert [p.amount for p in bill.participants] == [500, 300, 200]
    assert bill.date == date(2025, 8, 10)

    print("✓ Balanced custom split accepted")


def test_invalid_bill():
    """Description, total and a second participant are required"""
    splitter = BillSplitter()
    try:
        splitter.build()
        assert False, "Should have raised FormValidationError for empty bill"
    except FormValidationError as e:
        assert e.title == "Invalid Bill"
        assert set(e.errors) == {"description", "total_amount", "participants"}
        print(f"✓ Empty bill rejected: {e}")


def test_participant_rules():
    """Names are unique and you cannot leave your own bill"""
    splitter = BillSplitter("Cab", 600)
    splitter.add_participant("Asha")

    for action, expected in [
        (lambda: splitter.add_participant("asha"), "already"),
        (lambda: splitter.add_participant("  "), "required"),
        (lambda: splitter.remove_participant(YOU), "cannot"),
        (lambda: splitter.remove_participant("you"), "cannot"),
        (lambda: splitter.remove_participant(" You "), "cannot"),
        (lambda: splitter.remove_participant("Zed"), "unknown"),
        (lambda: splitter.set_amount("Asha", 100), "custom"),
    ]:
        try:
            action()
            assert False, f"Should have raised ValueError ({expected})"
        except ValueError as e:
            assert expected in str(e).lower(), f"Unexpected message: {e}"

    assert [p.name for p in splitter.participants] == [YOU, "Asha"], "You must stay on the bill"
    print("✓ Participant validation")


def test_ledger_balances():
    """Who owes whom across all bills"""
    ledger = SplitLedger.with_sample_data()

    assert ledger.owed_to_you() == 1600  # John 600 + Bob 600 + Sarah 400
    assert ledger.you_owe() == 0

    ledger.settle(0, "John")
    assert ledger.owed_to_you() == 1000

    ledger.add(SplitBill(
        description="Weekend trip",
        total_amount=3000,
        date=date(2025, 8, 9),
        participants=[
            Participant(name="Asha", amount=1500, settled=True),
            Participant(name=YOU, amount=1500, settled=False),
        ]
    ))
    assert ledger.bills[0].description == "Weekend trip"
    assert ledger.you_owe() == 1500
    assert ledger.owed_to_you() == 1000

    print(f"✓ Ledger: owed to you ₹{ledger.owed_to_you():,.0f}, you owe ₹{ledger.you_owe():,.0f}")


def test_bills_without_you_are_ignored():
    """Other people's bills don't count towards your balance"""
    ledger = SplitLedger([SplitBill(
        description="Office lunch",
        total_amount=500,
        date=date(2025, 8, 1),
        participants=[Participant(name="Asha", amount=250), Participant(name="Ravi", amount=250)]
    )])

    assert ledger.owed_to_you() == 0
    assert ledger.you_owe() == 0

    print("✓ Bills without you are ignored")


def test_settle_unknown():
    """Settling an unknown bill or person raises"""
    ledger = SplitLedger.with_sample_data()

    for index, name in [(5, "John"), (-1, "Sarah"), (0, "Zed")]:
        try:
            ledger.settle(index, name)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            print(f"✓ Settle rejected: {e}")

    assert ledger.owed_to_you() == 1600, "Negative positions must not settle the last bill"


if __name__ == "__main__":
    print("\n🧪 Running PaisaWise Split Bill Tests\n")
    print("-" * 50)

    test_equal_split_in_paise()
    test_equal_split_follows_participants()
    test_custom_split_must_balance()
    test_ledger_balances()
    test_bills_without_you_are_ignored()

    print("\n--- Input Validation Tests ---")
    test_invalid_bill()
    test_participant_rules()
    test_settle_unknown()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
