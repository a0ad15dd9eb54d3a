"""
Split Bills
Share a bill between friends and keep track of who still owes what
"""
from datetime import date
from enum import Enum
from typing import Optional
from models.schemas import FormValidationError, Participant, SplitBill
from tools.sample_data import load_sample_data


YOU = "You"
BALANCE_TOLERANCE = 0.01


class SplitMethod(str, Enum):
    EQUAL = "equal"
    CUSTOM = "custom"


class BillSplitter:
    """State of a single 'create split bill' form"""

    def __init__(self, description: str = "", total_amount: float = 0.0):
        self.description = description
        self.total_amount = total_amount
        self.method = SplitMethod.EQUAL
        self.participants: list[Participant] = [Participant(name=YOU, settled=True)]
        self._recalculate()

    def set_total(self, amount: float) -> None:
        if amount < 0:
            raise ValueError("Total amount cannot be negative")
        self.total_amount = amount
        self._recalculate()

    def add_participant(self, name: str) -> Participant:
        name = (name or "").strip()
        if not name:
            raise ValueError("Participant name is required")
        if self._find(name):
            raise ValueError(f"'{name}' is already part of this bill")

        participant = Participant(name=name)
        self.participants.append(participant)
        self._recalculate()
        return participant

    def remove_participant(self, name: str) -> None:
        participant = self._find(name or "")
        if participant is None:
            raise ValueError(f"Unknown participant: {name}")
        if participant.name == YOU:
            raise ValueError("You cannot be removed from your own bill")

        self.participants.remove(participant)
        self._recalculate()

    def use_equal_split(self) -> None:
        self.method = SplitMethod.EQUAL
        self._recalculate()

    def use_custom_split(self) -> None:
        self.method = SplitMethod.CUSTOM

    def set_amount(self, name: str, amount: float) -> None:
        """Set one participant's share (custom split only)"""
        if self.method != SplitMethod.CUSTOM:
            raise ValueError("Switch to a custom split before editing amounts")
        if amount < 0:
            raise ValueError("Share cannot be negative")
        participant = self._find(name)
        if participant is None:
            raise ValueError(f"Unknown participant: {name}")
        participant.amount = amount

    @property
    def split_total(self) -> float:
        return sum(p.amount for p in self.participants)

    @property
    def is_balanced(self) -> bool:
        return abs(self.split_total - self.total_amount) < BALANCE_TOLERANCE

    def build(self, bill_date: Optional[date] = None) -> SplitBill:
        """Validate the form and produce the bill"""
        errors = {}
        if not self.description.strip():
            errors["description"] = "Bill description is required"
        if not self.total_amount or self.total_amount <= 0:
            errors["total_amount"] = "Total amount must be greater than 0"
        if len(self.participants) < 2:
            errors["participants"] = "Add at least one other participant"
        if errors:
            raise FormValidationError(errors, title="Invalid Bill")

        if not self.is_balanced:
            raise FormValidationError(
                {
                    "participants": (
                        f"Split amounts (₹{self.split_total:.2f}) don't match "
                        f"total bill (₹{self.total_amount:.2f})"
                    )
                },
                title="Amount Mismatch"
            )

        return SplitBill(
            description=self.description.strip(),
            total_amount=self.total_amount,
            participants=[p.model_copy() for p in self.participants],
            date=bill_date or date.today()
        )

    def _find(self, name: str) -> Optional[Participant]:
        key = name.strip().lower()
        for participant in self.participants:
            if participant.name.lower() == key:
                return participant
        return None

    def _recalculate(self) -> None:
        if self.method != SplitMethod.EQUAL:
            return
        for participant, share in zip(
            self.participants,
            equal_shares(self.total_amount, len(self.participants))
        ):
            participant.amount = share


def equal_shares(total: float, count: int) -> list[float]:
    """
    Divide total into count shares that add up exactly

    Works in paise; leftover paise go to the first participants.
    """
    if count <= 0:
        return []
    paise = round(total * 100)
    base, remainder = divmod(paise, count)
    return [(base + (1 if i < remainder else 0)) / 100 for i in range(count)]


class SplitLedger:
    """All split bills, newest first"""

    def __init__(self, bills: Optional[list[SplitBill]] = None):
        self.bills: list[SplitBill] = list(bills or [])

    @classmethod
    def with_sample_data(cls) -> "SplitLedger":
        return cls([SplitBill(**bill) for bill in load_sample_data()["split_bills"]])

    def add(self, bill: SplitBill) -> None:
        self.bills.insert(0, bill)

    def owed_to_you(self) -> float:
        """Unsettled shares of other people on bills you are part of"""
        total = 0.0
        for bill in self.bills:
            if not any(p.name == YOU for p in bill.participants):
                continue
            total += sum(
                p.amount for p in bill.participants if p.name != YOU and not p.settled
            )
        return total

    def you_owe(self) -> float:
        total = 0.0
        for bill in self.bills:
            for p in bill.participants:
                if p.name == YOU and not p.settled:
                    total += p.amount
        return total

    def settle(self, bill_index: int, name: str) -> None:
        if not 0 <= bill_index < len(self.bills):
            raise ValueError(f"No split bill at position {bill_index}")
        bill = self.bills[bill_index]

        for p in bill.participants:
            if p.name == name:
                p.settled = True
                return
        raise ValueError(f"{name} is not part of '{bill.description}'")
