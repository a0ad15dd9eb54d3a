"""
Financial Calculator
SIP, loan EMI and compound interest, plus the four-function keypad
"""
from typing import Optional
from models.schemas import SIPResult, EMIResult, CompoundInterestResult


class FinancialCalculator:
    """Closed-form investment and loan formulas"""

    def sip(
        self,
        monthly_amount: Optional[float],
        annual_rate: Optional[float],
        years: Optional[float]
    ) -> Optional[SIPResult]:
        """
        Future value of a monthly SIP (payments at the start of each month)

        Returns None until every input is filled in
        """
        if not self._ready(monthly_amount, annual_rate, years):
            return None
        self._check_non_negative(
            monthly_amount=monthly_amount, annual_rate=annual_rate, years=years
        )

        r = annual_rate / 100 / 12
        n = years * 12

        maturity = monthly_amount * (((1 + r) ** n - 1) / r) * (1 + r)
        invested = monthly_amount * n

        return SIPResult(
            maturity_amount=round(maturity, 2),
            invested_amount=round(invested, 2),
            estimated_returns=round(maturity - invested, 2)
        )

    def emi(
        self,
        principal: Optional[float],
        annual_rate: Optional[float],
        years: Optional[float]
    ) -> Optional[EMIResult]:
        """Equated monthly installment for a reducing balance loan"""
        if not self._ready(principal, annual_rate, years):
            return None
        self._check_non_negative(principal=principal, annual_rate=annual_rate, years=years)

        r = annual_rate / 100 / 12
        n = years * 12
        growth = (1 + r) ** n

        emi = principal * r * growth / (growth - 1)
        total = emi * n

        return EMIResult(
            emi=round(emi, 2),
            total_amount=round(total, 2),
            total_interest=round(total - principal, 2)
        )

    def compound_interest(
        self,
        principal: Optional[float],
        annual_rate: Optional[float],
        years: Optional[float]
    ) -> Optional[CompoundInterestResult]:
        """Lump sum compounded annually"""
        if not self._ready(principal, annual_rate, years):
            return None
        self._check_non_negative(principal=principal, annual_rate=annual_rate, years=years)

        amount = principal * (1 + annual_rate / 100) ** years

        return CompoundInterestResult(
            maturity_amount=round(amount, 2),
            interest_earned=round(amount - principal, 2)
        )

    @staticmethod
    def _ready(*values: Optional[float]) -> bool:
        # Zero or missing means the form is not complete yet
        return all(values)

    @staticmethod
    def _check_non_negative(**values: float) -> None:
        for name, value in values.items():
            if value < 0:
                raise ValueError(f"{name.replace('_', ' ').capitalize()} cannot be negative")


class BasicCalculator:
    """
    Keypad calculator with chained operators

    Pressing an operator while another is pending evaluates the pending one
    first, so "2 + 3 *" shows 5.
    """

    OPERATORS = ("+", "-", "*", "/")
    ERROR = "Error"

    def __init__(self):
        self.clear()

    def clear(self) -> None:
        """C: reset everything"""
        self.display = "0"
        self.previous_value: Optional[float] = None
        self.operation: Optional[str] = None
        self.waiting_for_operand = False

    def clear_entry(self) -> None:
        """CE: reset only the current entry"""
        self.display = "0"

    def input_digit(self, digit: str) -> None:
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a digit: {digit!r}")

        if self.waiting_for_operand or self.display == self.ERROR:
            self.display = digit
            self.waiting_for_operand = False
        else:
            self.display = digit if self.display == "0" else self.display + digit

    def add_decimal(self) -> None:
        if self.waiting_for_operand or self.display == self.ERROR:
            self.display = "0."
            self.waiting_for_operand = False
        elif "." not in self.display:
            self.display += "."

    def backspace(self) -> None:
        if self.display == self.ERROR:
            self.clear()
            return
        trimmed = self.display[:-1]
        self.display = trimmed if trimmed not in ("", "-") else "0"

    def input_operator(self, operator: str) -> None:
        if operator not in self.OPERATORS:
            raise ValueError(f"Unsupported operator: {operator!r}")
        if self.display == self.ERROR:
            self.clear()

        value = float(self.display)

        if self.previous_value is None:
            self.previous_value = value
        elif self.operation and not self.waiting_for_operand:
            result = self._apply(self.previous_value, value, self.operation)
            if result is None:
                return
            self.previous_value = result
            self.display = self.format_number(result)

        self.waiting_for_operand = True
        self.operation = operator

    def equals(self) -> None:
        if self.previous_value is None or not self.operation:
            return

        result = self._apply(self.previous_value, float(self.display), self.operation)
        if result is None:
            return

        self.display = self.format_number(result)
        self.previous_value = None
        self.operation = None
        self.waiting_for_operand = True

    def press(self, key: str) -> str:
        """Dispatch a keypad label and return the new display"""
        actions = {
            "C": self.clear,
            "CE": self.clear_entry,
            "⌫": self.backspace,
            ".": self.add_decimal,
            "=": self.equals,
            "÷": lambda: self.input_operator("/"),
            "×": lambda: self.input_operator("*"),
            "−": lambda: self.input_operator("-"),
        }
        if key in actions:
            actions[key]()
        elif key in self.OPERATORS:
            self.input_operator(key)
        else:
            self.input_digit(key)
        return self.display

    def _apply(self, first: float, second: float, operation: str) -> Optional[float]:
        if operation == "+":
            return first + second
        if operation == "-":
            return first - second
        if operation == "*":
            return first * second
        if second == 0:
            self.clear()
            self.display = self.ERROR
            return None
        return first / second

    @staticmethod
    def format_number(value: float) -> str:
        """Round to 7 decimals and drop trailing zeros"""
        rounded = round(value, 7)
        if rounded == 0:
            return "0"
        text = f"{rounded:.7f}".rstrip("0").rstrip(".")
        return text


# Convenience functions for tool usage
def calculate_sip(monthly_amount: float, annual_rate: float, years: float) -> dict:
    """SIP maturity value - wrapper for LangGraph tool"""
    try:
        result = FinancialCalculator().sip(monthly_amount, annual_rate, years)
    except ValueError as e:
        return {"error": str(e)}
    return result.model_dump() if result else {"error": "All inputs must be greater than zero"}


def calculate_emi(principal: float, annual_rate: float, years: float) -> dict:
    """Loan EMI - wrapper for LangGraph tool"""
    try:
        result = FinancialCalculator().emi(principal, annual_rate, years)
    except ValueError as e:
        return {"error": str(e)}
    return result.model_dump() if result else {"error": "All inputs must be greater than zero"}


def calculate_compound_interest(principal: float, annual_rate: float, years: float) -> dict:
    """Compound interest - wrapper for LangGraph tool"""
    try:
        result = FinancialCalculator().compound_interest(principal, annual_rate, years)
    except ValueError as e:
        return {"error": str(e)}
    return result.model_dump() if result else {"error": "All inputs must be greater than zero"}
