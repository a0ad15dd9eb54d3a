"""
Tests for PaisaWise Financial Calculator
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.financial_calculator import (
    BasicCalculator,
    FinancialCalculator,
    calculate_compound_interest,
    calculate_emi,
    calculate_sip,
)


def press_all(calc: BasicCalculator, *keys: str) -> str:
    for key in keys:
        calc.press(key)
    return calc.display


def test_sip_maturity():
    """₹5,000 a month at 12% for 10 years"""
    result = FinancialCalculator().sip(5000, 12, 10)

    assert abs(result.maturity_amount - 1161695.38) < 1, f"Got {result.maturity_amount}"
    assert result.invested_amount == 600000
    assert abs(result.estimated_returns - (result.maturity_amount - 600000)) < 0.01

    print(f"✓ SIP ₹5,000 x 10y @12% → ₹{result.maturity_amount:,.2f}")


def test_emi():
    """₹1,00,000 loan at 12% for 1 year"""
    result = FinancialCalculator().emi(100000, 12, 1)

    assert abs(result.emi - 8884.88) < 0.05, f"Got {result.emi}"
    assert abs(result.total_amount - result.emi * 12) < 0.05
    assert abs(result.total_interest - 6618.55) < 0.5

    print(f"✓ EMI on ₹1,00,000 @12% for 1y: ₹{result.emi:,.2f}/month")


def test_compound_interest():
    """Annual compounding"""
    result = FinancialCalculator().compound_interest(100000, 10, 2)

    assert result.maturity_amount == 121000
    assert result.interest_earned == 21000

    print(f"✓ ₹1,00,000 @10% for 2y → ₹{result.maturity_amount:,.2f}")


def test_incomplete_inputs_return_none():
    """Zero or missing inputs mean the form is not filled in yet"""
    calc = FinancialCalculator()

    assert calc.sip(0, 12, 10) is None
    assert calc.sip(5000, None, 10) is None
    assert calc.emi(100000, 0, 5) is None
    assert calc.compound_interest(100000, 10, 0) is None

    print("✓ Incomplete inputs return None")


def test_negative_inputs_rejected():
    """Negative inputs raise"""
    calc = FinancialCalculator()

    try:
        calc.sip(-5000, 12, 10)
        assert False, "Should have raised ValueError for negative SIP amount"
    except ValueError as e:
        assert "negative" in str(e).lower()
        print(f"✓ Negative SIP rejected: {e}")

    try:
        calc.emi(100000, 8.5, -5)
        assert False, "Should have raised ValueError for negative tenure"
    except ValueError as e:
        assert "years" in str(e).lower()
        print(f"✓ Negative tenure rejected: {e}")


def test_tool_wrappers():
    """Wrappers return plain dicts for the assistant"""
    sip = calculate_sip(5000, 12, 10)
    assert set(sip) == {"maturity_amount", "invested_amount", "estimated_returns"}

    emi = calculate_emi(100000, 12, 1)
    assert "emi" in emi

    assert calculate_compound_interest(0, 10, 5) == {"error": "All inputs must be greater than zero"}
    assert "negative" in calculate_emi(-1, 10, 5)["error"].lower()

    print("✓ Tool wrappers return dicts and error payloads")


def test_basic_arithmetic():
    """Keypad arithmetic"""
    assert press_all(BasicCalculator(), "1", "2", "+", "3", "=") == "15"
    assert press_all(BasicCalculator(), "9", "×", "8", "=") == "72"
    assert press_all(BasicCalculator(), "2", "−", "5", "=") == "-3"
    assert press_all(BasicCalculator(), "1", ".", "5", "×", "2", "=") == "3"
    assert press_all(BasicCalculator(), "1", "÷", "3", "=") == "0.3333333"

    print("✓ Keypad arithmetic")


def test_chained_operators():
    """A second operator evaluates the pending one"""
    calc = BasicCalculator()
    assert press_all(calc, "2", "+", "3", "×") == "5"
    assert press_all(calc, "4", "=") == "20"

    print("✓ 2 + 3 × 4 = 20 (evaluated left to right)")


def test_operator_replaced_while_waiting():
    """Pressing two operators in a row keeps only the last"""
    calc = BasicCalculator()
    assert press_all(calc, "6", "+", "−", "2", "=") == "4"

    print("✓ 6 + − 2 = 4")


def test_divide_by_zero():
    """Division by zero shows Error and resets"""
    calc = BasicCalculator()
    assert press_all(calc, "5", "÷", "0", "=") == BasicCalculator.ERROR
    assert calc.previous_value is None
    assert calc.operation is None

    # Next digit starts fresh
    assert press_all(calc, "7") == "7"

    print("✓ Divide by zero → Error")


def test_clear_entry_and_backspace():
    """CE keeps the pending operation, ⌫ trims the entry"""
    assert press_all(BasicCalculator(), "1", "+", "2", "CE", "3", "=") == "4"
    assert press_all(BasicCalculator(), "1", "2", "3", "⌫") == "12"
    assert press_all(BasicCalculator(), "5", "⌫") == "0"
    assert press_all(BasicCalculator(), "2", "−", "5", "=", "⌫") == "0"
    assert press_all(BasicCalculator(), "4", "+", "4", "C") == "0"

    print("✓ CE, ⌫ and C")


def test_decimal_point():
    """Only one decimal point per entry"""
    assert press_all(BasicCalculator(), "1", ".", ".", "5") == "1.5"
    assert press_all(BasicCalculator(), "2", "+", ".", "5", "=") == "2.5"

    print("✓ Decimal point handling")


def test_format_number():
    """Seven decimal places, trailing zeros dropped"""
    assert BasicCalculator.format_number(0.1 + 0.2) == "0.3"
    assert BasicCalculator.format_number(4.0) == "4"
    assert BasicCalculator.format_number(-0.00000001) == "0"
    assert BasicCalculator.format_number(2 / 3) == "0.6666667"

    print("✓ Display formatting")


def test_invalid_key_rejected():
    """Unknown keypad labels raise"""
    try:
        BasicCalculator().press("a")
        assert False, "Should have raised ValueError for unknown key"
    except ValueError as e:
        print(f"✓ Unknown key rejected: {e}")


if __name__ == "__main__":
    print("\n🧪 Running PaisaWise Calculator Tests\n")
    print("-" * 50)

    test_sip_maturity()
    test_emi()
    test_compound_interest()
    test_incomplete_inputs_return_none()
    test_negative_inputs_rejected()
    test_tool_wrappers()

    print("\n--- Keypad Tests ---")
    test_basic_arithmetic()
    test_chained_operators()
    test_operator_replaced_while_waiting()
    test_divide_by_zero()
    test_clear_entry_and_backspace()
    test_decimal_point()
    test_format_number()
    test_invalid_key_rejected()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
