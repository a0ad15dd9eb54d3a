"""
Tests for PaisaWise display formatting
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.formatting import format_fund_date, format_inr


def test_indian_digit_grouping():
    """Lakhs and crores"""
    assert format_inr(0) == "₹0"
    assert format_inr(999) == "₹999"
    assert format_inr(1000) == "₹1,000"
    assert format_inr(100000) == "₹1,00,000"
    assert format_inr(1234567) == "₹12,34,567"
    assert format_inr(50000000) == "₹5,00,00,000"

    print(f"✓ {format_inr(1234567)}")


def test_decimals_and_sign():
    """Optional paise and a leading minus"""
    assert format_inr(1234.5, 2) == "₹1,234.50"
    assert format_inr(-2500) == "-₹2,500"
    assert format_inr(1499.6) == "₹1,500"
    assert format_inr(-0.4) == "₹0"
    assert format_inr(-0.004, 2) == "₹0.00"
    assert format_inr(-0.6) == "-₹1"

    print(f"✓ {format_inr(-2500)} and {format_inr(1234.5, 2)}")


def test_fund_date():
    """ISO dates shown as day month year"""
    assert format_fund_date("2025-08-05") == "05 Aug 2025"
    assert format_fund_date("N/A") == "N/A"
    assert format_fund_date("") == ""

    print(f"✓ {format_fund_date('2025-08-05')}")


if __name__ == "__main__":
    print("\n🧪 Running PaisaWise Formatting Tests\n")
    print("-" * 50)

    test_indian_digit_grouping()
    test_decimals_and_sign()
    test_fund_date()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
