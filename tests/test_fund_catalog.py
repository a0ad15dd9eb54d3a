"""
Tests for PaisaWise Fund Catalog and comparison
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.schemas import FundPage, MutualFund
from tools.fund_catalog import FundCatalog, FundComparison, MAX_COMPARE


def test_category_filter():
    """Category matches the fund type or scheme type"""
    catalog = FundCatalog.with_sample_data()
    counts = catalog.category_counts()

    assert counts["All Funds"] == 6
    assert counts["Large Cap"] == 2
    assert counts["Small Cap"] == 1
    assert counts["Mid Cap"] == 0
    assert counts["Hybrid"] == 1
    assert counts["Debt"] == 1

    debt = catalog.filter(category="Debt")
    assert debt[0].name == "SBI Liquid Fund"

    print(f"✓ Category counts: {counts}")


def test_search_and_chips():
    """Search text, risk and duration filters combine"""
    catalog = FundCatalog.with_sample_data()

    assert [f.name for f in catalog.filter(search="LIQUID")] == ["SBI Liquid Fund"]
    assert len(catalog.filter(search="equity")) == 4  # matches the fund type
    assert [f.name for f in catalog.filter(risks=["High"])] == ["HDFC Small Cap Fund"]
    assert len(catalog.filter(durations=["3+ years"])) == 4
    assert len(catalog.filter(risks=["Low", "High"])) == 2
    assert catalog.filter(category="Large Cap", risks=["Low"]) == []

    print("✓ Search, risk and duration filters")


def test_merge_api_page():
    """API funds join the catalog once"""
    catalog = FundCatalog.with_sample_data()
    known = catalog.get("INF077A01024")
    new_fund = MutualFund(
        tradingsymbol="INF843K01013",
        amc="EDELWEISS MUTUAL FUND",
        name="Edelweiss Mid Cap Fund",
        scheme_type="Equity",
        last_price="91.10",
    )
    page = FundPage(
        size=2, page=0, last=True, first=True,
        number_of_elements=2, total_pages=1, total_elements=2,
        content=[known, new_fund]
    )

    assert catalog.from_page(page) == 1
    assert catalog.from_page(page) == 0
    assert len(catalog.funds) == 7

    merged = catalog.get("INF843K01013")
    assert merged.type is None
    assert merged.nav == 91.10
    assert catalog.filter(category="Mid Cap") == []
    assert catalog.filter(search="edelweiss")[0] == merged

    print("✓ API page merged without duplicates")


def test_comparison_limits():
    """Up to two other funds, no duplicates"""
    catalog = FundCatalog.with_sample_data()
    base = catalog.get("INF077A01024")
    comparison = FundComparison(base, catalog)

    comparison.add(catalog.get("INF090I01239"))
    assert len(comparison.available()) == 4

    for fund, expected in [(base, "being compared"), (catalog.get("INF090I01239"), "already in")]:
        try:
            comparison.add(fund)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert expected in str(e)

    comparison.add(catalog.get("INF179K01158"))
    assert comparison.is_full
    assert len(comparison.compare_with) == MAX_COMPARE

    try:
        comparison.add(catalog.get("INF200K01212"))
        assert False, "Should have raised ValueError when full"
    except ValueError as e:
        print(f"✓ Comparison full: {e}")

    comparison.remove("INF090I01239")
    assert not comparison.is_full
    assert [f.name for f in comparison.funds()] == ["Axis Bluechip Fund", "HDFC Small Cap Fund"]


def test_comparison_table():
    """Attributes as rows, one column per fund"""
    catalog = FundCatalog.with_sample_data()
    comparison = FundComparison(catalog.get("INF077A01024"), catalog)
    comparison.add(catalog.get("INF00XX01135"))

    table = comparison.table()
    assert list(table.columns) == ["Axis Bluechip Fund", "ITI Multi Cap Fund"]
    assert table.loc["AMC", "Axis Bluechip Fund"] == "AXIS MUTUAL FUND"
    assert table.loc["Risk", "ITI Multi Cap Fund"] == "Medium"
    assert table.loc["Purchase Allowed", "ITI Multi Cap Fund"] == "No"
    assert table.loc["Min Investment (₹)", "Axis Bluechip Fund"] == 500

    print(f"✓ Comparison table {table.shape[0]} rows x {table.shape[1]} funds")


if __name__ == "__main__":
    print("\n🧪 Running PaisaWise Fund Catalog Tests\n")
    print("-" * 50)

    test_category_filter()
    test_search_and_chips()
    test_merge_api_page()
    test_comparison_limits()
    test_comparison_table()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
