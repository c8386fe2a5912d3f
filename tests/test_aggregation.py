"""Tests for the grouping primitive and dashboard summary."""

from decimal import Decimal

from lifeboard.services.aggregation import (
    quantize_money,
    sum_by_category,
    summarize_transactions,
)

from tests.factories import make_transaction


class TestSumByCategory:
    def test_groups_and_sums(self):
        txns = [
            make_transaction("expense", "10.50", "food", "2024-01-01"),
            make_transaction("expense", "4.25", "food", "2024-01-02"),
            make_transaction("expense", "30", "rent", "2024-01-03"),
        ]
        assert sum_by_category(txns) == {"food": Decimal("14.75"), "rent": Decimal("30.00")}

    def test_categories_are_opaque_labels(self):
        txns = [
            make_transaction("expense", "1", "Food", "2024-01-01"),
            make_transaction("expense", "2", "food", "2024-01-01"),
            make_transaction("expense", "3", " food", "2024-01-01"),
        ]
        assert set(sum_by_category(txns)) == {"Food", "food", " food"}

    def test_empty_input(self):
        assert sum_by_category([]) == {}


class TestSummarizeTransactions:
    def test_january_scenario(self):
        # GIVEN one salary income and one food expense
        txns = [
            make_transaction("income", "100", "salary", "2024-01-01"),
            make_transaction("expense", "40", "food", "2024-01-02"),
        ]

        # WHEN summarizing
        payload = summarize_transactions(txns)

        # THEN totals and category maps match
        assert payload["summary"] == {
            "income": Decimal("100.00"),
            "expenses": Decimal("40.00"),
            "savings": Decimal("60.00"),
        }
        assert payload["income_categories"] == {"salary": Decimal("100.00")}
        assert payload["expense_categories"] == {"food": Decimal("40.00")}

    def test_savings_may_be_negative(self):
        txns = [
            make_transaction("income", "10", "salary", "2024-01-01"),
            make_transaction("expense", "25.10", "fun", "2024-01-01"),
        ]
        summary = summarize_transactions(txns)["summary"]
        assert summary["savings"] == Decimal("-15.10")
        assert summary["income"] - summary["expenses"] == summary["savings"]

    def test_category_maps_reconcile_with_totals(self):
        txns = [
            make_transaction("income", "0.10", "a", "2024-01-01"),
            make_transaction("income", "0.20", "b", "2024-01-01"),
            make_transaction("expense", "0.30", "c", "2024-01-01"),
            make_transaction("expense", "0.01", "c", "2024-01-02"),
        ]
        payload = summarize_transactions(txns)
        assert sum(payload["income_categories"].values()) == payload["summary"]["income"]
        assert sum(payload["expense_categories"].values()) == payload["summary"]["expenses"]

    def test_recent_transactions_are_newest_first_and_capped(self):
        txns = [make_transaction("expense", "1", "misc", f"2024-01-{day:02d}") for day in range(1, 16)]
        recent = summarize_transactions(txns)["transactions"]
        assert len(recent) == 10
        assert recent[0].date.day == 15
        assert recent[-1].date.day == 6

    def test_no_transactions(self):
        payload = summarize_transactions([])
        assert payload["summary"]["savings"] == Decimal("0.00")
        assert payload["transactions"] == []


def test_quantize_money_accepts_strings_and_ints():
    assert quantize_money("1.005") == Decimal("1.00")
    assert quantize_money(3) == Decimal("3.00")
