#!/usr/bin/env python3
"""Test script for the sectioned receipt preview."""
from __future__ import annotations
import sys
from datetime import date
from pathlib import Path

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.utils import PLACEHOLDER
from models.receipt import EmployeeSeed, InsuranceInput, InvestorRecord, InvestorSeed, ReceiptRecord, blank_input
from render import build_preview, laid_out_fields
from wizard import assemble, normalize

TODAY = date(2024, 3, 9)


def _record(raw) -> ReceiptRecord:
    investor = InvestorRecord(investorId="100201", investorName="Anil Kapoor", pan="ABCPK1234A")
    return assemble(
        EmployeeSeed(empCode="ECS497", employeeName="Jane Doe", branch="Mumbai"),
        InvestorSeed(investorId="100201", investorInfo=investor),
        normalize(raw),
        today=TODAY,
    )


def test_layout_covers_every_field_once():
    wire_names = [f.alias or name for name, f in ReceiptRecord.model_fields.items()]
    laid_out = laid_out_fields()
    assert sorted(laid_out) == sorted(wire_names)
    assert len(laid_out) == len(set(laid_out))
    print("✅ PASS: layout coverage")


def test_non_empty_fields_appear_in_exactly_one_row():
    raw = InsuranceInput(issuer="LIC of India", insCategory="Term", product="Tech Term", premiumAmount="24000", dateOfIssue="2024-01-15")
    record = _record(raw)
    data = record.model_dump(by_alias=True)
    rows = [row for section in build_preview(record) for row in section.rows]

    for name, value in data.items():
        if value in ("", None):
            continue
        holders = [row for row in rows if name in row.fields]
        assert len(holders) == 1, name
        assert not holders[0].is_empty, name
    print("✅ PASS: non-empty fields placed once")


def test_empty_rows_show_placeholder():
    record = _record(blank_input("MF"))
    rows = {(s.title, r.label): r for s in build_preview(record) for r in s.rows}
    assert rows[("Investor", "Address")].value == PLACEHOLDER
    assert rows[("FD / Bonds / NCD", "ROI (%)")].is_empty
    assert rows[("Receipt", "Date")].value == "09/03/2024"
    assert rows[("Investment Details", "Product Category")].value == "Mutual Fund"
    assert rows[("Investment Details", "Investment Amount")].value == "₹0.00"
    print("✅ PASS: placeholders")


def test_currency_symbol_override():
    raw = blank_input("BOND")
    raw.investmentAmount = "150000"
    record = _record(raw)
    rows = {r.label: r.value for s in build_preview(record, currency_symbol="Rs. ") for r in s.rows}
    assert rows["Investment Amount"] == "Rs. 1,50,000.00"
    print("✅ PASS: currency symbol")


if __name__ == "__main__":
    test_layout_covers_every_field_once()
    test_non_empty_fields_appear_in_exactly_one_row()
    test_empty_rows_show_placeholder()
    test_currency_symbol_override()
    print("\nAll preview tests passed")
