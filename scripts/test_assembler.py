#!/usr/bin/env python3
"""Test script for receipt assembly and the shared formatting helpers."""
from __future__ import annotations
import random
import re
import sys
from datetime import date
from pathlib import Path

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.utils import format_display_date, format_inr, generate_receipt_no, to_num
from models.receipt import EmployeeSeed, InvestorRecord, InvestorSeed, MutualFundInput, blank_input
from wizard import assemble, normalize

RECEIPT_NO = re.compile(r"^ECS-\d{8}-\d{4}$")
TODAY = date(2024, 3, 9)

EMPLOYEE = EmployeeSeed(empCode="ECS497", employeeName="Jane Doe", branch="Mumbai")
INVESTOR = InvestorRecord(
    investorId="100201",
    investorName="Anil Kapoor",
    investorAddress="12 Marine Drive",
    pinCode="400020",
    pan="ABCPK1234A",
    email="anil.kapoor@example.com",
)


def test_receipt_number_format():
    for seed in range(20):
        number = generate_receipt_no(TODAY, random.Random(seed))
        assert RECEIPT_NO.match(number), number
        assert number.startswith("ECS-20240309-")
    print("✅ PASS: receipt number format")


def test_assemble_merges_seeds():
    fields = normalize(MutualFundInput(issuer="ABC Mutual Fund", scheme="Growth Fund", investmentAmount="50000"))
    record = assemble(EMPLOYEE, InvestorSeed(investorId="100201", investorInfo=INVESTOR), fields, today=TODAY)

    assert RECEIPT_NO.match(record.receiptNo)
    assert record.date == "2024-03-09"
    assert record.empCode == "ECS497"
    assert record.employeeName == "Jane Doe"
    assert record.branch == "Mumbai"
    assert record.investorName == "Anil Kapoor"
    assert record.pan == "ABCPK1234A"
    assert record.investmentAmount == 50000
    assert record.issuerCategory == "Mutual Fund"
    print("✅ PASS: assemble merges seeds")


def test_assemble_is_idempotent_except_receipt_no():
    fields = normalize(blank_input("FD"))
    seed = InvestorSeed(investorId="100201", investorInfo=INVESTOR)
    first = assemble(EMPLOYEE, seed, fields, today=TODAY).to_payload()
    second = assemble(EMPLOYEE, seed, fields, today=TODAY).to_payload()
    first.pop("receiptNo")
    second.pop("receiptNo")
    assert first == second
    print("✅ PASS: assemble idempotent")


def test_missing_investor_info_keeps_id_only():
    record = assemble(EMPLOYEE, InvestorSeed(investorId="999"), normalize(blank_input("MF")), today=TODAY)
    assert record.investorId == "999"
    assert record.investorName == ""
    assert record.investorAddress == ""
    print("✅ PASS: missing investor info")


def test_template_defaults_survive():
    record = assemble(EMPLOYEE, InvestorSeed(), normalize(blank_input("BOND")), today=TODAY)
    assert record.mode == "Lump Sum"
    assert record.txnType == "Fresh"
    assert record.fdType == ""
    assert record.clientType == ""
    assert record.interestPayable == ""
    assert record.interestFrequency == ""
    assert record.noOfInstallments == ""

    payload = record.to_payload()
    assert "from" in payload and "from_" not in payload
    print("✅ PASS: template defaults")


def test_formatting_helpers():
    assert to_num("") == 0
    assert to_num(None) == 0
    assert to_num("abc") == 0
    assert to_num("nan") == 0
    assert to_num(" 2,500.50 ") == 2500.5
    assert format_inr(5000000) == "₹50,00,000.00"
    assert format_inr("1234.5", symbol="Rs. ") == "Rs. 1,234.50"
    assert format_inr("") == ""
    assert format_inr("n/a") == "n/a"
    assert format_display_date("2024-03-09") == "09/03/2024"
    assert format_display_date("soon") == "soon"
    print("✅ PASS: formatting helpers")


if __name__ == "__main__":
    test_receipt_number_format()
    test_assemble_merges_seeds()
    test_assemble_is_idempotent_except_receipt_no()
    test_missing_investor_info_keeps_id_only()
    test_template_defaults_survive()
    test_formatting_helpers()
    print("\nAll assembler tests passed")
