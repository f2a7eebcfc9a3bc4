#!/usr/bin/env python3
"""Test script for the four-step receipt wizard."""
from __future__ import annotations
import re
import sys
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from catalog import ReferenceData
from gateway import ApiError, AuthSession
from wizard import NO_MATCH_NOTICE, ReceiptWizard, Step

REFERENCE = ReferenceData.from_dir(ROOT_DIR / "catalog" / "data")
TODAY = date(2024, 3, 9)


def _signed_in_session() -> AuthSession:
    api = MagicMock()
    api.login.return_value = {"token": "tok-1"}
    api.me.return_value = {"id": 7, "emp_code": "ECS497", "name": "Jane Doe", "branch": "Mumbai", "role": "employee"}
    session = AuthSession(api)
    session.login("ECS497", "secret")
    return session


def _to_preview(wizard: ReceiptWizard) -> None:
    assert wizard.continue_from_employee("ECS497")
    wizard.set_investor_query("100201")
    wizard.select_investor(wizard.investor_results()[0])
    assert wizard.continue_from_investor()
    wizard.set_issuer("ABC Mutual Fund")
    wizard.set_scheme("Growth Fund")
    raw = wizard.current_input
    raw.investmentAmount = "50000"
    raw.set_txn_ref("UTR123")
    assert wizard.continue_from_product(today=TODAY)


def test_happy_path_builds_record():
    wizard = ReceiptWizard(REFERENCE)
    assert wizard.step == Step.EMPLOYEE

    assert wizard.continue_from_employee("ECS497")
    assert wizard.step == Step.INVESTOR
    assert wizard.employee_seed.employeeName == "Jane Doe"
    assert wizard.employee_seed.branch == "Mumbai"

    wizard.set_investor_query("anil")
    results = wizard.investor_results()
    assert [r.investorId for r in results] == ["100201"]
    wizard.select_investor(results[0])
    assert wizard.continue_from_investor()
    assert wizard.investor_seed.investorInfo.investorName == "Anil Kapoor"

    wizard.set_issuer("ABC Mutual Fund")
    wizard.set_scheme("Growth Fund")
    raw = wizard.current_input
    raw.investmentAmount = "50000"
    raw.set_txn_ref("UTR123")
    assert wizard.continue_from_product(today=TODAY)

    record = wizard.final_data
    assert wizard.step == Step.PREVIEW
    assert re.match(r"^ECS-20240309-\d{4}$", record.receiptNo)
    assert record.empCode == "ECS497"
    assert record.investorId == "100201"
    assert record.schemeName == "Growth Fund"
    assert record.investmentAmount == 50000
    assert record.instrumentType == "Online Ref"
    assert record.instrumentNo == "UTR123"
    print("✅ PASS: happy path")


def test_unknown_employee_proceeds_without_name():
    wizard = ReceiptWizard(REFERENCE)
    wizard.set_employee_code(" ZZZ999 ")
    assert wizard.employee_notice() == NO_MATCH_NOTICE
    assert wizard.continue_from_employee()
    assert wizard.employee_seed.empCode == "ZZZ999"
    assert wizard.employee_seed.employeeName == ""
    assert wizard.employee_seed.branch == ""
    print("✅ PASS: unknown employee")


def test_gating_blocks_forward_moves():
    wizard = ReceiptWizard(REFERENCE)
    assert not wizard.can_continue()
    assert not wizard.continue_from_employee("   ")
    assert wizard.step == Step.EMPLOYEE

    assert wizard.continue_from_employee("ECS101")
    assert not wizard.continue_from_investor()
    assert wizard.step == Step.INVESTOR

    # A new query drops the previous selection
    wizard.select_investor(wizard.investor_results()[0])
    wizard.set_investor_query("meera")
    assert wizard.selected_investor is None
    assert not wizard.continue_from_investor()

    # Out-of-order calls are ignored
    assert not wizard.continue_from_product()
    assert wizard.final_data is None
    print("✅ PASS: gating")


def test_issuer_change_resets_scheme():
    wizard = ReceiptWizard(REFERENCE)
    wizard.set_issuer("ABC Mutual Fund")
    assert wizard.scheme_options() == REFERENCE.mf_catalog.schemes("ABC Mutual Fund")
    wizard.set_scheme("Growth Fund")

    wizard.set_issuer("Sunrise Mutual Fund")
    assert wizard.current_input.scheme == ""
    assert wizard.scheme_options() == REFERENCE.mf_catalog.schemes("Sunrise Mutual Fund")

    wizard.select_product("INS")
    wizard.set_issuer("LIC of India")
    assert wizard.category_options() == ["Endowment", "Term"]
    wizard.set_insurance_category("Term")
    wizard.set_scheme("Tech Term")
    wizard.set_insurance_category("Endowment")
    assert wizard.current_input.product == ""
    wizard.set_issuer("Star Health")
    assert wizard.current_input.insCategory == ""

    # Switching products keeps each product's own inputs
    wizard.select_product("MF")
    assert wizard.current_input.issuer == "Sunrise Mutual Fund"
    print("✅ PASS: cascade reset")


def test_unknown_product_rejected():
    wizard = ReceiptWizard(REFERENCE)
    try:
        wizard.select_product("CRYPTO")
    except ValueError:
        print("✅ PASS: unknown product rejected")
        return
    raise AssertionError("select_product accepted an unknown category")


def test_back_discards_record_and_keeps_inputs():
    wizard = ReceiptWizard(REFERENCE)
    assert not wizard.back()

    _to_preview(wizard)
    assert wizard.back()
    assert wizard.step == Step.PRODUCT
    assert wizard.final_data is None
    assert wizard.current_input.investmentAmount == "50000"

    assert wizard.continue_from_product(today=TODAY)
    assert wizard.final_data is not None
    print("✅ PASS: back")


def test_save_success_resets_wizard():
    session = _signed_in_session()
    session.api.create_receipt.return_value = {"id": "abc123"}
    wizard = ReceiptWizard(REFERENCE, session=session)
    assert wizard.employee_code == "ECS497"

    _to_preview(wizard)
    payload_no = wizard.final_data.receiptNo
    result = wizard.save()

    assert result.ok
    assert result.receipt_id == "abc123"
    token, payload = session.api.create_receipt.call_args.args
    assert token == "tok-1"
    assert payload["receiptNo"] == payload_no
    assert wizard.step == Step.EMPLOYEE
    assert wizard.final_data is None
    assert wizard.employee_seed.empCode == ""
    print("✅ PASS: save success")


def test_save_failure_keeps_preview():
    session = _signed_in_session()
    session.api.create_receipt.side_effect = ApiError("timeout")
    wizard = ReceiptWizard(REFERENCE, session=session)

    _to_preview(wizard)
    record = wizard.final_data
    result = wizard.save()

    assert not result.ok
    assert wizard.save_error == "timeout"
    assert wizard.step == Step.PREVIEW
    assert wizard.final_data is record
    assert not wizard.is_saving
    print("✅ PASS: save failure")


def test_save_requires_login():
    wizard = ReceiptWizard(REFERENCE)
    assert not wizard.save().ok

    _to_preview(wizard)
    result = wizard.save()
    assert not result.ok
    assert wizard.save_error == "Not authenticated"
    assert wizard.step == Step.PREVIEW
    print("✅ PASS: save requires login")


if __name__ == "__main__":
    test_happy_path_builds_record()
    test_unknown_employee_proceeds_without_name()
    test_gating_blocks_forward_moves()
    test_issuer_change_resets_scheme()
    test_unknown_product_rejected()
    test_back_discards_record_and_keeps_inputs()
    test_save_success_resets_wizard()
    test_save_failure_keeps_preview()
    test_save_requires_login()
    print("\nAll wizard tests passed")
