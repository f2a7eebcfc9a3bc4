#!/usr/bin/env python3
"""Test script for the employee and investor directories and issuer catalogs."""
from __future__ import annotations
import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from catalog import (
    EmployeeDirectory,
    InsuranceCatalog,
    InvestorDirectory,
    IssuerSchemeCatalog,
    ReferenceData,
    load_dataset,
)

REFERENCE_DIR = ROOT_DIR / "catalog" / "data"


def _investor_rows(n: int):
    return [
        {
            "investorId": 500000 + i,
            "investorName": f"Investor {i}",
            "investorAddress": f"{i} Main Road",
            "pinCode": 400001,
            "pan": f"PAN{i:05d}X",
            "email": f"inv{i}@example.com",
        }
        for i in range(n)
    ]


def test_employee_lookup_is_trimmed_and_case_insensitive():
    directory = EmployeeDirectory([{"Code": "ECS497", "Name": "Jane Doe", "Branch": "Mumbai"}])
    for code in ("ECS497", "ecs497", "  Ecs497 "):
        found = directory.lookup(code)
        assert found is not None, code
        assert found.employeeName == "Jane Doe"
        assert found.branch == "Mumbai"
    assert directory.lookup("ECS498") is None
    assert directory.lookup("   ") is None
    print("✅ PASS: employee lookup")


def test_investor_search_caps_results():
    directory = InvestorDirectory(_investor_rows(120), search_limit=50, preview_limit=25)
    assert len(directory.search("")) == 25
    assert len(directory.search("   ")) == 25
    assert len(directory.search("investor")) == 50
    print("✅ PASS: investor search limits")


def test_investor_search_fields():
    directory = InvestorDirectory(_investor_rows(30), search_limit=50, preview_limit=25)
    assert [r.investorName for r in directory.search("INV7@EXAMPLE")] == ["Investor 7"]
    assert [r.investorId for r in directory.search("500012")] == ["500012"]
    assert [r.investorName for r in directory.search("pan00003")] == ["Investor 3"]
    assert directory.search("no such person") == []
    # Numeric ids and pins are normalized to text
    assert directory.get("500001").pinCode == "400001"
    print("✅ PASS: investor search fields")


def test_issuer_catalogs():
    mf = IssuerSchemeCatalog([{"company": "ABC Mutual Fund", "schemes": ["Growth Fund", "Liquid Fund"]}])
    assert mf.issuers() == ["ABC Mutual Fund"]
    assert mf.schemes("ABC Mutual Fund") == ["Growth Fund", "Liquid Fund"]
    assert mf.schemes("Unknown") == []
    assert mf.has_pair("ABC Mutual Fund", "Growth Fund")
    assert not mf.has_pair("ABC Mutual Fund", "Flexi Cap Fund")

    ins = InsuranceCatalog([
        {"company": "LIC of India", "subsections": [{"name": "Term", "products": ["Tech Term"]}]},
    ])
    assert ins.categories("LIC of India") == ["Term"]
    assert ins.products("LIC of India", "Term") == ["Tech Term"]
    assert ins.products("LIC of India", "Endowment") == []
    print("✅ PASS: issuer catalogs")


def test_missing_or_bad_dataset_is_empty():
    with tempfile.TemporaryDirectory() as tmp:
        tmp_dir = Path(tmp)
        (tmp_dir / "broken.json").write_text("{not json", encoding="utf-8")
        (tmp_dir / "object.json").write_text(json.dumps({"Code": "X"}), encoding="utf-8")
        assert load_dataset("missing.json", tmp_dir) == []
        assert load_dataset("broken.json", tmp_dir) == []
        assert load_dataset("object.json", tmp_dir) == []

        ref = ReferenceData.from_dir(tmp_dir)
        assert len(ref.employees) == 0
        assert ref.investors.search("") == []
    print("✅ PASS: missing datasets")


def test_bundled_reference_data():
    ref = ReferenceData.from_dir(REFERENCE_DIR)
    assert ref.employees.lookup("ecs497").employeeName == "Jane Doe"
    assert "ABC Mutual Fund" in ref.scheme_catalog("MF").issuers()
    assert ref.scheme_catalog("FD") is ref.non_mf_catalog
    assert ref.insurance_catalog.issuers()
    print("✅ PASS: bundled reference data")


if __name__ == "__main__":
    test_employee_lookup_is_trimmed_and_case_insensitive()
    test_investor_search_caps_results()
    test_investor_search_fields()
    test_issuer_catalogs()
    test_missing_or_bad_dataset_is_empty()
    test_bundled_reference_data()
    print("\nAll directory tests passed")
