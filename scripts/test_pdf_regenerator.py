#!/usr/bin/env python3
"""Test script for receipt PDF rendering and debounced regeneration."""
from __future__ import annotations
import sys
import tempfile
import threading
import time
from datetime import date
from io import BytesIO
from pathlib import Path

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from PyPDF2 import PdfReader

from models.receipt import EmployeeSeed, InvestorRecord, InvestorSeed, ReceiptRecord, blank_input
from render import PDF_NOT_AVAILABLE, PdfRegenerator, build_receipt_pdf, pdf_filename
from wizard import assemble, normalize

TODAY = date(2024, 3, 9)


def _record(amount: str = "50000") -> ReceiptRecord:
    raw = blank_input("MF")
    raw.set_issuer("ABC Mutual Fund")
    raw.set_scheme("Growth Fund")
    raw.investmentAmount = amount
    investor = InvestorRecord(investorId="100201", investorName="Anil Kapoor")
    return assemble(
        EmployeeSeed(empCode="ECS497", employeeName="Jane Doe", branch="Mumbai"),
        InvestorSeed(investorId="100201", investorInfo=investor),
        normalize(raw),
        today=TODAY,
    )


class CountingRenderer:
    """Stand-in renderer that records how often it ran."""

    def __init__(self):
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, record: ReceiptRecord) -> bytes:
        with self._lock:
            self.calls += 1
        return f"%PDF-1.4 {record.receiptNo} {record.investmentAmount}".encode("utf-8")


def test_pdf_contains_receipt_details():
    record = _record()
    data = build_receipt_pdf(record)
    assert data.startswith(b"%PDF")

    text = "".join(page.extract_text() or "" for page in PdfReader(BytesIO(data)).pages)
    assert record.receiptNo in text
    assert "Anil Kapoor" in text
    assert "Growth Fund" in text
    assert pdf_filename(record) == f"{record.receiptNo}.pdf"
    print("✅ PASS: PDF contents")


def test_bursts_collapse_into_one_render():
    renderer = CountingRenderer()
    with tempfile.TemporaryDirectory() as tmp:
        regen = PdfRegenerator(render=renderer, delay_ms=200, out_dir=Path(tmp) / "session")
        try:
            for amount in ("1", "12", "123", "1234", "12345"):
                assert regen.request(_record(amount))
            assert regen.status() == "Generating PDF…"
            assert regen.wait_idle(timeout=5)

            assert renderer.calls == 1
            artifact = regen.artifact
            assert artifact.generation == 5
            assert b"12345" in artifact.read_bytes()
            assert regen.status() == "PDF ready"
        finally:
            regen.close()
    print("✅ PASS: debounce")


def test_unchanged_content_is_not_rerendered():
    renderer = CountingRenderer()
    record = _record()
    with tempfile.TemporaryDirectory() as tmp:
        regen = PdfRegenerator(render=renderer, delay_ms=10, out_dir=Path(tmp) / "session")
        try:
            assert regen.request(record)
            assert regen.wait_idle(timeout=5)
            assert not regen.request(record)
            assert regen.wait_idle(timeout=5)
            assert renderer.calls == 1

            regen.regenerate(record)
            assert regen.wait_idle(timeout=5)
            assert renderer.calls == 2
        finally:
            regen.close()
    print("✅ PASS: content-based change detection")


def test_superseded_artifact_is_released():
    renderer = CountingRenderer()
    with tempfile.TemporaryDirectory() as tmp:
        regen = PdfRegenerator(render=renderer, delay_ms=10, out_dir=Path(tmp) / "session")
        regen.request(_record("100"))
        assert regen.wait_idle(timeout=5)
        first = regen.artifact.path
        assert first.exists()

        regen.request(_record("200"))
        assert regen.wait_idle(timeout=5)
        second = regen.artifact.path
        assert second.exists()
        assert not first.exists()

        regen.close()
        assert not second.exists()
        assert not regen.out_dir.exists()
        assert regen.artifact is None
        assert not regen.request(_record("300"))
    print("✅ PASS: artifact release")


def test_render_failure_reports_unavailable():
    def failing(record):
        raise RuntimeError("boom")

    with tempfile.TemporaryDirectory() as tmp:
        regen = PdfRegenerator(render=failing, delay_ms=10, out_dir=Path(tmp) / "session")
        try:
            regen.request(_record())
            assert regen.wait_idle(timeout=5)
            assert regen.artifact is None
            assert regen.status() == PDF_NOT_AVAILABLE
            assert regen.last_error == "boom"
        finally:
            regen.close()
    print("✅ PASS: render failure")



def test_late_stale_render_is_discarded():
    started = threading.Event()
    release = threading.Event()
    seen = []

    def slow_first(record):
        seen.append(record.investmentAmount)
        if len(seen) == 1:
            started.set()
            assert release.wait(timeout=5)
        return f"%PDF {record.investmentAmount}".encode("utf-8")

    with tempfile.TemporaryDirectory() as tmp:
        out_dir = Path(tmp) / "session"
        regen = PdfRegenerator(render=slow_first, delay_ms=10, out_dir=out_dir)
        try:
            assert regen.request(_record("1"))
            assert started.wait(timeout=5)
            assert regen.request(_record("2"))
            # Let generation 2 reach the worker queue before generation 1 finishes
            deadline = time.monotonic() + 5
            while regen._debouncer.pending and time.monotonic() < deadline:
                time.sleep(0.01)
            release.set()
            assert regen.wait_idle(timeout=5)

            artifact = regen.artifact
            assert artifact.generation == 2
            assert artifact.read_bytes() == b"%PDF 2.0"
            assert [p.name for p in out_dir.iterdir()] == [artifact.path.name]
            assert artifact.path.name.endswith("-2.pdf")
        finally:
            release.set()
            regen.close()
    print("✅ PASS: stale render discarded")


def test_failed_render_is_retried_for_same_content():
    calls = []

    def flaky(record):
        calls.append(record.receiptNo)
        if len(calls) == 1:
            raise RuntimeError("transient")
        return b"%PDF ok"

    record = _record()
    with tempfile.TemporaryDirectory() as tmp:
        regen = PdfRegenerator(render=flaky, delay_ms=10, out_dir=Path(tmp) / "session")
        try:
            assert regen.request(record)
            assert regen.wait_idle(timeout=5)
            assert regen.status() == PDF_NOT_AVAILABLE

            assert regen.request(record)
            assert regen.wait_idle(timeout=5)
            assert regen.status() == "PDF ready"
            assert regen.last_error == ""
            assert len(calls) == 2
        finally:
            regen.close()
    print("✅ PASS: retry after failure")


if __name__ == "__main__":
    test_pdf_contains_receipt_details()
    test_bursts_collapse_into_one_render()
    test_unchanged_content_is_not_rerendered()
    test_superseded_artifact_is_released()
    test_render_failure_reports_unavailable()
    test_late_stale_render_is_discarded()
    test_failed_render_is_retried_for_same_content()
    print("\nAll PDF tests passed")
