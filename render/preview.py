"""Group a receipt record into labelled sections for display."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from core.utils import PLACEHOLDER, format_display_date, format_inr
from models.receipt import PRODUCT_LABELS, ReceiptRecord


@dataclass(frozen=True)
class PreviewRow:
    label: str
    value: str
    fields: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return self.value == PLACEHOLDER


@dataclass(frozen=True)
class PreviewSection:
    title: str
    rows: Tuple[PreviewRow, ...]


def _plain(value) -> str:
    return "" if value is None else str(value).strip()


def _amount(value, symbol: str) -> str:
    return format_inr(value, symbol=symbol)


def _category(value: str) -> str:
    return PRODUCT_LABELS.get(value, value) if value else ""


# (section title, [(label, record fields, formatter kind)])
_LAYOUT: List[Tuple[str, List[Tuple[str, Tuple[str, ...], str]]]] = [
    ("Receipt", [
        ("Receipt No", ("receiptNo",), "text"),
        ("Date", ("date",), "date"),
        ("Branch", ("branch",), "text"),
    ]),
    ("Employee", [
        ("Name", ("employeeName",), "text"),
        ("Code", ("empCode",), "text"),
    ]),
    ("Investor", [
        ("Investor ID", ("investorId",), "text"),
        ("Name", ("investorName",), "text"),
        ("Address", ("investorAddress",), "text"),
        ("PIN", ("pinCode",), "text"),
        ("PAN", ("pan",), "text"),
        ("Email", ("email",), "text"),
    ]),
    ("Investment Details", [
        ("Product Category", ("product_category",), "category"),
        ("Transaction", ("txnType",), "text"),
        ("Mode", ("mode",), "text"),
        ("Period / Installments", ("sip_stp_swp_period", "noOfInstallments"), "period"),
        ("From", ("from",), "date"),
        ("To", ("to",), "date"),
        ("Units / Amount", ("unitsOrAmount",), "text"),
        ("Investment Amount", ("investmentAmount",), "amount"),
    ]),
    ("Scheme / Issuer", [
        ("Issuer", ("issuerCompany",), "text"),
        ("Issuer Category", ("issuerCategory",), "text"),
        ("Scheme / Product", ("schemeName",), "text"),
        ("Option", ("schemeOption",), "text"),
        ("Appln / Folio / Policy No", ("folioPolicyNo",), "text"),
    ]),
    ("FD / Bonds / NCD", [
        ("Type", ("fdType",), "text"),
        ("Client Type", ("clientType",), "text"),
        ("Deposit Period (Y/M)", ("depositPeriodYM",), "text"),
        ("ROI (%)", ("roi",), "text"),
        ("Interest Payable", ("interestPayable",), "text"),
        ("Frequency", ("interestFrequency",), "text"),
    ]),
    ("Payment Instrument", [
        ("Type", ("instrumentType",), "text"),
        ("Number", ("instrumentNo",), "text"),
        ("Date", ("instrumentDate",), "date"),
        ("Bank", ("bankName",), "text"),
        ("Bank Branch", ("bankBranch",), "text"),
    ]),
    ("Account / Maturity", [
        ("FDR / Demat / Policy", ("fdr_demat_policy",), "text"),
        ("Renewal/Maturity Due", ("renewalDueDate",), "date"),
        ("Maturity Amount", ("maturityAmount",), "amount"),
        ("Renewal Amount", ("renewalAmount",), "amount"),
    ]),
]


def _format(kind: str, values: List, symbol: str) -> str:
    if kind == "date":
        return format_display_date(_plain(values[0]))
    if kind == "amount":
        return _amount(values[0], symbol)
    if kind == "category":
        return _category(_plain(values[0]))
    if kind == "period":
        period, installments = (_plain(v) for v in values)
        return " ".join(p for p in (period, f"({installments})" if installments else "") if p)
    return _plain(values[0])


def build_preview(
    record: ReceiptRecord,
    currency_symbol: str = "₹",
    formatter: Optional[Callable[[str, List, str], str]] = None,
) -> List[PreviewSection]:
    """
    Lay a receipt out in print order.

    Every record field is placed in exactly one row. Rows whose fields are
    all blank show the placeholder ``—`` instead of disappearing.

    Args:
        record: Assembled receipt
        currency_symbol: Prefix for amounts (the PDF uses ``Rs.``)
        formatter: Optional override of the value formatter
    """
    fmt = formatter or _format
    data = record.model_dump(by_alias=True)
    sections: List[PreviewSection] = []
    for title, rows in _LAYOUT:
        built = []
        for label, fields, kind in rows:
            value = fmt(kind, [data.get(f, "") for f in fields], currency_symbol)
            built.append(PreviewRow(label=label, value=value or PLACEHOLDER, fields=fields))
        sections.append(PreviewSection(title=title, rows=tuple(built)))
    return sections


def laid_out_fields() -> List[str]:
    """Every record field name the layout displays, in print order."""
    return [f for _, rows in _LAYOUT for _, fields, _ in rows for f in fields]
