"""Map step-3 product input onto the flat receipt schema."""
from __future__ import annotations
from typing import Callable, Dict, Type

from core.logger import get_logger
from core.utils import to_num
from models.receipt import (
    PRODUCT_LABELS,
    FixedDepositInput,
    InsuranceInput,
    MarketIssueInput,
    MutualFundInput,
    ProductFields,
)

log = get_logger("wizard/normalizer")


def _normalize_mf(raw: MutualFundInput) -> ProductFields:
    if raw.txnRef:
        instrument_type = "Online Ref"
    elif raw.chequeNo:
        instrument_type = "Cheque"
    else:
        instrument_type = ""

    return ProductFields(
        product_category="MF",
        issuerCompany=raw.issuer,
        issuerCategory=PRODUCT_LABELS["MF"],
        schemeName=raw.scheme,
        schemeOption=raw.schemeOption,
        investmentAmount=to_num(raw.investmentAmount),
        folioPolicyNo=raw.folioPolicyNo,
        mode=raw.txnMode,
        sip_stp_swp_period=raw.periodicDetail if raw.is_periodic else "",
        txnType="Addl. Purchase" if raw.txnKind == "Addl. Purchase" else "Fresh",
        instrumentType=instrument_type,
        instrumentNo=raw.txnRef or raw.chequeNo or "",
    )


def _normalize_fd(raw: FixedDepositInput) -> ProductFields:
    return ProductFields(
        product_category="FD",
        issuerCompany=raw.issuer,
        issuerCategory=PRODUCT_LABELS["FD"],
        schemeName=raw.scheme,
        investmentAmount=to_num(raw.investmentAmount),
        folioPolicyNo=raw.applicationNo,
        clientType=raw.clientType,
        depositPeriodYM=raw.depositPeriodYM,
        roi=raw.roi,
        interestPayable=raw.interestPayable,
        interestFrequency=raw.interestFrequency if raw.pays_out else "",
        fdr_demat_policy=raw.renewalFdrNo,
        renewalDueDate=raw.maturityDueDate,
        maturityAmount=raw.maturityAmount,
        txnType=raw.txnType or "Fresh",
        mode=raw.mode or "Lump Sum",
    )


def _normalize_ins(raw: InsuranceInput) -> ProductFields:
    return ProductFields(
        product_category="INS",
        issuerCompany=raw.issuer,
        issuerCategory=raw.insCategory,
        schemeName=raw.product,
        investmentAmount=to_num(raw.premiumAmount),
        folioPolicyNo=raw.policyNo,
        from_=raw.dateOfIssue,
        to=raw.renewalDate,
        unitsOrAmount=raw.sumAssured,
        depositPeriodYM=raw.premiumTerm,
        renewalAmount=raw.renewalAmount,
        renewalDueDate=raw.renewalDueDate,
        txnType="Fresh",
        mode="Lump Sum",
    )


def _normalize_market_issue(raw: MarketIssueInput) -> ProductFields:
    return ProductFields(
        product_category=raw.category,
        issuerCompany=raw.issuer,
        issuerCategory=PRODUCT_LABELS[raw.category],
        schemeName=raw.scheme,
        investmentAmount=to_num(raw.investmentAmount),
        folioPolicyNo=raw.applicationNo,
        txnType="Fresh",
        mode="Lump Sum",
    )


_NORMALIZERS: Dict[Type, Callable[..., ProductFields]] = {
    MutualFundInput: _normalize_mf,
    FixedDepositInput: _normalize_fd,
    InsuranceInput: _normalize_ins,
    MarketIssueInput: _normalize_market_issue,
}


def normalize(product_input) -> ProductFields:
    """
    Normalize raw product form state into flat receipt fields.

    Amounts typed as text are coerced (blank or garbage becomes 0). No
    cross-field validation is done here: issuer/scheme consistency is kept
    by the input models' cascade setters.

    Args:
        product_input: One of the ``ProductInput`` union members

    Returns:
        ProductFields with only the category's fields set

    Raises:
        TypeError: If the input is not a known product input type
    """
    handler = _NORMALIZERS.get(type(product_input))
    if handler is None:
        raise TypeError(f"No normalizer for product input {type(product_input).__name__}")

    fields = handler(product_input)
    log.debug(
        f"Normalized {fields.product_category} input: issuer={fields.issuerCompany!r} "
        f"scheme={fields.schemeName!r} amount={fields.investmentAmount}"
    )
    return fields
