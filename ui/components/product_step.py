"""Step 3: product selection and product-specific fields."""
from __future__ import annotations
from datetime import date
from typing import List, Optional, Sequence
import streamlit as st

from models.receipt import (
    FD_CLIENT_TYPES,
    FD_INTEREST_FREQUENCIES,
    FD_INTEREST_PAYABLE,
    MF_SCHEME_OPTIONS,
    MF_TXN_KINDS,
    MF_TXN_MODES,
    PRODUCT_LABELS,
    FixedDepositInput,
    InsuranceInput,
    MarketIssueInput,
    MutualFundInput,
)
from wizard import ReceiptWizard


def _pick(label: str, options: Sequence[str], current: str, key: str, disabled: bool = False, placeholder: str = "Select") -> str:
    choices: List[str] = [""] + list(options)
    index = choices.index(current) if current in choices else 0
    value = st.selectbox(
        label,
        choices,
        index=index,
        key=key,
        disabled=disabled,
        format_func=lambda v: v or placeholder,
    )
    return value or ""


def _text(raw, field: str, label: str, key_prefix: str, **kwargs) -> None:
    value = st.text_input(label, value=getattr(raw, field), key=f"{key_prefix}_{field}", **kwargs)
    setattr(raw, field, value.strip())


def _date(raw, field: str, label: str, key_prefix: str) -> None:
    current = getattr(raw, field)
    try:
        initial = date.fromisoformat(current) if current else None
    except ValueError:
        initial = None
    value = st.date_input(label, value=initial, key=f"{key_prefix}_{field}", format="DD/MM/YYYY")
    setattr(raw, field, value.isoformat() if value else "")


def _issuer_scheme(wizard: ReceiptWizard, raw, prefix: str, issuer_label: str, scheme_label: str) -> None:
    issuer = _pick(issuer_label, wizard.issuer_options(), raw.issuer, key=f"{prefix}_issuer", placeholder="Select issuer")
    if issuer != raw.issuer:
        wizard.set_issuer(issuer)
    # Keyed by issuer so a new issuer always starts from an empty scheme
    scheme = _pick(
        scheme_label,
        wizard.scheme_options(),
        raw.scheme,
        key=f"{prefix}_scheme_{raw.issuer}",
        disabled=not raw.issuer,
        placeholder="Select scheme",
    )
    if scheme != raw.scheme:
        wizard.set_scheme(scheme)


def _mf_fields(wizard: ReceiptWizard, raw: MutualFundInput) -> None:
    p = "mf"
    col1, col2 = st.columns(2)
    with col1:
        _issuer_scheme(wizard, raw, p, "Issuer Company (AMC)", "Issuer Scheme")
    with col2:
        raw.schemeOption = _pick("Scheme Option", MF_SCHEME_OPTIONS, raw.schemeOption, key=f"{p}_option")
        _text(raw, "investmentAmount", "Investment Amount", p)
    col1, col2 = st.columns(2)
    with col1:
        _text(raw, "folioPolicyNo", "Folio Number (for Addl.)", p)
        raw.txnMode = st.selectbox("Transaction Mode", MF_TXN_MODES, index=MF_TXN_MODES.index(raw.txnMode) if raw.txnMode in MF_TXN_MODES else 0, key=f"{p}_mode")
    with col2:
        raw.txnKind = st.selectbox("Fresh / Additional Purchase", MF_TXN_KINDS, index=MF_TXN_KINDS.index(raw.txnKind) if raw.txnKind in MF_TXN_KINDS else 0, key=f"{p}_kind")
        if raw.is_periodic:
            _text(raw, "periodicDetail", "Periodic Payment Detail", p, placeholder="e.g., 12 months / frequency")

    kind = st.radio("Payment Instrument", ["Online Ref", "Cheque"], index=1 if raw.chequeNo else 0, horizontal=True, key=f"{p}_instrument_kind")
    if kind == "Online Ref":
        ref = st.text_input("Transaction Ref No (Online)", value=raw.txnRef, key=f"{p}_txn_ref")
        if ref.strip() != raw.txnRef or raw.chequeNo:
            raw.set_txn_ref(ref)
    else:
        cheque = st.text_input("Cheque No", value=raw.chequeNo, key=f"{p}_cheque_no")
        if cheque.strip() != raw.chequeNo or raw.txnRef:
            raw.set_cheque_no(cheque)


def _fd_fields(wizard: ReceiptWizard, raw: FixedDepositInput) -> None:
    p = "fd"
    col1, col2 = st.columns(2)
    with col1:
        _issuer_scheme(wizard, raw, p, "Issuer Company", "Issuer Scheme")
        _text(raw, "investmentAmount", "Investment Amount", p)
        _text(raw, "applicationNo", "Application Number", p)
        raw.clientType = st.selectbox("Client Category", FD_CLIENT_TYPES, index=FD_CLIENT_TYPES.index(raw.clientType) if raw.clientType in FD_CLIENT_TYPES else 0, key=f"{p}_client")
        _text(raw, "depositPeriodYM", "Period of Deposit (Y/M)", p)
    with col2:
        _text(raw, "roi", "Interest Rate (%)", p, placeholder="e.g., 8.25")
        raw.interestPayable = st.selectbox("Interest Payable Type", FD_INTEREST_PAYABLE, index=FD_INTEREST_PAYABLE.index(raw.interestPayable) if raw.interestPayable in FD_INTEREST_PAYABLE else 0, key=f"{p}_payable")
        if raw.pays_out:
            raw.interestFrequency = st.selectbox("Payout Frequency", FD_INTEREST_FREQUENCIES, index=FD_INTEREST_FREQUENCIES.index(raw.interestFrequency) if raw.interestFrequency in FD_INTEREST_FREQUENCIES else 0, key=f"{p}_freq")
        _text(raw, "renewalFdrNo", "Renewal FDR No", p)
        _date(raw, "maturityDueDate", "Maturity Due Date", p)
        _text(raw, "maturityAmount", "Maturity Amount", p)


def _ins_fields(wizard: ReceiptWizard, raw: InsuranceInput) -> None:
    p = "ins"
    col1, col2 = st.columns(2)
    with col1:
        issuer = _pick("Issuer Company", wizard.issuer_options(), raw.issuer, key=f"{p}_issuer", placeholder="Select insurer")
        if issuer != raw.issuer:
            wizard.set_issuer(issuer)
        category = _pick("Sub-section / Category", wizard.category_options(), raw.insCategory, key=f"{p}_category_{raw.issuer}", disabled=not raw.issuer, placeholder="Select category")
        if category != raw.insCategory:
            wizard.set_insurance_category(category)
        product = _pick("Product", wizard.scheme_options(), raw.product, key=f"{p}_product_{raw.issuer}_{raw.insCategory}", disabled=not raw.insCategory, placeholder="Select product")
        if product != raw.product:
            wizard.set_scheme(product)
        _text(raw, "premiumAmount", "Premium Amount", p)
        _text(raw, "policyNo", "Policy No", p)
    with col2:
        _date(raw, "dateOfIssue", "Date of Issue", p)
        _date(raw, "renewalDate", "Renewal Date", p)
        _text(raw, "sumAssured", "Sum Assured", p)
        _text(raw, "premiumTerm", "Premium Paying Term", p)
        _text(raw, "renewalAmount", "Renewal Amount", p)
        _date(raw, "renewalDueDate", "Renewal Due Date", p)


def _market_issue_fields(wizard: ReceiptWizard, raw: MarketIssueInput) -> None:
    p = raw.category.lower()
    col1, col2 = st.columns(2)
    with col1:
        _issuer_scheme(wizard, raw, p, "Issuer Company", "Issuer Scheme")
    with col2:
        _text(raw, "investmentAmount", "Investment Amount", p)
        _text(raw, "applicationNo", "Application Number", p)


def render_product_step(wizard: ReceiptWizard) -> Optional[str]:
    """
    Product tiles plus the selected product's form.

    Returns:
        "back", "continue" or None
    """
    st.subheader("💼 Product")
    categories = list(PRODUCT_LABELS)
    category = st.radio(
        "Product",
        categories,
        index=categories.index(wizard.product_category),
        format_func=lambda c: PRODUCT_LABELS[c],
        horizontal=True,
        key="wizard_product_category",
        label_visibility="collapsed",
    )
    if category != wizard.product_category:
        wizard.select_product(category)

    raw = wizard.current_input
    if isinstance(raw, MutualFundInput):
        _mf_fields(wizard, raw)
    elif isinstance(raw, FixedDepositInput):
        _fd_fields(wizard, raw)
    elif isinstance(raw, InsuranceInput):
        _ins_fields(wizard, raw)
    else:
        _market_issue_fields(wizard, raw)

    col1, col2 = st.columns(2)
    if col1.button("⬅ Back", key="product_back"):
        return "back"
    if col2.button("Continue ➜", type="primary", key="product_continue"):
        return "continue"
    return None
