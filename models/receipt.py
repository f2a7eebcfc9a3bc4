"""Receipt wizard models: seeds, tagged product inputs and the persisted record."""
from __future__ import annotations
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


ProductCategory = Literal["MF", "FD", "INS", "BOND", "NCD", "IPO"]

PRODUCT_LABELS: dict[str, str] = {
    "MF": "Mutual Fund",
    "FD": "Fixed Deposit",
    "INS": "Insurance",
    "BOND": "Bonds",
    "NCD": "NCD",
    "IPO": "IPO",
}

MF_SCHEME_OPTIONS = ("Growth", "IDCW", "ELSS")
MF_TXN_MODES = ("Lump Sum", "SIP", "STP", "SWP", "Switch Scheme")
MF_PERIODIC_MODES = ("SIP", "STP", "SWP")
MF_TXN_KINDS = ("Fresh", "Addl. Purchase")
FD_CLIENT_TYPES = ("Individual", "Sr. Citizen")
FD_INTEREST_PAYABLE = ("Non-Cum", "Cum (Comp)")
FD_INTEREST_FREQUENCIES = ("M", "Q", "H", "Y")


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


class EmployeeSeed(BaseModel):
    empCode: str = ""
    employeeName: str = ""
    branch: str = ""

    model_config = ConfigDict(frozen=True)


class InvestorRecord(BaseModel):
    investorId: str = ""
    investorName: str = ""
    investorAddress: str = ""
    pinCode: str = ""
    pan: str = ""
    email: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        # Reference data stores ids and PIN codes as numbers
        return "" if value is None else str(value)


class InvestorSeed(BaseModel):
    investorId: str = ""
    investorInfo: Optional[InvestorRecord] = None

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Step 3 raw input, one model per product category
# ---------------------------------------------------------------------------

class _ProductInput(BaseModel):
    """Common cascade for products picked as issuer -> scheme."""

    issuer: str = ""
    scheme: str = ""

    model_config = ConfigDict(extra="forbid")

    def set_issuer(self, issuer: str) -> None:
        """Select an issuer; any previously chosen scheme is cleared."""
        self.issuer = _text(issuer)
        self.scheme = ""

    def set_scheme(self, scheme: str) -> None:
        self.scheme = _text(scheme)


class MutualFundInput(_ProductInput):
    category: Literal["MF"] = "MF"
    schemeOption: str = ""
    investmentAmount: str = ""
    folioPolicyNo: str = ""
    txnMode: str = "Lump Sum"
    txnKind: str = "Fresh"
    periodicDetail: str = ""
    txnRef: str = ""
    chequeNo: str = ""

    @model_validator(mode="after")
    def _single_instrument(self) -> "MutualFundInput":
        # Online reference and cheque are mutually exclusive; the reference wins
        if self.txnRef and self.chequeNo:
            self.chequeNo = ""
        return self

    def set_txn_ref(self, ref: str) -> None:
        """Record an online transaction reference, dropping any cheque number."""
        self.txnRef = _text(ref)
        self.chequeNo = ""

    def set_cheque_no(self, cheque_no: str) -> None:
        """Record a cheque number, dropping any online reference."""
        self.chequeNo = _text(cheque_no)
        self.txnRef = ""

    @property
    def is_periodic(self) -> bool:
        return self.txnMode in MF_PERIODIC_MODES


class FixedDepositInput(_ProductInput):
    category: Literal["FD"] = "FD"
    investmentAmount: str = ""
    applicationNo: str = ""
    clientType: str = "Individual"
    depositPeriodYM: str = ""
    roi: str = ""
    interestPayable: str = "Non-Cum"
    interestFrequency: str = "M"
    renewalFdrNo: str = ""
    maturityDueDate: str = ""
    maturityAmount: str = ""
    txnType: str = "Fresh"
    mode: str = "Lump Sum"

    @property
    def pays_out(self) -> bool:
        return self.interestPayable == "Non-Cum"


class InsuranceInput(BaseModel):
    """Insurance is a three-level cascade: insurer -> category -> product."""

    category: Literal["INS"] = "INS"
    issuer: str = ""
    insCategory: str = ""
    product: str = ""
    premiumAmount: str = ""
    policyNo: str = ""
    dateOfIssue: str = ""
    renewalDate: str = ""
    sumAssured: str = ""
    premiumTerm: str = ""
    renewalAmount: str = ""
    renewalDueDate: str = ""

    model_config = ConfigDict(extra="forbid")

    def set_issuer(self, issuer: str) -> None:
        self.issuer = _text(issuer)
        self.insCategory = ""
        self.product = ""

    def set_category(self, name: str) -> None:
        self.insCategory = _text(name)
        self.product = ""

    def set_product(self, product: str) -> None:
        self.product = _text(product)


class MarketIssueInput(_ProductInput):
    """Bonds, NCDs and IPO applications share one shape."""

    category: Literal["BOND", "NCD", "IPO"] = "BOND"
    investmentAmount: str = ""
    applicationNo: str = ""


ProductInput = Annotated[
    Union[MutualFundInput, FixedDepositInput, InsuranceInput, MarketIssueInput],
    Field(discriminator="category"),
]


def blank_input(category: str) -> Union[MutualFundInput, FixedDepositInput, InsuranceInput, MarketIssueInput]:
    """Fresh, empty form state for a product category."""
    if category == "MF":
        return MutualFundInput()
    if category == "FD":
        return FixedDepositInput()
    if category == "INS":
        return InsuranceInput()
    if category in ("BOND", "NCD", "IPO"):
        return MarketIssueInput(category=category)
    raise ValueError(f"Unknown product category: {category!r}")


# ---------------------------------------------------------------------------
# Normalized output and the persisted record
# ---------------------------------------------------------------------------

class ProductFields(BaseModel):
    """Flat product fields. Only the fields a category sets are considered set."""

    product_category: Optional[str] = None
    issuerCompany: Optional[str] = None
    issuerCategory: Optional[str] = None
    schemeName: Optional[str] = None
    schemeOption: Optional[str] = None
    investmentAmount: Optional[float] = None
    folioPolicyNo: Optional[str] = None
    mode: Optional[str] = None
    sip_stp_swp_period: Optional[str] = None
    txnType: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    unitsOrAmount: Optional[str] = None
    clientType: Optional[str] = None
    depositPeriodYM: Optional[str] = None
    roi: Optional[str] = None
    interestPayable: Optional[str] = None
    interestFrequency: Optional[str] = None
    instrumentType: Optional[str] = None
    instrumentNo: Optional[str] = None
    fdr_demat_policy: Optional[str] = None
    renewalDueDate: Optional[str] = None
    maturityAmount: Optional[str] = None
    renewalAmount: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def as_updates(self) -> dict:
        """Wire-named mapping of the fields the normalizer actually set."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class ReceiptRecord(BaseModel):
    """The flattened receipt handed to the backend. Immutable once assembled."""

    receiptNo: str
    date: str
    branch: str = ""
    employeeName: str = ""
    empCode: str = ""
    investorId: str = ""
    investorName: str = ""
    investorAddress: str = ""
    pinCode: str = ""
    pan: str = ""
    email: str = ""

    product_category: str = ""
    issuerCompany: str = ""
    issuerCategory: str = ""
    schemeName: str = ""
    schemeOption: str = ""
    investmentAmount: Union[float, str] = ""
    folioPolicyNo: str = ""
    mode: str = "Lump Sum"
    sip_stp_swp_period: str = ""
    noOfInstallments: str = ""
    txnType: str = "Fresh"
    from_: str = Field(default="", alias="from")
    to: str = ""
    unitsOrAmount: str = ""
    fdType: str = ""
    clientType: str = ""
    depositPeriodYM: str = ""
    roi: str = ""
    interestPayable: str = ""
    interestFrequency: str = ""
    instrumentType: str = ""
    instrumentNo: str = ""
    instrumentDate: str = ""
    bankName: str = ""
    bankBranch: str = ""
    fdr_demat_policy: str = ""
    renewalDueDate: str = ""
    maturityAmount: str = ""
    renewalAmount: str = ""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_payload(self) -> dict:
        """JSON body for ``POST /receipts``."""
        return self.model_dump(mode="json", by_alias=True)
