"""Four-step receipt wizard: Employee -> Investor -> Product -> Preview."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Dict, List, Optional

from catalog.indexes import ReferenceData
from core.logger import get_logger
from gateway.client import ReceiptsApi
from gateway.errors import ApiError
from gateway.session import AuthSession
from models.receipt import (
    PRODUCT_LABELS,
    EmployeeSeed,
    InsuranceInput,
    InvestorRecord,
    InvestorSeed,
    ReceiptRecord,
    blank_input,
)
from wizard.assembler import assemble
from wizard.normalizer import normalize

log = get_logger("wizard/state_machine")

NO_MATCH_NOTICE = "No match."


class Step(IntEnum):
    EMPLOYEE = 1
    INVESTOR = 2
    PRODUCT = 3
    PREVIEW = 4

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def progress(self) -> int:
        return self.value * 25


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    receipt_id: Optional[str] = None
    error: str = ""


class ReceiptWizard:
    """
    Linear wizard state for creating one receipt.

    Forward moves only happen through the ``continue_*`` methods and are
    gated: a blocked call returns ``False`` and changes nothing. The auth
    session and API client are injected so the wizard never reaches for
    global state.
    """

    def __init__(
        self,
        reference: ReferenceData,
        session: Optional[AuthSession] = None,
        api: Optional[ReceiptsApi] = None,
    ):
        self.reference = reference
        self.session = session
        self.api = api or (session.api if session is not None else None)
        self.reset()

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Back to step 1 with every seed, input and the record cleared."""
        self.step = Step.EMPLOYEE
        self.employee_seed = EmployeeSeed()
        self.investor_seed = InvestorSeed()
        self.employee_code = self._session_emp_code()
        self.investor_query = ""
        self.selected_investor: Optional[InvestorRecord] = None
        self.product_category = "MF"
        self.product_inputs: Dict[str, object] = {cat: blank_input(cat) for cat in PRODUCT_LABELS}
        self.final_data: Optional[ReceiptRecord] = None
        self.save_error = ""
        self.is_saving = False

    def abandon(self) -> None:
        log.info(f"Wizard abandoned at step {self.step.label}")
        self.reset()

    def _session_emp_code(self) -> str:
        user = self.session.current_user() if self.session is not None else None
        return user.emp_code if user is not None else ""

    # ------------------------------------------------------------------
    # gating
    # ------------------------------------------------------------------
    def can_continue(self) -> bool:
        if self.step == Step.EMPLOYEE:
            return bool(self.employee_code.strip())
        if self.step == Step.INVESTOR:
            return self.selected_investor is not None
        if self.step == Step.PRODUCT:
            return True
        return False

    # ------------------------------------------------------------------
    # step 1: employee
    # ------------------------------------------------------------------
    def set_employee_code(self, code: str) -> None:
        self.employee_code = str(code or "")

    def employee_match(self, code: Optional[str] = None) -> Optional[EmployeeSeed]:
        """
        Resolve an employee code to a seed.

        The signed-in user's own code resolves from the session profile;
        anything else is looked up in the employee directory.
        """
        code = (self.employee_code if code is None else code).strip()
        if not code:
            return None
        user = self.session.current_user() if self.session is not None else None
        if user is not None and user.emp_code.upper() == code.upper() and (user.name or user.branch):
            return EmployeeSeed(empCode=code, employeeName=user.name, branch=user.branch)
        found = self.reference.employees.lookup(code)
        if found is None:
            return None
        return EmployeeSeed(empCode=code, employeeName=found.employeeName, branch=found.branch)

    def employee_notice(self) -> str:
        """Inline notice for the typed code: empty, or ``No match.`` on a miss."""
        if not self.employee_code.strip():
            return ""
        return "" if self.employee_match() is not None else NO_MATCH_NOTICE

    def continue_from_employee(self, code: Optional[str] = None) -> bool:
        if code is not None:
            self.set_employee_code(code)
        if self.step != Step.EMPLOYEE or not self.can_continue():
            return False

        trimmed = self.employee_code.strip()
        match = self.employee_match(trimmed)
        if match is None:
            # A miss is not an error; the receipt proceeds without name/branch
            log.info(f"Employee code not in directory: {trimmed}")
            match = EmployeeSeed(empCode=trimmed)
        self.employee_seed = match
        self.step = Step.INVESTOR
        return True

    # ------------------------------------------------------------------
    # step 2: investor
    # ------------------------------------------------------------------
    def set_investor_query(self, query: str) -> None:
        """Update the search text; any previous selection is dropped."""
        self.investor_query = str(query or "")
        self.selected_investor = None

    def investor_results(self) -> List[InvestorRecord]:
        return self.reference.investors.search(self.investor_query)

    def select_investor(self, investor: Optional[InvestorRecord]) -> None:
        self.selected_investor = investor

    def continue_from_investor(self) -> bool:
        if self.step != Step.INVESTOR or not self.can_continue():
            return False
        chosen = self.selected_investor
        self.investor_seed = InvestorSeed(investorId=chosen.investorId, investorInfo=chosen)
        self.step = Step.PRODUCT
        return True

    # ------------------------------------------------------------------
    # step 3: product
    # ------------------------------------------------------------------
    def select_product(self, category: str) -> None:
        if category not in self.product_inputs:
            raise ValueError(f"Unknown product category: {category!r}")
        self.product_category = category

    @property
    def current_input(self):
        return self.product_inputs[self.product_category]

    def issuer_options(self) -> List[str]:
        if self.product_category == "INS":
            return self.reference.insurance_catalog.issuers()
        return self.reference.scheme_catalog(self.product_category).issuers()

    def scheme_options(self) -> List[str]:
        """Schemes (or, for insurance, products) for the currently selected parent."""
        raw = self.current_input
        if isinstance(raw, InsuranceInput):
            return self.reference.insurance_catalog.products(raw.issuer, raw.insCategory)
        return self.reference.scheme_catalog(self.product_category).schemes(raw.issuer)

    def category_options(self) -> List[str]:
        raw = self.current_input
        if not isinstance(raw, InsuranceInput):
            return []
        return self.reference.insurance_catalog.categories(raw.issuer)

    def set_issuer(self, issuer: str) -> None:
        """Change issuer; dependent scheme/category/product selections are cleared."""
        self.current_input.set_issuer(issuer)

    def set_scheme(self, scheme: str) -> None:
        raw = self.current_input
        if isinstance(raw, InsuranceInput):
            raw.set_product(scheme)
        else:
            raw.set_scheme(scheme)

    def set_insurance_category(self, name: str) -> None:
        raw = self.current_input
        if not isinstance(raw, InsuranceInput):
            raise ValueError("Categories only apply to insurance products")
        raw.set_category(name)

    def continue_from_product(self, today: Optional[date] = None) -> bool:
        if self.step != Step.PRODUCT:
            return False
        fields = normalize(self.current_input)
        self.final_data = assemble(self.employee_seed, self.investor_seed, fields, today=today)
        self.save_error = ""
        self.step = Step.PREVIEW
        return True

    # ------------------------------------------------------------------
    # navigation back
    # ------------------------------------------------------------------
    def back(self) -> bool:
        if self.step == Step.EMPLOYEE or self.is_saving:
            return False
        if self.step == Step.PREVIEW:
            # The assembled record is discarded; product inputs stay for editing
            self.final_data = None
            self.save_error = ""
        self.step = Step(self.step - 1)
        return True

    # ------------------------------------------------------------------
    # step 4: save
    # ------------------------------------------------------------------
    def save(self) -> SaveResult:
        """
        Submit the assembled record.

        Success resets the wizard. Failure keeps step 4 and the record and
        stores the message in ``save_error`` so the user can retry.
        """
        if self.step != Step.PREVIEW or self.final_data is None:
            return SaveResult(ok=False, error="Nothing to save")

        token = self.session.token if self.session is not None else ""
        if not token or self.api is None:
            self.save_error = "Not authenticated"
            return SaveResult(ok=False, error=self.save_error)

        self.is_saving = True
        self.save_error = ""
        record = self.final_data
        try:
            result = self.api.create_receipt(token, record.to_payload())
        except ApiError as e:
            self.save_error = e.message or "Failed to save receipt"
            log.warning(f"Saving receipt {record.receiptNo} failed: {self.save_error}")
            return SaveResult(ok=False, error=self.save_error)
        finally:
            self.is_saving = False

        receipt_id = None
        if isinstance(result, dict):
            receipt_id = result.get("id") or result.get("receiptNo")
        receipt_id = str(receipt_id or record.receiptNo)
        log.info(f"Receipt {record.receiptNo} saved: id={receipt_id}")
        self.reset()
        return SaveResult(ok=True, receipt_id=receipt_id)
