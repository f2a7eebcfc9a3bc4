"""Build the final receipt record from the wizard's seeds."""
from __future__ import annotations
from datetime import date
from typing import Optional

from core.logger import get_logger
from core.utils import generate_receipt_no
from models.receipt import EmployeeSeed, InvestorSeed, ProductFields, ReceiptRecord

log = get_logger("wizard/assembler")


def assemble(
    employee: EmployeeSeed,
    investor: InvestorSeed,
    fields: ProductFields,
    today: Optional[date] = None,
) -> ReceiptRecord:
    """
    Merge employee, investor and product fields into one ``ReceiptRecord``.

    A new receipt number and the current date are generated on every call.
    Investor display fields come from ``investor.investorInfo`` when present;
    otherwise only the chosen id is kept. Product fields the category did not
    set keep the template defaults.
    """
    today = today or date.today()
    base = {
        "receiptNo": generate_receipt_no(today),
        "date": today.isoformat(),
        "branch": employee.branch,
        "employeeName": employee.employeeName,
        "empCode": employee.empCode,
        "investorId": investor.investorId,
    }

    info = investor.investorInfo
    if info is not None:
        base.update(
            investorName=info.investorName,
            investorAddress=info.investorAddress,
            pinCode=info.pinCode,
            pan=info.pan,
            email=info.email,
        )

    base.update(fields.as_updates())
    record = ReceiptRecord.model_validate(base)
    log.info(
        f"Assembled receipt {record.receiptNo}: category={record.product_category} "
        f"emp={record.empCode} investor={record.investorId}"
    )
    return record
