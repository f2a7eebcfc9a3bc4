"""Lookup structures over the reference datasets."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from core.config import config
from core.logger import get_logger
from models.receipt import EmployeeSeed, InvestorRecord

log = get_logger("catalog/indexes")


def _code_key(code: object) -> str:
    return str(code or "").strip().upper()


class EmployeeDirectory:
    """Employee codes indexed by trimmed, upper-cased code."""

    def __init__(self, rows: Iterable[Mapping]):
        self._index: Dict[str, EmployeeSeed] = {}
        for row in rows:
            key = _code_key(row.get("Code"))
            if not key:
                continue
            self._index[key] = EmployeeSeed(
                empCode=str(row.get("Code", "")).strip(),
                employeeName=str(row.get("Name") or ""),
                branch=str(row.get("Branch") or ""),
            )

    def __len__(self) -> int:
        return len(self._index)

    def lookup(self, code: str) -> Optional[EmployeeSeed]:
        """Exact, case-insensitive match on the trimmed code; ``None`` when unknown."""
        key = _code_key(code)
        if not key:
            return None
        return self._index.get(key)


class InvestorDirectory:
    """Free-text search over the investor directory."""

    def __init__(
        self,
        rows: Iterable[Mapping],
        search_limit: Optional[int] = None,
        preview_limit: Optional[int] = None,
    ):
        self._records: List[InvestorRecord] = []
        for row in rows:
            try:
                self._records.append(InvestorRecord.model_validate(dict(row)))
            except ValidationError as e:
                log.warning(f"Skipping malformed investor row: {e.errors()[:1]}")
        self.search_limit = search_limit or config.investor_search_limit
        self.preview_limit = preview_limit or config.investor_preview_limit

    def __len__(self) -> int:
        return len(self._records)

    def search(self, query: str) -> List[InvestorRecord]:
        """
        Case-insensitive substring match across id, name, address, PAN and email.

        An empty query returns the first ``preview_limit`` investors; otherwise
        at most ``search_limit`` matches are returned in directory order.
        Numeric queries match ids through the same substring test.
        """
        q = str(query or "").strip().lower()
        if not q:
            return self._records[: self.preview_limit]

        results: List[InvestorRecord] = []
        for rec in self._records:
            haystack = (rec.investorId, rec.investorName, rec.investorAddress, rec.pan, rec.email)
            if any(q in field.lower() for field in haystack):
                results.append(rec)
                if len(results) >= self.search_limit:
                    break
        return results

    def get(self, investor_id: str) -> Optional[InvestorRecord]:
        target = str(investor_id)
        return next((r for r in self._records if r.investorId == target), None)


class IssuerSchemeCatalog:
    """Issuer -> schemes, in catalog order."""

    def __init__(self, rows: Iterable[Mapping]):
        self._schemes: Dict[str, List[str]] = {}
        for row in rows:
            company = str(row.get("company") or "").strip()
            if not company:
                continue
            self._schemes[company] = [str(s) for s in (row.get("schemes") or [])]

    def issuers(self) -> List[str]:
        return list(self._schemes)

    def schemes(self, issuer: str) -> List[str]:
        return list(self._schemes.get(issuer, []))

    def has_pair(self, issuer: str, scheme: str) -> bool:
        return scheme in self._schemes.get(issuer, [])


class InsuranceCatalog:
    """Insurer -> category -> products."""

    def __init__(self, rows: Iterable[Mapping]):
        self._tree: Dict[str, Dict[str, List[str]]] = {}
        for row in rows:
            company = str(row.get("company") or "").strip()
            if not company:
                continue
            self._tree[company] = {
                str(sub.get("name")): [str(p) for p in (sub.get("products") or [])]
                for sub in (row.get("subsections") or [])
                if sub.get("name")
            }

    def issuers(self) -> List[str]:
        return list(self._tree)

    def categories(self, issuer: str) -> List[str]:
        return list(self._tree.get(issuer, {}))

    def products(self, issuer: str, category: str) -> List[str]:
        return list(self._tree.get(issuer, {}).get(category, []))


@dataclass(frozen=True)
class ReferenceData:
    """Every index the wizard needs, built from one reference directory."""
    employees: EmployeeDirectory
    investors: InvestorDirectory
    mf_catalog: IssuerSchemeCatalog
    non_mf_catalog: IssuerSchemeCatalog
    insurance_catalog: InsuranceCatalog

    @classmethod
    def from_dir(cls, reference_dir: Path) -> "ReferenceData":
        from catalog.loader import (
            EMPLOYEES_FILE,
            INSURANCE_ISSUERS_FILE,
            INVESTORS_FILE,
            MF_SCHEMES_FILE,
            NON_MF_ISSUERS_FILE,
            load_dataset,
        )

        return cls(
            employees=EmployeeDirectory(load_dataset(EMPLOYEES_FILE, reference_dir)),
            investors=InvestorDirectory(load_dataset(INVESTORS_FILE, reference_dir)),
            mf_catalog=IssuerSchemeCatalog(load_dataset(MF_SCHEMES_FILE, reference_dir)),
            non_mf_catalog=IssuerSchemeCatalog(load_dataset(NON_MF_ISSUERS_FILE, reference_dir)),
            insurance_catalog=InsuranceCatalog(load_dataset(INSURANCE_ISSUERS_FILE, reference_dir)),
        )

    def scheme_catalog(self, category: str) -> IssuerSchemeCatalog:
        """Catalog backing the issuer/scheme cascade of a non-insurance category."""
        return self.mf_catalog if category == "MF" else self.non_mf_catalog
