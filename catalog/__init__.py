"""Reference directories: employees, investors and product catalogs."""
from .indexes import (
    EmployeeDirectory,
    InvestorDirectory,
    IssuerSchemeCatalog,
    InsuranceCatalog,
    ReferenceData,
)
from .loader import load_dataset, load_reference_data

__all__ = [
    "EmployeeDirectory",
    "InvestorDirectory",
    "IssuerSchemeCatalog",
    "InsuranceCatalog",
    "ReferenceData",
    "load_dataset",
    "load_reference_data",
]
