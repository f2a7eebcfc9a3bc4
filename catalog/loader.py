"""Load the static reference datasets shipped with the portal."""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from core.config import config
from core.logger import get_logger

log = get_logger("catalog/loader")

EMPLOYEES_FILE = "empdata.json"
INVESTORS_FILE = "investors.json"
MF_SCHEMES_FILE = "mf_schemes.json"
NON_MF_ISSUERS_FILE = "non_mf_issuers.json"
INSURANCE_ISSUERS_FILE = "insurance_issuers.json"


def load_dataset(name: str, reference_dir: Optional[Path] = None) -> List[Any]:
    """
    Read one JSON reference file.

    A missing or malformed file is logged and treated as an empty dataset so
    the wizard still opens; the affected step simply has no options.

    Args:
        name: File name inside the reference directory
        reference_dir: Override for ``config.reference_dir``

    Returns:
        The decoded list (empty when unavailable)
    """
    path = Path(reference_dir or config.reference_dir) / name
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        log.warning(f"Reference dataset not found: {path}")
        return []
    except json.JSONDecodeError as e:
        log.error(f"Reference dataset is not valid JSON: {path} error={e}")
        return []

    if not isinstance(data, list):
        log.error(f"Reference dataset must be a JSON array: {path}")
        return []

    log.debug(f"Loaded {len(data)} rows from {path.name}")
    return data


@lru_cache(maxsize=1)
def load_reference_data() -> "ReferenceData":
    """Build (once per process) every directory index from the configured reference dir."""
    from catalog.indexes import ReferenceData

    ref = ReferenceData.from_dir(config.reference_dir)
    log.info(
        f"Reference data ready: employees={len(ref.employees)} investors={len(ref.investors)} "
        f"amcs={len(ref.mf_catalog.issuers())} issuers={len(ref.non_mf_catalog.issuers())} "
        f"insurers={len(ref.insurance_catalog.issuers())}"
    )
    return ref
