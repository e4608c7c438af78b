from __future__ import annotations

import re


def normalize_contract_code(x) -> str:
    """
    Normalize contract code to standard format.

    - Convert to string, strip whitespace and quotes, uppercase
    - Remove trailing .0 (e.g., "099741.0" -> "099741")
    - Left-pad purely numeric codes to 6 digits (numeric exports drop leading zeros)

    Examples:
        normalize_contract_code(98662) -> "098662"
        normalize_contract_code("099741.0") -> "099741"
        normalize_contract_code("13874a") -> "13874A"
    """
    s = str(x).strip().strip('"').upper()
    s = re.sub(r"\.0$", "", s)
    if s.isdigit():
        s = s.zfill(6)
    return s


def is_valid_contract_code(code: str) -> bool:
    """
    Validate contract code format.

    Valid format: ^[A-Z0-9]{6}$ (exchange-assigned, 6 characters)

    Examples:
        is_valid_contract_code("098662") -> True
        is_valid_contract_code("1170E1") -> True
        is_valid_contract_code("abc123") -> False (lowercase)
        is_valid_contract_code("") -> False (empty)
    """
    if not isinstance(code, str):
        return False
    return bool(re.match(r"^[A-Z0-9]{6}$", code))
