"""
Field-level checks shared by the write schemas.
"""


def normalize_currency(value: str) -> str:
    """Upper-case a currency code and require three letters (e.g. 'INR')."""
    code = (value or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"Currency must be a 3-letter code, got '{value}'")
    return code


def unique_ids(values):
    """Drop duplicate ids while keeping the first-seen order."""
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out
