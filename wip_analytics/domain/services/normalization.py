"""Domain normalization helpers."""


def normalize_code(code: str | None) -> str:
    """Normalize ledger type codes.

    Args:
        code: Raw type or sub-type code from a repository.

    Returns:
        str: Upper-cased, stripped code, empty when missing.
    """
    if not code:
        return ""
    return code.strip().upper()


def normalize_entry_type(entry_type: str | None) -> str:
    """Normalize free-text debtor entry types for token matching.

    Args:
        entry_type: Raw entry type value from a repository.

    Returns:
        str: Lower-cased, stripped entry type, empty when missing.
    """
    if not entry_type:
        return ""
    return entry_type.strip().lower()


def normalize_service_line(code: str | None) -> str | None:
    """Normalize external service-line codes.

    Args:
        code: Raw service-line code.

    Returns:
        str | None: Stripped code, None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned or None


__all__ = [
    "normalize_code",
    "normalize_entry_type",
    "normalize_service_line",
]
