"""Classification of WIP transaction type codes."""

from wip_analytics.domain.constants import (
    ADJUSTMENT_TYPE_CODES,
    DISBURSEMENT_TYPE_CODES,
    FEE_SUBTYPE_TOKENS,
    FEE_TYPE_CODES,
    PROVISION_TYPE_CODES,
    TIME_TYPE_CODES,
)
from wip_analytics.domain.models.finance import TransactionCategory
from wip_analytics.domain.services.normalization import normalize_code

UNKNOWN_CATEGORY = TransactionCategory()


def categorize_transaction(
    type_code: str | None,
    sub_type_code: str | None = None,
) -> TransactionCategory:
    """Map a transaction type code to its WIP category.

    The primary code decides whenever it is recognized. A sub-type naming a
    fee variant only promotes otherwise unrecognized rows to billing.
    Unrecognized codes are returned as an all-false category.

    Args:
        type_code: Primary type code of the row (``T``, ``F``, ``ADJ`` ...).
        sub_type_code: Optional sub-type refining the primary code.

    Returns:
        TransactionCategory: Category flags with at most one flag set.
    """
    code = normalize_code(type_code)
    if code in TIME_TYPE_CODES:
        return TransactionCategory(is_time=True)
    if code in DISBURSEMENT_TYPE_CODES:
        return TransactionCategory(is_disbursement=True)
    if code in ADJUSTMENT_TYPE_CODES:
        return TransactionCategory(is_adjustment=True)
    if code in FEE_TYPE_CODES:
        return TransactionCategory(is_fee=True)
    if code in PROVISION_TYPE_CODES:
        return TransactionCategory(is_provision=True)
    if is_fee_sub_type(sub_type_code):
        return TransactionCategory(is_fee=True)
    return UNKNOWN_CATEGORY


def is_fee_sub_type(sub_type_code: str | None) -> bool:
    """Return True when a sub-type names a fee variant.

    Args:
        sub_type_code: Raw sub-type code.

    Returns:
        bool: True for fee codes or sub-types containing a fee token.
    """
    code = normalize_code(sub_type_code)
    if not code:
        return False
    if code in FEE_TYPE_CODES:
        return True
    return any(token in code for token in FEE_SUBTYPE_TOKENS)


__all__ = ["categorize_transaction", "is_fee_sub_type", "UNKNOWN_CATEGORY"]
