"""Domain constants for WIP and debtor analytics."""

from .models.aging import AgeBucket, AgingScheme

TIME_TYPE_CODES = ("T", "TI", "TIM", "TIME")
DISBURSEMENT_TYPE_CODES = ("D", "DI", "DIS", "DISB")
ADJUSTMENT_TYPE_CODES = ("ADJ",)
FEE_TYPE_CODES = ("F", "FEE")
PROVISION_TYPE_CODES = ("P", "PRO", "PROV")

# Sub-type fragments identifying billing rows filed under a generic type.
FEE_SUBTYPE_TOKENS = ("FEE", "BILL")

TIME_ADJUSTMENT_TOKENS = ("TIME",)
DISBURSEMENT_ADJUSTMENT_TOKENS = ("DISBURSEMENT", "DISB")

INVOICE_ENTRY_TOKENS = ("invoice", "inv")
PAYMENT_ENTRY_TOKENS = ("payment", "receipt")

UNKNOWN_SERVICE_LINE = "UNKNOWN"

RESOLUTION_TARGET_POINTS = {
    "low": 60,
    "standard": 120,
    "high": 365,
}
DEFAULT_RESOLUTION = "standard"
DEFAULT_LOOKBACK_MONTHS = 24

AGING_SCHEME_60 = AgingScheme(
    name="aging_60",
    buckets=(
        AgeBucket("current", "0-60 days", 0, 60),
        AgeBucket("days61_90", "61-90 days", 61, 90),
        AgeBucket("days91_120", "91-120 days", 91, 120),
        AgeBucket("days120_plus", "120+ days", 121, None),
    ),
)

AGING_SCHEME_30 = AgingScheme(
    name="aging_30",
    buckets=(
        AgeBucket("current", "0-30 days", 0, 30),
        AgeBucket("days31_60", "31-60 days", 31, 60),
        AgeBucket("days61_90", "61-90 days", 61, 90),
        AgeBucket("days91_120", "91-120 days", 91, 120),
        AgeBucket("days120_plus", "120+ days", 121, None),
    ),
)

AGING_SCHEMES = {
    AGING_SCHEME_60.name: AGING_SCHEME_60,
    AGING_SCHEME_30.name: AGING_SCHEME_30,
}


__all__ = [
    "TIME_TYPE_CODES",
    "DISBURSEMENT_TYPE_CODES",
    "ADJUSTMENT_TYPE_CODES",
    "FEE_TYPE_CODES",
    "PROVISION_TYPE_CODES",
    "FEE_SUBTYPE_TOKENS",
    "TIME_ADJUSTMENT_TOKENS",
    "DISBURSEMENT_ADJUSTMENT_TOKENS",
    "INVOICE_ENTRY_TOKENS",
    "PAYMENT_ENTRY_TOKENS",
    "UNKNOWN_SERVICE_LINE",
    "RESOLUTION_TARGET_POINTS",
    "DEFAULT_RESOLUTION",
    "DEFAULT_LOOKBACK_MONTHS",
    "AGING_SCHEME_60",
    "AGING_SCHEME_30",
    "AGING_SCHEMES",
]
