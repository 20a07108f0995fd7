from .account import Account, AccountType
from .money import (
    MAX_MINOR_UNITS,
    MINOR_UNITS_PER_MAJOR,
    from_minor_units,
    parse_amount,
    require_non_negative_minor_units,
    require_positive_minor_units,
    to_minor_units,
)

__all__ = [
    "Account",
    "AccountType",
    "MAX_MINOR_UNITS",
    "MINOR_UNITS_PER_MAJOR",
    "from_minor_units",
    "parse_amount",
    "require_non_negative_minor_units",
    "require_positive_minor_units",
    "to_minor_units",
]
