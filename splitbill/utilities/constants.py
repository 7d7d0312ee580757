from typing import Final, Optional

BILL_STORE_VERSION: Final[str] = "1.0.0"

# Split strategies
SPLIT_EQUAL: Final[str] = "equal"
SPLIT_PERCENTAGE: Final[str] = "percentage"
SPLIT_FRACTION: Final[str] = "fraction"
SPLIT_TYPES: Final[tuple[str, ...]] = (SPLIT_EQUAL, SPLIT_PERCENTAGE, SPLIT_FRACTION)

# Discount and tax line kinds share the same vocabulary
DISCOUNT_FLAT: Final[str] = "flat"
DISCOUNT_PERCENTAGE: Final[str] = "percentage"
DISCOUNT_TYPES: Final[tuple[str, ...]] = (DISCOUNT_FLAT, DISCOUNT_PERCENTAGE)
TAX_FLAT: Final[str] = "flat"
TAX_PERCENTAGE: Final[str] = "percentage"
TAX_TYPES: Final[tuple[str, ...]] = (TAX_FLAT, TAX_PERCENTAGE)

# The implicit default (global) section
DEFAULT_SECTION_ID: Final[Optional[str]] = None
DEFAULT_SECTION_NAME: Final[str] = "Default"

PERCENTAGE_TOTAL: Final[float] = 100.0
