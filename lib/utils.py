# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from uuid import uuid4


# =============================================================================
# ID / Time Utilities
# =============================================================================

def new_id() -> str:
    """Generate a new record ID."""
    return str(uuid4())


def utc_now() -> datetime:
    """Timezone-aware current time, used for created_at / updated_at."""
    return datetime.now(timezone.utc)


# =============================================================================
# Money Formatting
# =============================================================================

CENTS = Decimal("0.01")


def format_amount(value: Decimal | float | int) -> str:
    """
    Format an amount with two decimal places for display or export.

    Example:
        format_amount(Decimal("219.995"))  # "220.00"
        format_amount(-30)                 # "-30.00"
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))
