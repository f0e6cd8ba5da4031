# =============================================================================
# core/services/financial_calculator.py - Contract Cost Breakdown
# =============================================================================
# Turns a contract's total value into commissions, costs, pro-labore and
# net profit. Two modes:
#
# Flat mode (calculate_financials):
#   juninho    = 20
#   natalia    = total * 5%
#   engagement = 10 for a package, 2 for a post
#   pro-labore = total * 70%
#
# Configurable mode (calculate_with_cost_model):
#   every term can be switched off (contributes 0) and engagement becomes
#   per-video cost * video count.
#
# In both modes net_profit = total - juninho - natalia - engagement - pro-labore.
# All arithmetic is Decimal and nothing is rounded here. A negative net
# profit is a loss-making contract and is returned as is.
#
# Pure functions: no I/O, no state.
# =============================================================================

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from app.exceptions import ValidationError
from core.models.financial import (
    DEFAULT_FIXED_COMMISSION,
    DEFAULT_PACKAGE_ENGAGEMENT,
    DEFAULT_PERCENTAGE_COMMISSION,
    DEFAULT_POST_ENGAGEMENT,
    DEFAULT_PRO_LABORE_RATE,
    CostItem,
    CostModel,
    FinancialBreakdown,
)
from core.models.package import PackageType

ZERO = Decimal("0")


def to_amount(value: Any, field: str = "total_value") -> Decimal:
    """
    Coerce a currency input to Decimal and check it is a usable amount.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.

    Raises:
        ValidationError: If the value is missing, not numeric, not finite,
            or negative
    """
    if value is None:
        raise ValidationError(
            f"{field} is required",
            field=field,
            suggestion=f"Provide {field} as a non-negative number",
        )
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(f"{field} must be a finite number", field=field)
        value = str(value)

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(
            f"{field} is not a valid number: {value!r}",
            field=field,
            suggestion="Use digits with an optional decimal point, e.g. 1500.00",
        )

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    if amount < 0:
        raise ValidationError(
            f"{field} cannot be negative: {amount}",
            field=field,
            suggestion=f"Provide {field} as a non-negative number",
        )
    return amount


def _breakdown(
    total_value: Decimal,
    juninho: Decimal,
    natalia: Decimal,
    engagement: Decimal,
    pro_labore: Decimal,
) -> FinancialBreakdown:
    return FinancialBreakdown(
        juninho_commission=juninho,
        natalia_commission=natalia,
        engagement_cost=engagement,
        pro_labore=pro_labore,
        net_profit=total_value - juninho - natalia - engagement - pro_labore,
    )


def calculate_financials(
    total_value: Any,
    contract_type: PackageType | str,
) -> FinancialBreakdown:
    """
    Flat-rate breakdown of a contract.

    Args:
        total_value: Contract value (>= 0)
        contract_type: "package" or "post"; selects the engagement cost

    Returns:
        FinancialBreakdown with all five values

    Raises:
        ValidationError: If total_value is invalid or the type is unknown

    Example:
        >>> calculate_financials(1000, "package").net_profit
        Decimal('220.00')
    """
    total = to_amount(total_value)
    try:
        contract_type = PackageType(contract_type)
    except ValueError:
        raise ValidationError(
            f"Unknown contract type: {contract_type!r}",
            field="type",
            suggestion="Use 'package' or 'post'",
        )

    engagement = (
        DEFAULT_PACKAGE_ENGAGEMENT
        if contract_type == PackageType.PACKAGE
        else DEFAULT_POST_ENGAGEMENT
    )

    return _breakdown(
        total,
        juninho=DEFAULT_FIXED_COMMISSION,
        natalia=total * DEFAULT_PERCENTAGE_COMMISSION,
        engagement=engagement,
        pro_labore=total * DEFAULT_PRO_LABORE_RATE,
    )


def _term(item: CostItem, amount: Decimal) -> Decimal:
    return amount if item.enabled else ZERO


def calculate_with_cost_model(
    total_value: Any,
    cost_model: CostModel | None = None,
    video_count: int = 1,
) -> FinancialBreakdown:
    """
    Breakdown using a configurable cost model.

    Each term is `enabled ? computed : 0`. Engagement is the per-video cost
    times video_count.

    Args:
        total_value: Contract value (>= 0)
        cost_model: Cost terms; None uses the defaults with everything enabled
        video_count: Number of videos in the contract (>= 0)

    Raises:
        ValidationError: If total_value or video_count is invalid
    """
    total = to_amount(total_value)
    if isinstance(video_count, bool) or not isinstance(video_count, int) or video_count < 0:
        raise ValidationError(
            f"video_count must be a non-negative integer: {video_count!r}",
            field="video_count",
        )

    model = cost_model or CostModel()

    return _breakdown(
        total,
        juninho=_term(model.fixed_commission, model.fixed_commission.value),
        natalia=_term(
            model.percentage_commission,
            total * model.percentage_commission.value,
        ),
        engagement=_term(
            model.engagement_per_video,
            model.engagement_per_video.value * video_count,
        ),
        pro_labore=_term(model.pro_labore_rate, total * model.pro_labore_rate.value),
    )
