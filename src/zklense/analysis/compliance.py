"""
Size and compute-budget compliance checks.

Compares a transaction against the protocol's size limit and its own
compute budget.
"""

from typing import Optional

from .models import (
    ComplianceReport,
    ComputeBudgetOverrides,
    TransactionView,
    MAX_COMPUTE_UNITS,
    MAX_TRANSACTION_SIZE,
)

SIGNATURE_SIZE = 64

NEAR_LIMIT_PERCENT = 90.0
APPROACHING_LIMIT_PERCENT = 70.0


def compute_usage_percent(units_consumed: int, cu_limit: int) -> float:
    if cu_limit <= 0:
        return 0.0
    return (units_consumed / cu_limit) * 100.0


def compute_suggestion(usage_percent: float) -> str:
    """Pick the compute-usage suggestion for a usage percentage."""
    if usage_percent > NEAR_LIMIT_PERCENT:
        return "Consider optimizing compute usage - near budget limit"
    elif usage_percent > APPROACHING_LIMIT_PERCENT:
        return "Monitor compute usage - approaching budget limit"
    return "Compute usage is within acceptable range"


def shortvec_length(value: int) -> int:
    """Number of bytes a compact-u16 length prefix takes."""
    size = 1
    while value >= 0x80:
        value >>= 7
        size += 1
    return size


def estimate_transaction_size(message_size: int, signature_count: int) -> int:
    """Wire size of a legacy transaction: signature vector + message."""
    return shortvec_length(signature_count) + SIGNATURE_SIZE * signature_count + message_size


def validate(
    transaction: TransactionView,
    message_size: int,
    overrides: ComputeBudgetOverrides,
    units_consumed: int,
    transaction_size: Optional[int] = None,
) -> ComplianceReport:
    """
    Check size and compute-budget compliance.

    Args:
        transaction: Transaction the sizes belong to
        message_size: Serialized message size in bytes
        overrides: Effective compute budget
        units_consumed: Compute units consumed in simulation
        transaction_size: Serialized transaction size, derived from the
            message size when not given

    Returns:
        ComplianceReport
    """
    if transaction_size is None:
        transaction_size = estimate_transaction_size(
            message_size, transaction.signature_count
        )

    within_size_limit = message_size <= MAX_TRANSACTION_SIZE
    usage = compute_usage_percent(units_consumed, overrides.cu_limit)
    exceeds_max = overrides.cu_limit > MAX_COMPUTE_UNITS

    warning = None
    if exceeds_max:
        warning = (
            f"CU limit ({overrides.cu_limit}) exceeds maximum allowed ({MAX_COMPUTE_UNITS})"
        )

    if within_size_limit:
        size_suggestion = f"Transaction size ({message_size}) is within limits"
    else:
        size_suggestion = (
            f"Transaction size ({message_size}) exceeds maximum ({MAX_TRANSACTION_SIZE})"
        )

    return ComplianceReport(
        message_size=message_size,
        transaction_size=transaction_size,
        within_size_limit=within_size_limit,
        units_consumed=units_consumed,
        cu_limit=overrides.cu_limit,
        compute_usage_percent=usage,
        exceeds_max_compute=exceeds_max,
        compute_suggestion=compute_suggestion(usage),
        size_suggestion=size_suggestion,
        compute_warning=warning,
    )
