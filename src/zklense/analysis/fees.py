"""Fee and cost calculator."""

from .models import ComputeBudgetOverrides, CostBreakdown, LAMPORTS_PER_SIGNATURE

MICRO_LAMPORTS_PER_LAMPORT = 1_000_000


def priority_fee_lamports(cu_limit: int, cu_price_microlamports: int) -> int:
    """Prioritization fee, truncated the same way the network truncates it."""
    return (cu_limit * cu_price_microlamports) // MICRO_LAMPORTS_PER_LAMPORT


def calculate(overrides: ComputeBudgetOverrides, signature_count: int) -> CostBreakdown:
    """
    Calculate fees for a transaction.

    A transaction is charged for at least one signature even if none are
    attached at simulation time.

    Args:
        overrides: Effective compute budget
        signature_count: Signatures present on the transaction

    Returns:
        CostBreakdown in integer lamports
    """
    signature_count = max(signature_count, 1)
    base_fee = signature_count * LAMPORTS_PER_SIGNATURE
    priority_fee = priority_fee_lamports(
        overrides.cu_limit, overrides.cu_price_microlamports
    )

    return CostBreakdown(
        signature_count=signature_count,
        base_fee=base_fee,
        priority_fee=priority_fee,
        total_fee=base_fee + priority_fee,
        cu_limit=overrides.cu_limit,
        cu_price_microlamports=overrides.cu_price_microlamports,
    )
