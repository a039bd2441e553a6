"""
Compute-budget decoder.

Finds compute-budget directives in a transaction and returns the effective
CU limit and CU price.
"""

import struct
from functools import reduce

from .models import ComputeBudgetOverrides, InstructionRecord, TransactionView


COMPUTE_BUDGET_PROGRAM_ID = "ComputeBudget111111111111111111111111111111"

SET_COMPUTE_UNIT_LIMIT = 2
SET_COMPUTE_UNIT_PRICE = 3

# Bytes 1..4 are padding; the value starts at offset 4
_VALUE_OFFSET = 4


def apply_instruction(
    overrides: ComputeBudgetOverrides,
    data: bytes,
) -> ComputeBudgetOverrides:
    """
    Apply one compute-budget instruction payload to the running overrides.

    Unknown discriminants and truncated payloads leave the overrides
    unchanged.
    """
    if not data:
        return overrides

    discriminant = data[0]
    if discriminant == SET_COMPUTE_UNIT_LIMIT and len(data) >= 8:
        (cu_limit,) = struct.unpack_from("<I", data, _VALUE_OFFSET)
        return ComputeBudgetOverrides(
            cu_limit=cu_limit,
            cu_price_microlamports=overrides.cu_price_microlamports,
        )
    if discriminant == SET_COMPUTE_UNIT_PRICE and len(data) >= 12:
        (cu_price,) = struct.unpack_from("<Q", data, _VALUE_OFFSET)
        return ComputeBudgetOverrides(
            cu_limit=overrides.cu_limit,
            cu_price_microlamports=cu_price,
        )
    return overrides


def decode(transaction: TransactionView) -> ComputeBudgetOverrides:
    """
    Decode compute-budget overrides from a transaction.

    Instructions are scanned in order and later directives replace earlier
    ones. Without any directive the network defaults are returned.

    Args:
        transaction: Transaction to inspect

    Returns:
        Effective ComputeBudgetOverrides

    Raises:
        ValueError: If an instruction's program index is out of range
    """
    def step(overrides: ComputeBudgetOverrides, ix: InstructionRecord) -> ComputeBudgetOverrides:
        if transaction.resolve_program_id(ix) != COMPUTE_BUDGET_PROGRAM_ID:
            return overrides
        return apply_instruction(overrides, ix.data)

    return reduce(step, transaction.instructions, ComputeBudgetOverrides())


def encode_set_compute_unit_limit(units: int) -> bytes:
    """Encode a set-limit payload in the layout ``decode`` reads."""
    return bytes([SET_COMPUTE_UNIT_LIMIT, 0, 0, 0]) + struct.pack("<I", units)

