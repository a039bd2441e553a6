"""Transaction Analyzer: turns solders transactions into analysis views."""

import base64
from typing import Tuple

from solders.transaction import Transaction

from ..analysis.models import InstructionRecord, MessageHeader, TransactionView


def view_from_transaction(tx: Transaction) -> TransactionView:
    """
    Build a TransactionView from a legacy solders transaction.

    Args:
        tx: Signed or unsigned transaction

    Returns:
        TransactionView with base58 account keys
    """
    message = tx.message
    header = message.header

    instructions = tuple(
        InstructionRecord(
            program_id_index=ix.program_id_index,
            account_indices=tuple(ix.accounts),
            data=bytes(ix.data),
        )
        for ix in message.instructions
    )

    return TransactionView(
        instructions=instructions,
        account_keys=tuple(str(key) for key in message.account_keys),
        header=MessageHeader(
            num_required_signatures=header.num_required_signatures,
            num_readonly_signed_accounts=header.num_readonly_signed_accounts,
            num_readonly_unsigned_accounts=header.num_readonly_unsigned_accounts,
        ),
        signature_count=len(tx.signatures),
    )


def view_from_base64(tx_base64: str) -> TransactionView:
    """Decode a base64 wire transaction and build its view."""
    tx_bytes = base64.b64decode(tx_base64)
    return view_from_transaction(Transaction.from_bytes(tx_bytes))


def measure_sizes(tx: Transaction) -> Tuple[int, int]:
    """
    Measure serialized sizes.

    Returns:
        (message_size, transaction_size) in bytes
    """
    return len(bytes(tx.message)), len(bytes(tx))
