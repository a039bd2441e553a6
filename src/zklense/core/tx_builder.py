"""
Transaction Builder: wraps a proof and public witness into a verify
transaction ready for simulation.
"""

from base64 import b64encode
from dataclasses import dataclass
from typing import List, Optional

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from ..analysis.compute_budget import (
    COMPUTE_BUDGET_PROGRAM_ID,
    encode_set_compute_unit_limit,
)
from ..analysis.models import ProofArtifact, MAX_COMPUTE_UNITS

# Payer used for unsigned simulation; never signs anything
DEFAULT_FEE_PAYER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


@dataclass
class BuiltTransaction:
    """A built verify transaction."""
    transaction: Transaction
    program_id: str
    fee_payer: str
    compute_unit_limit: int

    @property
    def serialized_base64(self) -> str:
        return b64encode(bytes(self.transaction)).decode()


def parse_pubkey(value: str, what: str = "public key") -> Pubkey:
    """Parse a base58 public key, raising ValueError with context."""
    try:
        return Pubkey.from_string(value)
    except Exception as e:
        raise ValueError(f"Invalid {what}: {value!r} ({e})") from e


class TransactionBuilder:
    """
    Builds proof verification transactions.

    Instruction layout:
    - set compute unit limit
    - verify: proof + witness as data, no accounts
    """

    def __init__(
        self,
        program_id: str,
        fee_payer: str = DEFAULT_FEE_PAYER,
        compute_unit_limit: int = MAX_COMPUTE_UNITS,
    ):
        """
        Initialize transaction builder.

        Args:
            program_id: Verifier program id (base58)
            fee_payer: Fee payer public key (base58)
            compute_unit_limit: Requested CU limit
        """
        self.program_id = parse_pubkey(program_id, "program id")
        self.fee_payer = parse_pubkey(fee_payer, "fee payer")
        self.compute_unit_limit = compute_unit_limit

    def compute_budget_instructions(self) -> List[Instruction]:
        # No price directive: the simulated transaction pays base fees only
        return [
            Instruction(
                program_id=Pubkey.from_string(COMPUTE_BUDGET_PROGRAM_ID),
                accounts=[],
                data=encode_set_compute_unit_limit(self.compute_unit_limit),
            )
        ]

    def verify_instruction(self, proof: ProofArtifact) -> Instruction:
        return Instruction(
            program_id=self.program_id,
            accounts=[],
            data=proof.instruction_data,
        )

    def build(self, proof: ProofArtifact, recent_blockhash: Optional[str] = None) -> BuiltTransaction:
        """
        Build an unsigned verify transaction.

        Args:
            proof: Proof artifact to embed
            recent_blockhash: Base58 blockhash (default hash if not given)

        Returns:
            BuiltTransaction
        """
        blockhash = Hash.from_string(recent_blockhash) if recent_blockhash else Hash.default()
        instructions = self.compute_budget_instructions() + [self.verify_instruction(proof)]

        message = Message.new_with_blockhash(instructions, self.fee_payer, blockhash)
        transaction = Transaction.new_unsigned(message)

        return BuiltTransaction(
            transaction=transaction,
            program_id=str(self.program_id),
            fee_payer=str(self.fee_payer),
            compute_unit_limit=self.compute_unit_limit,
        )
