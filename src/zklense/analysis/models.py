"""
Data models for transaction cost analysis.

These models describe one proof-verification transaction, the result of
simulating it, and the metrics derived from both.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Dict, Optional, Any, Tuple


# Protocol constants (must match the network exactly)
LAMPORTS_PER_SIGNATURE = 5000
LAMPORTS_PER_SOL = 1_000_000_000
MAX_COMPUTE_UNITS = 1_400_000
DEFAULT_COMPUTE_UNITS = 200_000
MAX_TRANSACTION_SIZE = 1232


@dataclass(frozen=True)
class ProofArtifact:
    """Proof and public witness bytes as read from disk."""
    proof: bytes
    witness: bytes

    @property
    def proof_size(self) -> int:
        return len(self.proof)

    @property
    def witness_size(self) -> int:
        return len(self.witness)

    @property
    def total_size(self) -> int:
        return self.proof_size + self.witness_size

    @property
    def instruction_data(self) -> bytes:
        """Payload of the verify instruction: proof followed by witness."""
        return self.proof + self.witness


@dataclass(frozen=True)
class InstructionRecord:
    """A compiled instruction inside a transaction message."""
    program_id_index: int  # Index into TransactionView.account_keys
    account_indices: Tuple[int, ...] = ()
    data: bytes = b""


@dataclass(frozen=True)
class MessageHeader:
    num_required_signatures: int = 1
    num_readonly_signed_accounts: int = 0
    num_readonly_unsigned_accounts: int = 0


@dataclass(frozen=True)
class AccountSummary:
    """Writable/readonly account counts derived from the message header."""
    total_accounts: int
    writable_signed_accounts: int
    writable_unsigned_accounts: int
    readonly_signed_accounts: int
    readonly_unsigned_accounts: int

    @property
    def total_writable_accounts(self) -> int:
        return self.writable_signed_accounts + self.writable_unsigned_accounts

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_accounts": self.total_accounts,
            "writable_signed_accounts": self.writable_signed_accounts,
            "writable_unsigned_accounts": self.writable_unsigned_accounts,
            "total_writable_accounts": self.total_writable_accounts,
            "readonly_signed_accounts": self.readonly_signed_accounts,
            "readonly_unsigned_accounts": self.readonly_unsigned_accounts,
        }


@dataclass(frozen=True)
class TransactionView:
    """
    Read-only view over a legacy transaction message.

    Account keys are base58 strings. Instructions reference their program
    through an index into ``account_keys``.
    """
    instructions: Tuple[InstructionRecord, ...]
    account_keys: Tuple[str, ...]
    header: MessageHeader = field(default_factory=MessageHeader)
    signature_count: int = 1

    def resolve_program_id(self, instruction: InstructionRecord) -> str:
        """
        Resolve the program id of an instruction.

        Raises:
            ValueError: If the program index does not point into account_keys
        """
        index = instruction.program_id_index
        if index < 0 or index >= len(self.account_keys):
            raise ValueError(
                f"Program id index {index} out of range "
                f"(transaction has {len(self.account_keys)} account keys)"
            )
        return self.account_keys[index]

    def account_summary(self) -> AccountSummary:
        total = len(self.account_keys)
        required = self.header.num_required_signatures
        writable_signed = max(required - self.header.num_readonly_signed_accounts, 0)
        writable_unsigned = max(
            max(total - required, 0) - self.header.num_readonly_unsigned_accounts, 0
        )
        return AccountSummary(
            total_accounts=total,
            writable_signed_accounts=writable_signed,
            writable_unsigned_accounts=writable_unsigned,
            readonly_signed_accounts=self.header.num_readonly_signed_accounts,
            readonly_unsigned_accounts=self.header.num_readonly_unsigned_accounts,
        )


@dataclass(frozen=True)
class ComputeBudgetOverrides:
    """Effective compute budget after applying override instructions."""
    cu_limit: int = DEFAULT_COMPUTE_UNITS
    cu_price_microlamports: int = 0


@dataclass
class SimulationOutcome:
    """Result of simulating a transaction against an RPC node."""
    units_consumed: int = 0
    logs: List[str] = field(default_factory=list)
    error: Optional[Any] = None  # Opaque; never interpreted here
    return_data: Optional[bytes] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def error_detail(self) -> Optional[str]:
        if self.error is None:
            return None
        if isinstance(self.error, str):
            return self.error
        return repr(self.error)


def lamports_to_sol(lamports: int) -> Decimal:
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


@dataclass(frozen=True)
class CostBreakdown:
    """Fees for one transaction, kept in integer lamports."""
    signature_count: int
    base_fee: int
    priority_fee: int
    total_fee: int
    cu_limit: int
    cu_price_microlamports: int

    @property
    def cost_in_sol(self) -> Decimal:
        return lamports_to_sol(self.total_fee)

    @property
    def base_fee_in_sol(self) -> Decimal:
        return lamports_to_sol(self.base_fee)

    @property
    def priority_fee_in_sol(self) -> Decimal:
        return lamports_to_sol(self.priority_fee)

    @property
    def priority(self) -> Decimal:
        """
        Priority fee per compute unit of budget.

        This is a heuristic for ranking relative cost between transactions,
        not a value the network enforces.
        """
        if self.cu_limit <= 0:
            return Decimal(0)
        return Decimal(self.priority_fee) / Decimal(self.cu_limit)

    @property
    def fee_suggestion(self) -> str:
        if self.priority_fee == 0:
            return "Consider adding priority fee for faster confirmation"
        return "Priority fee is set"


@dataclass(frozen=True)
class ComplianceReport:
    """Size and compute-budget compliance of a transaction."""
    message_size: int
    transaction_size: int
    within_size_limit: bool
    units_consumed: int
    cu_limit: int
    compute_usage_percent: float
    exceeds_max_compute: bool
    compute_suggestion: str
    size_suggestion: str
    compute_warning: Optional[str] = None

    @property
    def within_compute_budget(self) -> bool:
        return self.compute_usage_percent <= 90.0 and not self.exceeds_max_compute


@dataclass(frozen=True)
class Environment:
    """Where the simulation ran. Descriptive only."""
    network: str
    rpc_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"network": self.network, "rpc_url": self.rpc_url}
