"""
Report Assembler: merges simulation results and derived metrics into one
diagnostic report.

The report document (``DiagnosticReport.to_dict``) is the persisted artifact
other tooling reads, so its group and field names are stable.
"""

from base64 import b64encode
from dataclasses import dataclass
from typing import List, Dict, Optional, Any

from .compliance import validate
from .compute_budget import decode
from .fees import calculate
from .models import (
    AccountSummary,
    ComplianceReport,
    ComputeBudgetOverrides,
    CostBreakdown,
    Environment,
    ProofArtifact,
    SimulationOutcome,
    TransactionView,
    LAMPORTS_PER_SIGNATURE,
    MAX_COMPUTE_UNITS,
    MAX_TRANSACTION_SIZE,
)

STATUS_SUCCESS = "Success"
STATUS_FAILED = "Failed"


@dataclass
class DiagnosticReport:
    """Complete cost and compliance report for one simulated transaction."""
    proof_size: int
    witness_size: int
    overrides: ComputeBudgetOverrides
    cost: CostBreakdown
    compliance: ComplianceReport
    simulation: SimulationOutcome
    environment: Environment

    # Optional context
    accounts: Optional[AccountSummary] = None
    program_id: Optional[str] = None
    recent_prioritization_fees: Optional[List[Dict[str, int]]] = None

    @property
    def total_proof_witness_size(self) -> int:
        return self.proof_size + self.witness_size

    @property
    def transaction_status(self) -> str:
        return STATUS_SUCCESS if self.simulation.succeeded else STATUS_FAILED

    @property
    def cu_per_proof_size(self) -> float:
        """Compute units consumed per byte of proof and witness."""
        total = self.total_proof_witness_size
        if total == 0:
            return 0.0
        return self.simulation.units_consumed / total

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON export."""
        cost = self.cost
        compliance = self.compliance
        succeeded = self.simulation.succeeded
        return_data = self.simulation.return_data

        if compliance.within_size_limit:
            size_message = (
                f"Success: Message size ({compliance.message_size}) "
                f"is within limits ({MAX_TRANSACTION_SIZE})"
            )
        else:
            size_message = (
                f"Fail: Message size ({compliance.message_size}) "
                f"exceeds maximum ({MAX_TRANSACTION_SIZE})"
            )

        return {
            "compute_units": {
                "total_compute_units_consumed": self.simulation.units_consumed,
                "total_cu": self.simulation.units_consumed,
                "compute_budget": compliance.cu_limit,
                "max_compute_units": MAX_COMPUTE_UNITS,
                "percentage_of_compute_budget_used": f"{compliance.compute_usage_percent:.2f}%",
                "compute_usage_percent": compliance.compute_usage_percent,
                "exceeds_max_compute": compliance.exceeds_max_compute,
                "within_compute_budget": compliance.within_compute_budget,
                "warning": compliance.compute_warning,
                "suggestion": compliance.compute_suggestion,
            },
            "proof": {
                "proof_size": self.proof_size,
                "witness_size": self.witness_size,
                "total_proof_witness_size": self.total_proof_witness_size,
                "cu_per_proof_size": f"{self.cu_per_proof_size:.4f}",
            },
            "cost": {
                "cost_in_sol": f"{cost.cost_in_sol:.9f}",
                "base_fee_in_sol": f"{cost.base_fee_in_sol:.9f}",
                "priority_fee_in_sol": f"{cost.priority_fee_in_sol:.9f}",
                "cost_in_lamports": cost.total_fee,
                "base_fee_per_signature": LAMPORTS_PER_SIGNATURE,
                "num_signatures": cost.signature_count,
                "base_fee": cost.base_fee,
                "cu_limit": cost.cu_limit,
                "cu_price_microlamports": cost.cu_price_microlamports,
                "prioritization_fee": cost.priority_fee,
                "priority_fee": cost.priority_fee,
                "total_fee": cost.total_fee,
                "priority": f"{cost.priority:.9f}",
                "suggestion": cost.fee_suggestion,
            },
            "transaction_status": {
                "status": self.transaction_status,
                "error": self.simulation.error_detail,
                "return_data": b64encode(return_data).decode() if return_data is not None else None,
                "suggestion": (
                    "Transaction simulation successful"
                    if succeeded
                    else "Review transaction error and fix issues"
                ),
            },
            "transaction_size": {
                "transaction_size": compliance.transaction_size,
                "message_size": compliance.message_size,
                "proof_size": self.proof_size,
                "witness_size": self.witness_size,
                "total_proof_witness_size": self.total_proof_witness_size,
                "max_message_size": MAX_TRANSACTION_SIZE,
                "message_within_size": compliance.within_size_limit,
                "message": size_message,
                "suggestion": compliance.size_suggestion,
            },
            "transaction_logs": {
                "logs": list(self.simulation.logs),
                "log_count": len(self.simulation.logs),
            },
            "accounts": self.accounts.to_dict() if self.accounts else None,
            "recent_prioritization_fees": self.recent_prioritization_fees,
            "program_id": self.program_id,
            "environment": self.environment.to_dict(),
        }


def assemble(
    proof: ProofArtifact,
    overrides: ComputeBudgetOverrides,
    cost: CostBreakdown,
    compliance: ComplianceReport,
    simulation: SimulationOutcome,
    environment: Environment,
    accounts: Optional[AccountSummary] = None,
    program_id: Optional[str] = None,
    recent_prioritization_fees: Optional[List[Dict[str, int]]] = None,
) -> DiagnosticReport:
    """
    Merge already computed metrics into a DiagnosticReport.

    Args:
        proof: Proof artifact (only its sizes are used)
        overrides: Decoded compute budget
        cost: Fee breakdown
        compliance: Size and budget compliance
        simulation: Simulation outcome from the RPC node
        environment: Network name and RPC URL
        accounts: Optional account summary of the message
        program_id: Optional verifier program id
        recent_prioritization_fees: Optional fee samples from the network

    Returns:
        DiagnosticReport
    """
    return DiagnosticReport(
        proof_size=proof.proof_size,
        witness_size=proof.witness_size,
        overrides=overrides,
        cost=cost,
        compliance=compliance,
        simulation=simulation,
        environment=environment,
        accounts=accounts,
        program_id=program_id,
        recent_prioritization_fees=recent_prioritization_fees,
    )


def analyze_transaction(
    transaction: TransactionView,
    simulation: SimulationOutcome,
    proof: ProofArtifact,
    environment: Environment,
    message_size: int,
    transaction_size: Optional[int] = None,
    program_id: Optional[str] = None,
    recent_prioritization_fees: Optional[List[Dict[str, int]]] = None,
) -> DiagnosticReport:
    """Run decode, calculate, validate and assemble for one transaction."""
    overrides = decode(transaction)
    cost = calculate(overrides, transaction.signature_count)
    compliance = validate(
        transaction,
        message_size,
        overrides,
        simulation.units_consumed,
        transaction_size=transaction_size,
    )
    return assemble(
        proof,
        overrides,
        cost,
        compliance,
        simulation,
        environment,
        accounts=transaction.account_summary(),
        program_id=program_id,
        recent_prioritization_fees=recent_prioritization_fees,
    )
