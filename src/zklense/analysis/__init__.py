"""
Analysis module for transaction cost and compliance.
"""

from .models import (
    ProofArtifact,
    InstructionRecord,
    MessageHeader,
    AccountSummary,
    TransactionView,
    ComputeBudgetOverrides,
    SimulationOutcome,
    CostBreakdown,
    ComplianceReport,
    Environment,
    LAMPORTS_PER_SIGNATURE,
    LAMPORTS_PER_SOL,
    MAX_COMPUTE_UNITS,
    DEFAULT_COMPUTE_UNITS,
    MAX_TRANSACTION_SIZE,
)
from .compute_budget import COMPUTE_BUDGET_PROGRAM_ID, decode
from .fees import calculate
from .compliance import validate
from .report import DiagnosticReport, assemble, analyze_transaction
from .render import render_report

__all__ = [
    "ProofArtifact",
    "InstructionRecord",
    "MessageHeader",
    "AccountSummary",
    "TransactionView",
    "ComputeBudgetOverrides",
    "SimulationOutcome",
    "CostBreakdown",
    "ComplianceReport",
    "Environment",
    "DiagnosticReport",
    "COMPUTE_BUDGET_PROGRAM_ID",
    "LAMPORTS_PER_SIGNATURE",
    "LAMPORTS_PER_SOL",
    "MAX_COMPUTE_UNITS",
    "DEFAULT_COMPUTE_UNITS",
    "MAX_TRANSACTION_SIZE",
    "decode",
    "calculate",
    "validate",
    "assemble",
    "analyze_transaction",
    "render_report",
]
