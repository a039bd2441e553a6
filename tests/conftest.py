from __future__ import annotations

import struct

import pytest

from zklense.analysis.compute_budget import (
    COMPUTE_BUDGET_PROGRAM_ID,
    SET_COMPUTE_UNIT_PRICE,
    encode_set_compute_unit_limit,
)
from zklense.analysis.models import (
    Environment,
    InstructionRecord,
    MessageHeader,
    ProofArtifact,
    SimulationOutcome,
    TransactionView,
)

FEE_PAYER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
VERIFIER_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

# payer, compute budget program, verifier program
ACCOUNT_KEYS = (FEE_PAYER, COMPUTE_BUDGET_PROGRAM_ID, VERIFIER_PROGRAM)
BUDGET_INDEX = 1
VERIFIER_INDEX = 2


class FakeRpc:
    """Stands in for SolanaRpcClient and records what it was asked to simulate."""

    def __init__(self, outcome: SimulationOutcome):
        self.outcome = outcome
        self.simulated = []

    async def get_latest_blockhash(self) -> str:
        return "1" * 32

    async def simulate_transaction(self, tx: str, options: dict = None) -> SimulationOutcome:
        self.simulated.append(tx)
        return self.outcome


@pytest.fixture
def fake_rpc():
    return FakeRpc


@pytest.fixture
def verifier_program() -> str:
    return VERIFIER_PROGRAM


@pytest.fixture
def make_view():
    """Factory for TransactionViews over the standard three account keys."""
    def _make(*instructions: InstructionRecord, signature_count: int = 1) -> TransactionView:
        return TransactionView(
            instructions=tuple(instructions),
            account_keys=ACCOUNT_KEYS,
            header=MessageHeader(
                num_required_signatures=1,
                num_readonly_signed_accounts=0,
                num_readonly_unsigned_accounts=2,
            ),
            signature_count=signature_count,
        )
    return _make


@pytest.fixture
def budget_ix():
    """Compute-budget program instruction with raw data."""
    def _make(data: bytes) -> InstructionRecord:
        return InstructionRecord(BUDGET_INDEX, (), data)
    return _make


@pytest.fixture
def verifier_ix():
    """Verifier program instruction with raw data."""
    def _make(data: bytes) -> InstructionRecord:
        return InstructionRecord(VERIFIER_INDEX, (), data)
    return _make


@pytest.fixture
def limit_ix(budget_ix):
    def _make(units: int) -> InstructionRecord:
        return budget_ix(encode_set_compute_unit_limit(units))
    return _make


@pytest.fixture
def price_ix(budget_ix):
    def _make(micro_lamports: int) -> InstructionRecord:
        return budget_ix(bytes([SET_COMPUTE_UNIT_PRICE, 0, 0, 0]) + struct.pack("<Q", micro_lamports))
    return _make


@pytest.fixture
def verify_ix(verifier_ix):
    return verifier_ix(b"\x01" * 64)


@pytest.fixture
def proof() -> ProofArtifact:
    return ProofArtifact(proof=b"\xaa" * 256, witness=b"\xbb" * 44)


@pytest.fixture
def environment() -> Environment:
    return Environment(network="devnet", rpc_url="https://api.devnet.solana.com")


@pytest.fixture
def proof_project(tmp_path):
    """Project directory with a proof and witness file in target/."""
    target = tmp_path / "target"
    target.mkdir()
    (target / "circuit.proof").write_bytes(b"\x11" * 40)
    (target / "circuit.pw").write_bytes(b"\x22" * 12)
    return tmp_path
