"""
Proof Simulator: runs one proof verification transaction against an RPC
node and analyzes its cost.

Reads proof files, builds the transaction, simulates it, then hands the
resolved values to the analysis pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, List, Dict, Optional

import httpx

from ..analysis.models import Environment, MAX_COMPUTE_UNITS
from ..analysis.report import DiagnosticReport, analyze_transaction
from .proof_loader import read_proof_files
from .rpc import SolanaRpcClient, parse_prioritization_fees
from .tx_analyzer import measure_sizes, view_from_transaction
from .tx_builder import BuiltTransaction, TransactionBuilder, DEFAULT_FEE_PAYER


FeeFetcher = Callable[[str], Awaitable[List[Dict[str, int]]]]


@dataclass
class SimulationRun:
    """Result of one simulate-and-analyze run."""
    report: DiagnosticReport
    built: BuiltTransaction
    proof_path: Path
    witness_path: Path
    execution_time_ms: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.report.simulation.succeeded


async def fetch_recent_prioritization_fees(rpc_url: str) -> List[Dict[str, int]]:
    """Fetch recent prioritization fees from RPC, newest first."""
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "method": "getRecentPrioritizationFees",
                "params": [[]]
            }
        )
        response.raise_for_status()
        result = response.json()
        if "error" in result:
            raise RuntimeError(f"RPC error: {result['error']}")
        return parse_prioritization_fees(result.get("result"))


class ProofSimulator:
    """
    Simulates a proof verification transaction and builds its report.

    The RPC client and fee fetcher can be swapped out, e.g. for tests.
    """

    def __init__(
        self,
        program_id: str,
        environment: Environment,
        project_dir: Optional[Path] = None,
        compute_unit_limit: int = MAX_COMPUTE_UNITS,
        fee_payer: str = DEFAULT_FEE_PAYER,
        rpc_client: Optional[SolanaRpcClient] = None,
        fee_fetcher: Optional[FeeFetcher] = fetch_recent_prioritization_fees,
    ):
        """
        Initialize simulator.

        Args:
            program_id: Verifier program id
            environment: Network name and RPC URL
            project_dir: Directory searched for proof files (default: cwd)
            compute_unit_limit: CU limit requested by the transaction
            fee_payer: Fee payer public key
            rpc_client: RPC client (default: one for environment.rpc_url)
            fee_fetcher: Prioritization fee lookup, None to skip it
        """
        self.environment = environment
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.builder = TransactionBuilder(
            program_id,
            fee_payer=fee_payer,
            compute_unit_limit=compute_unit_limit,
        )
        self.rpc = rpc_client or SolanaRpcClient(environment.rpc_url)
        self.fee_fetcher = fee_fetcher

    async def run(self) -> SimulationRun:
        """
        Run the simulation and analysis.

        Returns:
            SimulationRun with the diagnostic report

        Raises:
            FileNotFoundError: If proof or witness files are missing
            RuntimeError: If the RPC node returns an error
        """
        start_time = datetime.now()
        warnings = []

        # Step 1: Read proof files
        proof, proof_path, witness_path = read_proof_files(self.project_dir)
        print(f"[Simulator] Proof: {proof_path} ({proof.proof_size} bytes)")
        print(f"[Simulator] Witness: {witness_path} ({proof.witness_size} bytes)")

        # Step 2: Build transaction with a fresh blockhash
        blockhash = await self.rpc.get_latest_blockhash()
        built = self.builder.build(proof, recent_blockhash=blockhash)

        # Step 3: Simulate
        print(f"[Simulator] Simulating on {self.environment.network} ({self.environment.rpc_url})...")
        simulation = await self.rpc.simulate_transaction(built.serialized_base64)

        # Step 4: Prioritization fees are optional context
        fees = None
        if self.fee_fetcher:
            try:
                fees = await self.fee_fetcher(self.environment.rpc_url)
            except (httpx.HTTPError, RuntimeError, ValueError) as e:
                warnings.append(f"Could not fetch prioritization fees: {e}")

        # Step 5: Analyze
        message_size, transaction_size = measure_sizes(built.transaction)
        report = analyze_transaction(
            view_from_transaction(built.transaction),
            simulation,
            proof,
            self.environment,
            message_size,
            transaction_size=transaction_size,
            program_id=built.program_id,
            recent_prioritization_fees=fees,
        )

        return SimulationRun(
            report=report,
            built=built,
            proof_path=proof_path,
            witness_path=witness_path,
            execution_time_ms=self._elapsed_ms(start_time),
            warnings=warnings,
        )

    def _elapsed_ms(self, start: datetime) -> int:
        return int((datetime.now() - start).total_seconds() * 1000)
