import asyncio
import base64

import pytest
from solders.transaction import Transaction

from zklense.analysis.models import SimulationOutcome
from zklense.core.simulator import ProofSimulator


@pytest.fixture
def simulator(fake_rpc, verifier_program, environment):
    """Factory for a ProofSimulator wired to a fake RPC client."""
    def _make(project, outcome, **kwargs):
        rpc = fake_rpc(outcome)
        sim = ProofSimulator(
            program_id=verifier_program,
            environment=environment,
            project_dir=project,
            rpc_client=rpc,
            **kwargs,
        )
        return sim, rpc
    return _make


def test_run_produces_report(proof_project, simulator, verifier_program):
    async def fees(rpc_url):
        return [{"slot": 5, "prioritization_fee": 100}]

    sim, rpc = simulator(proof_project, SimulationOutcome(units_consumed=700_000, logs=["ok"]), fee_fetcher=fees)
    run = asyncio.run(sim.run())
    doc = run.report.to_dict()

    assert run.success
    assert run.warnings == []
    assert len(rpc.simulated) == 1
    Transaction.from_bytes(base64.b64decode(rpc.simulated[0]))

    assert doc["compute_units"]["compute_budget"] == 1_400_000
    assert doc["compute_units"]["percentage_of_compute_budget_used"] == "50.00%"
    assert doc["proof"]["total_proof_witness_size"] == 52
    assert doc["program_id"] == verifier_program
    assert doc["recent_prioritization_fees"] == [{"slot": 5, "prioritization_fee": 100}]
    assert doc["transaction_size"]["message_within_size"] is True
    assert run.proof_path.name == "circuit.proof"


def test_fee_lookup_failure_is_a_warning(proof_project, simulator):
    async def broken(rpc_url):
        raise RuntimeError("RPC error: method not found")

    sim, _ = simulator(proof_project, SimulationOutcome(), fee_fetcher=broken)
    run = asyncio.run(sim.run())

    assert run.report.recent_prioritization_fees is None
    assert run.warnings == ["Could not fetch prioritization fees: RPC error: method not found"]


def test_report_matches_the_simulated_transaction(proof_project, simulator):
    sim, _ = simulator(
        proof_project,
        SimulationOutcome(units_consumed=3000, error={"InstructionError": [1, {"Custom": 1}]}),
        fee_fetcher=None,
        compute_unit_limit=200_000,
    )
    run = asyncio.run(sim.run())
    doc = run.report.to_dict()

    assert not run.success
    assert doc["transaction_status"]["status"] == "Failed"
    assert doc["compute_units"]["compute_budget"] == run.built.compute_unit_limit == 200_000
    assert doc["cost"]["cu_price_microlamports"] == 0
    assert doc["cost"]["priority_fee"] == 0
    assert doc["cost"]["total_fee"] == 5000


def test_missing_proof_files(tmp_path, simulator):
    sim, _ = simulator(tmp_path, SimulationOutcome(), fee_fetcher=None)
    with pytest.raises(FileNotFoundError):
        asyncio.run(sim.run())
