"""Transaction building, RPC access and run orchestration."""

from .tx_builder import TransactionBuilder, BuiltTransaction, DEFAULT_FEE_PAYER
from .tx_analyzer import view_from_transaction, view_from_base64, measure_sizes
from .rpc import SolanaRpcClient, parse_simulation_result, parse_prioritization_fees
from .proof_loader import find_file_by_extension, read_proof_files
from .report_store import save_report, load_report, report_path
from .simulator import ProofSimulator, SimulationRun, fetch_recent_prioritization_fees
