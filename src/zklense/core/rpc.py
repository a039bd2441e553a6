"""
Simple async Solana RPC client.

Only the calls needed to simulate one transaction.
"""

import base64
from typing import List, Dict, Optional, Any

import aiohttp

from ..analysis.models import SimulationOutcome

# Number of prioritization fee samples kept in a report
MAX_FEE_SAMPLES = 50

DEFAULT_SIMULATE_OPTIONS = {
    "encoding": "base64",
    "sigVerify": False,
    "replaceRecentBlockhash": True,
    "commitment": "confirmed",
}


def parse_simulation_result(result: Optional[Dict[str, Any]]) -> SimulationOutcome:
    """
    Convert a simulateTransaction result into a SimulationOutcome.

    Args:
        result: The ``result`` member of the RPC response

    Returns:
        SimulationOutcome
    """
    value = (result or {}).get("value") or {}

    return_data = None
    raw_return = value.get("returnData")
    if raw_return:
        data = raw_return.get("data") or []
        # Encoded as [payload, encoding]
        if data and data[0]:
            return_data = base64.b64decode(data[0])
        else:
            return_data = b""

    return SimulationOutcome(
        units_consumed=value.get("unitsConsumed") or 0,
        logs=list(value.get("logs") or []),
        error=value.get("err"),
        return_data=return_data,
    )


def parse_prioritization_fees(result: Any) -> List[Dict[str, int]]:
    """
    Keep the newest fee samples, newest first.

    Anything but a list of sample objects yields no samples.
    """
    if not isinstance(result, list):
        return []
    samples = [sample for sample in result if isinstance(sample, dict)][-MAX_FEE_SAMPLES:]
    return [
        {
            "slot": sample.get("slot", 0),
            "prioritization_fee": sample.get("prioritizationFee", 0),
        }
        for sample in reversed(samples)
    ]


class SolanaRpcClient:
    """
    Simple async Solana RPC client.

    Used to simulate transactions against any JSON-RPC endpoint.
    """

    def __init__(self, rpc_url: str, timeout: float = 30.0):
        """
        Initialize RPC client.

        Args:
            rpc_url: RPC endpoint URL
            timeout: Total request timeout in seconds
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._request_id = 0

    async def _call(self, method: str, params: list = None) -> Any:
        """Make an RPC call."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }

        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        ) as session:
            async with session.post(self.rpc_url, json=payload) as response:
                result = await response.json(content_type=None)
                if "error" in result:
                    raise RuntimeError(f"RPC error: {result['error']}")
                return result.get("result")

    async def get_latest_blockhash(self) -> str:
        """Get latest blockhash (base58)."""
        result = await self._call("getLatestBlockhash", [{"commitment": "confirmed"}])
        return result["value"]["blockhash"]

    async def simulate_transaction(self, tx: str, options: dict = None) -> SimulationOutcome:
        """Simulate a base64 encoded transaction."""
        params = [tx, options or DEFAULT_SIMULATE_OPTIONS]
        result = await self._call("simulateTransaction", params)
        return parse_simulation_result(result)
