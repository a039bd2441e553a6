"""
Network configuration.

Resolves which network and RPC endpoint a run uses, from command line
flags, environment variables (optionally loaded from a .env file) and
built-in presets.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from .analysis.models import Environment

# RPC endpoints
DEVNET_RPC = "https://api.devnet.solana.com"
TESTNET_RPC = "https://api.testnet.solana.com"
MAINNET_RPC = "https://api.mainnet-beta.solana.com"
LOCALNET_RPC = "http://127.0.0.1:8899"

NETWORKS: Dict[str, str] = {
    "devnet": DEVNET_RPC,
    "testnet": TESTNET_RPC,
    "mainnet": MAINNET_RPC,
    "localnet": LOCALNET_RPC,
}

DEFAULT_NETWORK = "devnet"

NETWORK_ENV = "ZKLENSE_NETWORK"
RPC_URL_ENV = "ZKLENSE_RPC_URL"


def load_env(start: Optional[Path] = None) -> Optional[Path]:
    """
    Load a .env file from the start directory or its parents.

    Variables already set in the environment are kept.

    Returns:
        Path of the loaded file, if any
    """
    current = Path(start) if start else Path.cwd()
    for _ in range(5):  # Check up to 5 parent dirs
        env_file = current / ".env"
        if env_file.exists():
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ.setdefault(key.strip(), value.strip())
            return env_file
        current = current.parent
    return None


def validate_rpc_url(rpc_url: str) -> str:
    if not rpc_url.startswith(("http://", "https://")):
        raise ValueError(f"RPC URL must start with http:// or https://: {rpc_url}")
    return rpc_url


def resolve_environment(
    network: Optional[str] = None,
    rpc_url: Optional[str] = None,
) -> Environment:
    """
    Resolve network name and RPC URL.

    Precedence: explicit arguments, then ZKLENSE_NETWORK / ZKLENSE_RPC_URL,
    then the network's preset endpoint.

    Raises:
        ValueError: On an unknown network or a non-http RPC URL
    """
    network = (network or os.environ.get(NETWORK_ENV) or DEFAULT_NETWORK).lower()
    if network not in NETWORKS:
        raise ValueError(
            f"Unknown network: {network} (expected one of: {', '.join(NETWORKS)})"
        )

    rpc_url = rpc_url or os.environ.get(RPC_URL_ENV) or NETWORKS[network]
    return Environment(network=network, rpc_url=validate_rpc_url(rpc_url))
