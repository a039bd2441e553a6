"""
zklense: cost and compliance profiler for ZK proof verification
transactions on Solana.
"""

__version__ = "0.1.0"
