"""
Pneuma - On-chain read layer for dymescope.

Provides the JSON-RPC connection, IDL loading, and Anchor workspace
resolution for the dyme staking program.

Uses httpx + solders instead of the heavyweight solana-py / anchorpy stack.
"""
