"""
Theurgy - Command implementations for dymescope.

Each module corresponds to a top-level CLI command:
- balance: Print the wallet address and its SOL balance
- program: Inspect the workspace IDL (instructions, accounts, error codes)
"""
