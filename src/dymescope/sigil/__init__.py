"""Sigil - Solana wallet keypairs."""
