from __future__ import annotations

import re
from decimal import Decimal

LAMPORTS_PER_SOL = 1_000_000_000


def lamports_to_sol(lamports: int) -> Decimal:
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


def format_sol(lamports: int) -> str:
    """Render a lamport amount as a plain SOL decimal, trailing zeros trimmed."""
    text = format(Decimal(lamports).scaleb(-9), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def normalize_program_name(name: str) -> str:
    """Fold ``Utils``, ``utils`` and ``dyme_staking``/``DymeStaking`` to one key."""
    return re.sub(r"[_\-\s]", "", name).lower()


def snake_case(name: str) -> str:
    name = name.replace("-", "_")
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
    return name.lower()


def parse_error_code(value: str) -> int:
    """Parse a custom error code given as decimal or ``0x`` hex."""
    text = value.strip().lower()
    if text.startswith("0x"):
        return int(text, 16)
    return int(text, 10)
