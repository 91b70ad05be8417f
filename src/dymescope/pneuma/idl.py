"""
IDL Loader - Loads Anchor interface descriptions from ``target/idl``.

Single source of truth: the JSON that ``anchor build`` writes to
``target/idl/<program>.json``. Both the current layout (``address`` +
``metadata.name``) and the legacy one (top-level ``name`` +
``metadata.address``) are accepted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import jsonschema
from jsonschema import FormatChecker

from ..errors import IdlInvalidError, WorkspaceError

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "idl.schema.json"


@dataclass(frozen=True)
class IdlError:
    code: int
    name: str
    msg: str = ""


@dataclass(frozen=True)
class Idl:
    name: str
    version: str
    address: Optional[str]
    instructions: tuple[dict[str, Any], ...]
    accounts: tuple[dict[str, Any], ...]
    types: tuple[dict[str, Any], ...]
    errors: tuple[IdlError, ...]
    data: dict[str, Any] = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Idl":
        validate_idl(payload)
        metadata = payload.get("metadata") or {}
        return cls(
            name=metadata.get("name") or payload["name"],
            version=metadata.get("version") or payload.get("version", ""),
            address=payload.get("address") or metadata.get("address"),
            instructions=tuple(payload.get("instructions", [])),
            accounts=tuple(payload.get("accounts", [])),
            types=tuple(payload.get("types", [])),
            errors=tuple(
                IdlError(code=e["code"], name=e["name"], msg=e.get("msg", ""))
                for e in payload.get("errors", [])
            ),
            data=payload,
        )

    @property
    def instruction_names(self) -> list[str]:
        return [ix["name"] for ix in self.instructions]

    @property
    def account_names(self) -> list[str]:
        return [acc["name"] for acc in self.accounts]

    def error_for_code(self, code: int) -> Optional[IdlError]:
        for error in self.errors:
            if error.code == code:
                return error
        return None


@lru_cache(maxsize=1)
def _validator() -> jsonschema.Validator:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema, format_checker=FormatChecker())


def validate_idl(payload: Any) -> None:
    """
    Validate an IDL document against the bundled schema.

    Raises:
        IdlInvalidError: With one formatted line per schema violation
    """
    errors = sorted(_validator().iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    if errors:
        formatted = []
        for err in errors:
            location = "/".join(str(p) for p in err.path) or "<root>"
            formatted.append(f"{location}: {err.message}")
        raise IdlInvalidError("IDL failed validation: " + "; ".join(formatted), errors=formatted)


@lru_cache(maxsize=16)
def load_idl(path: Path) -> Idl:
    """
    Load and validate an IDL file.

    Args:
        path: Path to ``target/idl/<program>.json``

    Raises:
        WorkspaceError: If the file cannot be read or parsed
        IdlInvalidError: If the document fails schema validation
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise WorkspaceError(f"IDL not found: {path}. Run 'anchor build' first.") from exc
    except json.JSONDecodeError as exc:
        raise IdlInvalidError(f"IDL {path} is not valid JSON: {exc}") from exc

    return Idl.from_dict(payload)
