"""
Error taxonomy for dymescope.

Every failure a command can report maps to one of these classes; the CLI
turns them into a red ``ERROR:`` line and the class's exit code.
"""

from __future__ import annotations


class DymescopeError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(DymescopeError):
    exit_code = 2


class WorkspaceError(DymescopeError):
    exit_code = 3


class IdlInvalidError(WorkspaceError):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class RpcError(DymescopeError):
    exit_code = 4

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
