__all__ = [
    # Provider
    "Connection",
    "Provider",
    "Wallet",
    # Workspace / IDL
    "Idl",
    "IdlError",
    "Program",
    "Workspace",
    "load_idl",
    # Keys
    "get_address",
    "load_keypair",
    # Balance
    "LAMPORTS_PER_SOL",
    "format_sol",
    "lamports_to_sol",
    "report_balance",
    # Errors
    "DymescopeError",
    "ConfigurationError",
    "WorkspaceError",
    "IdlInvalidError",
    "RpcError",
]

from .errors import ConfigurationError, DymescopeError, IdlInvalidError, RpcError, WorkspaceError
from .pneuma.idl import Idl, IdlError, load_idl
from .pneuma.rpc import Connection
from .pneuma.workspace import Program, Workspace
from .provider import Provider, Wallet
from .sigil.keypair import get_address, load_keypair
from .theurgy.balance import report_balance
from .utils import LAMPORTS_PER_SOL, format_sol, lamports_to_sol
