"""
Single-session client for the analytics server.

connect() opens the one process-wide session, submit() and submit_file()
run code on it, repl() drives it interactively, disconnect() closes it.
"""

from session.batch import output_paths, submit_file
from session.credentials import Credential, resolve_credential
from session.errors import NoActiveSession, SessionAlreadyActive, SessionError
from session.manager import (
    SubmitResult,
    connect,
    current_server,
    current_session,
    disconnect,
    drain,
    is_connected,
    submit,
)
from session.repl import repl

__all__ = [
    "Credential",
    "NoActiveSession",
    "SessionAlreadyActive",
    "SessionError",
    "SubmitResult",
    "connect",
    "current_server",
    "current_session",
    "disconnect",
    "drain",
    "is_connected",
    "output_paths",
    "repl",
    "resolve_credential",
    "submit",
    "submit_file",
]
