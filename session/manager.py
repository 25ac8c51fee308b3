"""
Process-wide session lifecycle: connect, submit, disconnect.

At most one workspace is open per process.  It is held in a module-level
variable, ``None`` when no session is active.

Usage:
    from session import connect, submit, disconnect

    connect("analytics.example.com", 8591, username="alice")
    log, listing = submit("proc means data=sashelp.class; run;")
    disconnect()
"""

from dataclasses import dataclass
from typing import Callable, Optional

from iom.factory import ServerDef, Workspace, create_object
from session import config
from session.credentials import resolve_credential
from session.errors import NoActiveSession, SessionAlreadyActive


_session: Optional[Workspace] = None
_server_def: Optional[ServerDef] = None


@dataclass
class SubmitResult:
    """Log and listing text produced by one submitted unit of code."""
    log: str = ""
    listing: str = ""

    def __iter__(self):
        return iter((self.log, self.listing))


# ── Lifecycle ────────────────────────────────────────────────────────

def connect(
    host=None,
    port=None,
    *,
    username=None,
    password=None,
    local=False,
    protocol=None,
    class_id=None,
    prompt=True,
    verbose=True,
) -> Workspace:
    """Open the process-wide session and return its workspace.

    Local mode connects to ``localhost`` over the ``com`` protocol without
    credentials.  Remote mode prompts for any missing credential part when
    *prompt* is true.

    Raises SessionAlreadyActive if a session is open; the open session is
    left untouched.  Object creation failures propagate as
    ObjectCreationError and leave no session behind.
    """
    global _session, _server_def

    if _session is not None:
        raise SessionAlreadyActive(_server_def)

    if local:
        server_def = ServerDef(
            machine="localhost",
            port=port,
            protocol=protocol or "com",
            class_id=class_id or config.DEFAULT_CLASS_ID,
        )
        username = password = None
    else:
        server_def = ServerDef(
            machine=host or config.DEFAULT_HOST,
            port=port if port is not None else config.DEFAULT_PORT,
            protocol=protocol or config.DEFAULT_PROTOCOL,
            class_id=class_id or config.DEFAULT_CLASS_ID,
        )
        if prompt:
            credential = resolve_credential(username, password)
            username, password = credential.username, credential.password
            del credential

    workspace = create_object(server_def, username, password)
    del username, password

    _session = workspace
    _server_def = server_def
    if verbose:
        print(f"Connected to analytics server at {server_def}")
    return workspace


def disconnect(*, verbose=True) -> None:
    """Close the active session.

    Raises NoActiveSession if nothing is connected.  The handle is cleared
    even when the workspace fails to close; that error propagates.
    """
    global _session, _server_def

    if _session is None:
        raise NoActiveSession("disconnect")

    workspace = _session
    _session = None
    _server_def = None
    workspace.close()
    if verbose:
        print("Session closed.")


def current_session() -> Optional[Workspace]:
    """Return the active workspace, or None."""
    return _session


def current_server() -> Optional[ServerDef]:
    return _server_def


def is_connected() -> bool:
    return _session is not None


def require_session(operation) -> Workspace:
    """Return the active workspace or raise NoActiveSession for *operation*."""
    if _session is None:
        raise NoActiveSession(operation)
    return _session


# ── Output ───────────────────────────────────────────────────────────

def resolve_flush_size(flush_size=None) -> int:
    """Return *flush_size*, or the configured default when it is None.

    Raises ValueError for sizes that are not positive.
    """
    size = config.FLUSH_SIZE if flush_size is None else flush_size
    if size <= 0:
        raise ValueError(f"Flush size must be positive, got {size}")
    return size


def drain(
    flush: Callable[[int], str],
    size: int,
    on_chunk: Optional[Callable[[str], None]] = None,
) -> str:
    """Call ``flush(size)`` until it returns an empty string.

    Returns the concatenation of every chunk in order.  *on_chunk* is called
    with each non-empty chunk as it arrives.
    """
    chunks = []
    while True:
        chunk = flush(size)
        if not chunk:
            break
        chunks.append(chunk)
        if on_chunk is not None:
            on_chunk(chunk)
    return "".join(chunks)


def submit(code: str, *, flush_size=None) -> SubmitResult:
    """Submit *code* to the active session and drain both output streams.

    The log is drained first, then the listing.
    """
    workspace = require_session("submit")
    size = resolve_flush_size(flush_size)

    workspace.submit(code)
    log = drain(workspace.flush_log, size)
    listing = drain(workspace.flush_list, size)
    return SubmitResult(log=log, listing=listing)
