"""
Deephaven-backed workspaces.

Connects with pydeephaven.Session and runs submitted code as Python on the
server.  A helper installed at connect time captures each fragment's
stdout as the listing stream and the echoed source plus stderr and
tracebacks as the log stream.  Flushing pulls a bounded slice of a buffer
back through a one-row table.
"""

from typing import Optional

from pydeephaven import Session

from iom.factory import ObjectFactory, ServerDef, Workspace


DEFAULT_PORT = 10000

# Installed once per session in the server's global scope.
_HELPER_SCRIPT = '''
import contextlib as _iom_contextlib
import io as _iom_io
import traceback as _iom_traceback
from deephaven import new_table as _iom_new_table
from deephaven.column import string_col as _iom_string_col

_iom_state = {"log": "", "lst": "", "line": 1}

def _iom_submit(code):
    log, lst = _iom_io.StringIO(), _iom_io.StringIO()
    for line in code.splitlines():
        log.write(f"{_iom_state['line']:<6}{line}\\n")
        _iom_state["line"] += 1
    with _iom_contextlib.redirect_stdout(lst), _iom_contextlib.redirect_stderr(log):
        try:
            exec(compile(code, "<submit>", "exec"), globals())
        except Exception:
            _iom_traceback.print_exc()
    _iom_state["log"] += log.getvalue()
    _iom_state["lst"] += lst.getvalue()

def _iom_take(stream, size):
    text = _iom_state[stream][:size]
    _iom_state[stream] = _iom_state[stream][size:]
    return _iom_new_table([_iom_string_col("Text", [text])])
'''

_CHUNK_TABLE = "_iom_chunk"


class DeephavenWorkspace(Workspace):
    """Workspace wrapping a pydeephaven.Session."""

    def __init__(self, session):
        self.session = session
        self.session.run_script(_HELPER_SCRIPT)

    def submit(self, code):
        self.session.run_script(f"_iom_submit({code!r})")

    def flush_log(self, size):
        return self._take("log", size)

    def flush_list(self, size):
        return self._take("lst", size)

    def close(self):
        self.session.close()

    def _take(self, stream, size):
        self.session.run_script(f"{_CHUNK_TABLE} = _iom_take({stream!r}, {int(size)})")
        chunk = self.session.open_table(_CHUNK_TABLE).to_arrow()
        return chunk.column("Text")[0].as_py() or ""


class DeephavenObjectFactory(ObjectFactory):
    """Opens a Deephaven session; Basic auth when credentials are given."""

    def create_object(
        self,
        server_def: ServerDef,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Workspace:
        kwargs = {}
        if username:
            kwargs["auth_type"] = "Basic"
            kwargs["auth_token"] = f"{username}:{password or ''}"
        session = Session(
            host=server_def.machine,
            port=server_def.port or DEFAULT_PORT,
            **kwargs,
        )
        return DeephavenWorkspace(session)
