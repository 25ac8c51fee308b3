"""
Batch mode: submit a program file and write its log and listing beside it.

For ``/work/report.sas`` the outputs are ``/work/report.log`` and
``/work/report.lst``.  Both are truncated at the start of every run and
written chunk by chunk while the streams drain.
"""

import os

from session import config
from session.manager import drain, require_session, resolve_flush_size


def output_paths(path):
    """Return the ``(log_path, lst_path)`` siblings of *path*."""
    stem, _ = os.path.splitext(path)
    return stem + config.LOG_SUFFIX, stem + config.LIST_SUFFIX


def submit_file(path, *, flush_size=None, encoding="utf-8"):
    """Submit the contents of *path* and write ``.log`` / ``.lst`` files.

    Raises NoActiveSession, FileNotFoundError, or ValueError when *path* is
    one of its own outputs, before any output file is touched.  Returns the
    two output paths.
    """
    workspace = require_session("submit a file")
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Program file not found: {path}")

    log_path, lst_path = output_paths(path)
    if _same_file(path, log_path) or _same_file(path, lst_path):
        raise ValueError(f"Program file {path} would be overwritten by its own output")
    size = resolve_flush_size(flush_size)

    with open(path, "r", encoding=encoding) as f:
        code = f.read()

    with open(log_path, "w", encoding=encoding) as log_file, \
            open(lst_path, "w", encoding=encoding) as lst_file:
        workspace.submit(code)
        drain(workspace.flush_log, size, on_chunk=_writer(log_file))
        drain(workspace.flush_list, size, on_chunk=_writer(lst_file))

    return log_path, lst_path


def _writer(f):
    def write(chunk):
        f.write(chunk)
        f.flush()
    return write


def _same_file(a, b):
    return os.path.normcase(os.path.abspath(a)) == os.path.normcase(os.path.abspath(b))
