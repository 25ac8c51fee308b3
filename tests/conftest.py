"""
Shared fixtures: an in-memory object factory registered under the
``fake`` protocol, and a clean session singleton around every test.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from iom.factory import ObjectFactory, Workspace, register_factory, unregister_factory
from session import manager


class FakeWorkspace(Workspace):
    """Buffers output like the server does and hands it out in slices.

    The log echoes each submitted unit; the listing is whatever
    ``respond(code)`` returns (upper-cased code by default).
    """

    def __init__(self, respond=None):
        self.respond = respond or (lambda code: code.upper())
        self.submitted = []
        self.flush_calls = []
        self.closed = False
        self.fail_close = False
        self._log = ""
        self._lst = ""

    def submit(self, code):
        self.submitted.append(code)
        self._log += code
        self._lst += self.respond(code)

    def flush_log(self, size):
        self.flush_calls.append(("log", size))
        chunk, self._log = self._log[:size], self._log[size:]
        return chunk

    def flush_list(self, size):
        self.flush_calls.append(("lst", size))
        chunk, self._lst = self._lst[:size], self._lst[size:]
        return chunk

    def close(self):
        if self.fail_close:
            raise RuntimeError("server went away")
        self.closed = True


class FakeFactory(ObjectFactory):
    def __init__(self):
        self.created = []
        self.calls = []
        self.error = None
        self.return_none = False

    def create_object(self, server_def, username=None, password=None):
        self.calls.append((server_def, username, password))
        if self.error is not None:
            raise self.error
        if self.return_none:
            return None
        workspace = FakeWorkspace()
        self.created.append(workspace)
        return workspace


@pytest.fixture
def factory():
    fake = FakeFactory()
    register_factory("fake", fake)
    register_factory("com", fake)
    yield fake
    unregister_factory("fake")
    unregister_factory("com")


@pytest.fixture(autouse=True)
def _reset_session():
    yield
    manager._session = None
    manager._server_def = None


@pytest.fixture
def connected(factory):
    """An active session on the fake factory; yields its workspace."""
    return manager.connect(
        "fakehost", 1234, username="alice", password="pw",
        protocol="fake", verbose=False,
    )
