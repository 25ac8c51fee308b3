"""
ObjectFactory / Workspace ABCs and the protocol registry.

A ``ServerDef`` names the server the same way the vendor object manager
does: machine, port, protocol selector and class identifier.  The protocol
selector picks which ``ObjectFactory`` builds the workspace.

Concrete factories live in separate modules and are loaded on first use,
so a backend's third-party dependency is only needed when it is selected.
"""

import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional


# Workspace server CLSID registered by the vendor object manager.
WORKSPACE_CLASS_ID = "440196d4-90f0-11d0-9f41-00a024bb830c"

# protocol selector -> "module:Class"
_BUILTIN_FACTORIES = {
    "com": "iom.com_factory:ComObjectFactory",
    "bridge": "iom.com_factory:ComObjectFactory",
    "deephaven": "iom.deephaven_factory:DeephavenObjectFactory",
}

_factories: Dict[str, "ObjectFactory"] = {}


class UnknownProtocol(ValueError):
    """Raised when no factory is registered for a protocol selector."""

    def __init__(self, protocol):
        self.protocol = protocol
        super().__init__(f"No object factory registered for protocol {protocol!r}")


class ObjectCreationError(RuntimeError):
    """Raised when a factory cannot produce a workspace for a ServerDef."""

    def __init__(self, server_def, reason=None):
        self.server_def = server_def
        message = f"Could not create workspace on {server_def}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class ServerDef:
    """Where and how to reach the analytics server."""
    machine: str = "localhost"
    port: Optional[int] = None
    protocol: str = "bridge"
    class_id: str = WORKSPACE_CLASS_ID

    @property
    def is_local(self) -> bool:
        return self.protocol == "com"

    def __str__(self):
        where = self.machine if self.port is None else f"{self.machine}:{self.port}"
        return f"{where} ({self.protocol})"


class Workspace(ABC):
    """Remote execution context on the analytics server.

    Output of submitted code is buffered server-side in two streams, the
    log and the listing.  Each flush returns at most *size* characters of
    what is currently buffered and an empty string once the stream is
    drained.
    """

    @abstractmethod
    def submit(self, code: str) -> None:
        """Send a unit of code for execution."""

    @abstractmethod
    def flush_log(self, size: int) -> str:
        """Return up to *size* characters of buffered log output."""

    @abstractmethod
    def flush_list(self, size: int) -> str:
        """Return up to *size* characters of buffered listing output."""

    @abstractmethod
    def close(self) -> None:
        """Release the remote context."""


class ObjectFactory(ABC):
    """Creates workspaces for one family of protocol selectors."""

    @abstractmethod
    def create_object(
        self,
        server_def: ServerDef,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Workspace:
        """Connect to *server_def* and return a new workspace."""


# ── Registry ─────────────────────────────────────────────────────────

def register_factory(protocol: str, factory: ObjectFactory) -> None:
    """Make *factory* responsible for *protocol*, replacing any previous one."""
    _factories[protocol] = factory


def unregister_factory(protocol: str) -> None:
    _factories.pop(protocol, None)


def get_factory(protocol: str) -> ObjectFactory:
    """Return the factory for *protocol*, loading a built-in on first use."""
    factory = _factories.get(protocol)
    if factory is not None:
        return factory

    target = _BUILTIN_FACTORIES.get(protocol)
    if target is None:
        raise UnknownProtocol(protocol)
    module_name, class_name = target.split(":")
    module = importlib.import_module(module_name)
    factory = getattr(module, class_name)()
    _factories[protocol] = factory
    return factory


def create_object(
    server_def: ServerDef,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> Workspace:
    """Create a workspace through the factory registered for the ServerDef.

    Any failure inside the factory is re-raised as ObjectCreationError with
    the original exception chained as ``__cause__``.
    """
    factory = get_factory(server_def.protocol)
    try:
        workspace = factory.create_object(server_def, username, password)
    except Exception as e:
        raise ObjectCreationError(server_def, str(e)) from e
    if workspace is None:
        raise ObjectCreationError(server_def, "factory returned no object")
    return workspace
