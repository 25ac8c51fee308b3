"""
External boundary to the analytics server's object manager.

Application code talks to ``ServerDef``, ``Workspace`` and ``create_object``.
Concrete backends are looked up by protocol selector.
"""

from iom.factory import (
    ObjectCreationError,
    ObjectFactory,
    ServerDef,
    UnknownProtocol,
    Workspace,
    create_object,
    get_factory,
    register_factory,
    unregister_factory,
)

__all__ = [
    "ObjectCreationError",
    "ObjectFactory",
    "ServerDef",
    "UnknownProtocol",
    "Workspace",
    "create_object",
    "get_factory",
    "register_factory",
    "unregister_factory",
]
