"""
Workspaces created through the vendor's COM object manager (pywin32).

The object manager is only available on Windows hosts with the vendor
client installed, so ``win32com`` is imported when a workspace is created
rather than at module import.
"""

from typing import Optional

from iom.factory import ObjectFactory, ServerDef, Workspace


OBJECT_FACTORY_PROGID = "SASObjectManager.ObjectFactoryMulti2"
SERVER_DEF_PROGID = "SASObjectManager.ServerDef"

# ServerDef.Protocol values understood by the object manager
PROTOCOL_NUMBERS = {
    "com": 0,
    "bridge": 2,
}

DEFAULT_BRIDGE_PORT = 8591


class ComWorkspace(Workspace):
    """Workspace backed by a dispatched workspace COM object."""

    def __init__(self, com_object):
        self._obj = com_object
        self._language = com_object.LanguageService

    def submit(self, code):
        self._language.Submit(code)

    def flush_log(self, size):
        return self._language.FlushLog(size) or ""

    def flush_list(self, size):
        return self._language.FlushList(size) or ""

    def close(self):
        self._obj.Close()


class ComObjectFactory(ObjectFactory):
    """Creates workspaces via ``ObjectFactoryMulti2.CreateObjectByServer``."""

    def create_object(
        self,
        server_def: ServerDef,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Workspace:
        import win32com.client

        protocol = PROTOCOL_NUMBERS.get(server_def.protocol)
        if protocol is None:
            raise ValueError(
                f"Protocol {server_def.protocol!r} is not a COM object manager protocol"
            )

        factory = win32com.client.Dispatch(OBJECT_FACTORY_PROGID)
        com_def = win32com.client.Dispatch(SERVER_DEF_PROGID)
        com_def.MachineDNSName = server_def.machine
        com_def.Protocol = protocol
        com_def.ClassIdentifier = server_def.class_id
        if not server_def.is_local:
            com_def.Port = server_def.port or DEFAULT_BRIDGE_PORT

        name = "Local" if server_def.is_local else ""
        com_object = factory.CreateObjectByServer(
            name, True, com_def, username or "", password or ""
        )
        if com_object is None:
            return None
        return ComWorkspace(com_object)
