"""
Connection and output defaults.

Each value can be overridden with an environment variable; command-line
options override the environment.
"""

import os

from iom.factory import WORKSPACE_CLASS_ID


DEFAULT_HOST = os.getenv("IOM_HOST", "localhost")
# None lets each object factory apply its own default port
_port = os.getenv("IOM_PORT")
DEFAULT_PORT = int(_port) if _port else None
DEFAULT_PROTOCOL = os.getenv("IOM_PROTOCOL", "bridge")
DEFAULT_CLASS_ID = os.getenv("IOM_CLASS_ID", WORKSPACE_CLASS_ID)

# Upper bound on characters returned by a single flush call
FLUSH_SIZE = int(os.getenv("IOM_FLUSH_SIZE", "100000"))

EXIT_KEYWORD = os.getenv("IOM_EXIT_KEYWORD", "quit")

LOG_SUFFIX = ".log"
LIST_SUFFIX = ".lst"
