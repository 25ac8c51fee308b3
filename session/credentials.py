"""
Credentials for remote connects.

A Credential lives only for the duration of connect(); nothing here
persists or caches it.
"""

import getpass
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    username: str
    password: str = field(repr=False)


def resolve_credential(username=None, password=None, *, ask=None, ask_secret=None):
    """Return a Credential, prompting for whichever part is missing.

    *ask* and *ask_secret* replace ``input`` and ``getpass.getpass`` as the
    username and password prompts.
    """
    ask = ask or input
    ask_secret = ask_secret or getpass.getpass
    if not username:
        username = ask("Username: ").strip()
    if password is None:
        password = ask_secret(f"Password for {username}: ")
    return Credential(username=username, password=password)
