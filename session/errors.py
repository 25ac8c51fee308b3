"""Precondition failures raised by the session layer."""


class SessionError(RuntimeError):
    """Base class for session lifecycle errors."""


class NoActiveSession(SessionError):
    """Raised when an operation needs a session and none is connected."""

    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no active session; connect first")


class SessionAlreadyActive(SessionError):
    """Raised by connect() while another session is still open."""

    def __init__(self, server_def):
        self.server_def = server_def
        super().__init__(
            f"A session to {server_def} is already active; disconnect first"
        )
