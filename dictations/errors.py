"""Error taxonomy for the dictation service.

Each error carries the short, fixed message that is safe to show a client.
Diagnostic detail goes to the log, never into ``public_message``.
"""


class DictationError(Exception):
    status_code = 500
    public_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ClientInputError(DictationError):
    """Missing or malformed request input. The message is shown verbatim."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class AuthenticationError(DictationError):
    status_code = 401
    public_message = "Unauthorized"


class ClassificationError(DictationError):
    status_code = 502
    public_message = "Classification failed"


class StorageError(DictationError):
    status_code = 503
    public_message = "Storage unavailable"
