"""Error types raised by the gateway pipeline."""


class GatewayError(Exception):
    """Base error carrying the message and status returned to the caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StartupConfigMissing(GatewayError):
    """A required setting is absent; the process must not start."""


class MissingFile(GatewayError):
    """A required upload field was not provided."""

    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"No file uploaded in field '{field}'")
        self.field = field


class MissingPrompt(GatewayError):
    """The text endpoint was called without a prompt."""

    status_code = 400

    def __init__(self):
        super().__init__("Field 'prompt' is required")


class InvalidMediaType(GatewayError):
    """The declared media type failed a variant-specific check."""

    status_code = 400


class RemoteCallFailed(GatewayError):
    """The remote model or its transport reported an error."""


class CleanupFailed(GatewayError):
    """A staged upload could not be deleted."""
