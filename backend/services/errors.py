"""Request-level errors shared by the chat and generate pipelines.

Ingestion and generation failures live next to the services that raise them
(`services.document`, `llm.base`).
"""


class ValidationError(Exception):
    """Raised when client input is missing or malformed."""

    pass


class PreconditionError(Exception):
    """Raised when the input is valid but required prior state is missing."""

    pass
