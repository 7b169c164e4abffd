from __future__ import annotations


class ClientInputError(Exception):
    """Base class for request problems the caller can fix.

    Each subclass carries the HTTP status and the user-facing message that the
    exception handlers place in the ``{"error": ...}`` envelope.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedJSONError(ClientInputError):
    def __init__(self, offset: int | None = None) -> None:
        if offset is None:
            message = "body contains badly-formed JSON"
        else:
            message = f"body contains badly-formed JSON (at character {offset})"
        super().__init__(message)
        self.offset = offset


class IncorrectTypeError(ClientInputError):
    def __init__(self, field: str | None = None, offset: int | None = None) -> None:
        if field:
            message = f'body contains incorrect JSON type for field "{field}"'
        else:
            message = f"body contains incorrect JSON type (at character {offset})"
        super().__init__(message)
        self.field = field
        self.offset = offset


class EmptyBodyError(ClientInputError):
    def __init__(self) -> None:
        super().__init__("body cannot be empty")


class UnknownFieldError(ClientInputError):
    def __init__(self, field: str) -> None:
        super().__init__(f'body contains unknown key "{field}"')
        self.field = field


class BodyTooLargeError(ClientInputError):
    status_code = 413

    def __init__(self, limit: int) -> None:
        super().__init__(f"body cannot be larger than {limit} bytes")
        self.limit = limit


class MultipleJSONValuesError(ClientInputError):
    def __init__(self) -> None:
        super().__init__("body can only contain a single json value")


class InvalidIDParameterError(ClientInputError):
    def __init__(self) -> None:
        super().__init__("invalid id parameter")


class InvalidDecodeTargetError(TypeError):
    """Raised when ``read_json`` is handed something that is not a model class.

    A bug in the calling code rather than bad input: it is not a
    ``ClientInputError`` and only reaches the unhandled-error middleware.
    """


class ResponseEncodeError(Exception):
    """The response envelope could not be serialised to JSON."""


class ConfigError(RuntimeError):
    """Required startup configuration is missing or malformed."""
