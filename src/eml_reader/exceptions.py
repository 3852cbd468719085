"""Custom exceptions for the MIME message reader."""


class MimeReadError(Exception):
    """Base exception for all message reading errors."""


class MalformedEnvelopeError(MimeReadError):
    """Exception raised when the header block cannot be split from the body."""


class InvalidMediaTypeError(MimeReadError):
    """Exception raised when a Content-Type value is absent or cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid Content-Type {value!r}: {reason}")
        self.value = value


class InvalidDispositionError(MimeReadError):
    """Exception raised when a Content-Disposition value cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid Content-Disposition {value!r}: {reason}")
        self.value = value


class BlankFilenameError(MimeReadError):
    """Exception raised when a file part resolves to an empty filename."""


class UnknownEncodingError(MimeReadError):
    """Exception raised for an unsupported Content-Transfer-Encoding."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"Unknown part encoding: {encoding}")
        self.encoding = encoding


class BodyDecodeError(MimeReadError):
    """Exception raised when an encoded body is corrupt."""


class MultipartError(MimeReadError):
    """Exception raised when a multipart body cannot be split into parts."""


class MaxDepthExceededError(MimeReadError):
    """Exception raised when multipart nesting exceeds the configured limit."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Multipart nesting exceeds maximum depth of {max_depth}")
        self.max_depth = max_depth
